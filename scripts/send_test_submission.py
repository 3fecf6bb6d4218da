#!/usr/bin/env python3
"""
Dev helper: send a test form submission to a running formrelay backend.

Posts either a contact message (JSON) or a job application (multipart, with a
resume file) and prints the response envelope.

Usage
-----
# Contact form, targeting localhost:3000
python scripts/send_test_submission.py contact

# Career form with a generated one-page PDF
python scripts/send_test_submission.py career

# Career form with a real resume
python scripts/send_test_submission.py career --file path/to/cv.docx

# Target a different backend URL
python scripts/send_test_submission.py contact --url http://staging.example.com

# Print what would be sent without sending it
python scripts/send_test_submission.py career --dry-run
"""

import argparse
import json
import sys
import textwrap
from pathlib import Path

import httpx

_CONTENT_TYPES = {
    ".pdf": "application/pdf",
    ".doc": "application/msword",
    ".docx": "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
}


def _detect_content_type(filename: str) -> str:
    return _CONTENT_TYPES.get(Path(filename).suffix.lower(), "application/octet-stream")


def _make_sample_pdf() -> bytes:
    """Return a tiny (not strictly valid) PDF that passes the type check."""
    return (
        b"%PDF-1.4\n"
        b"1 0 obj << /Type /Catalog >> endobj\n"
        b"trailer << /Root 1 0 R >>\n"
        b"%%EOF\n"
    )


def _print_response(response: httpx.Response) -> None:
    status = response.status_code
    symbol = "OK" if status == 200 else "FAIL"
    print(f"\n[{symbol}] HTTP {status}")
    try:
        print(json.dumps(response.json(), indent=2))
    except ValueError:
        print(response.text)


def _send_contact(args: argparse.Namespace) -> int:
    payload = {"name": args.name, "email": args.email, "message": args.message}
    endpoint = f"{args.url.rstrip('/')}/send-email"

    print(f"Endpoint : {endpoint}")
    print(json.dumps(payload, indent=2))
    if args.dry_run:
        return 0

    response = httpx.post(endpoint, json=payload, timeout=30)
    _print_response(response)
    return 0 if response.status_code == 200 else 1


def _send_career(args: argparse.Namespace) -> int:
    if args.file:
        file_path = Path(args.file)
        if not file_path.exists():
            print(f"ERROR: File not found: {file_path}", file=sys.stderr)
            return 1
        content = file_path.read_bytes()
        filename = file_path.name
    else:
        content = _make_sample_pdf()
        filename = "sample_resume.pdf"

    content_type = _detect_content_type(filename)
    form = {
        "name": args.name,
        "email": args.email,
        "phone": args.phone,
        "jobRole": args.job_role,
        "experience": args.experience,
        "message": args.message,
    }
    endpoint = f"{args.url.rstrip('/')}/send-career-email"

    print(f"Endpoint : {endpoint}")
    print(f"Resume   : {filename} ({content_type}, {len(content):,} bytes)")
    print(json.dumps(form, indent=2))
    if args.dry_run:
        return 0

    response = httpx.post(
        endpoint,
        data=form,
        files={"resume": (filename, content, content_type)},
        timeout=60,
    )
    _print_response(response)
    return 0 if response.status_code == 200 else 1


def main() -> int:
    parser = argparse.ArgumentParser(
        prog="send_test_submission.py",
        description="Send a test contact or career submission to the formrelay backend.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=textwrap.dedent("""\
            Examples:
              python scripts/send_test_submission.py contact
              python scripts/send_test_submission.py career --file exports/cv.pdf
              python scripts/send_test_submission.py career --url http://localhost:8000
        """),
    )
    parser.add_argument("form", choices=["contact", "career"], help="Which form to submit")
    parser.add_argument(
        "--url",
        default="http://localhost:3000",
        help="Backend base URL (default: http://localhost:3000)",
    )
    parser.add_argument("--name", default="Test Applicant")
    parser.add_argument("--email", default="applicant@example.com")
    parser.add_argument("--message", default="This is a test submission.")
    parser.add_argument("--phone", default="555-0100", help="Career form only")
    parser.add_argument("--job-role", default="Software Engineer", help="Career form only")
    parser.add_argument("--experience", default="3", help="Career form only")
    parser.add_argument(
        "--file",
        default=None,
        metavar="PATH",
        help="Resume to attach (career form). A sample PDF is used if omitted.",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the request without sending it.",
    )

    args = parser.parse_args()

    try:
        if args.form == "contact":
            return _send_contact(args)
        return _send_career(args)
    except httpx.HTTPError as e:
        print(f"ERROR: Request failed: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
