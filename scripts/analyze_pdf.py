#!/usr/bin/env python3
"""
Upload a PDF to a running analyzer and print the analysis as it streams.

Usage:
    uv run python scripts/analyze_pdf.py data/samples/site_visit_report.pdf
    uv run python scripts/analyze_pdf.py report.pdf --url http://localhost:8000 --buffered

Whatever was streamed before an error stays on screen; the error is
printed after it.
"""

import argparse
import sys
from pathlib import Path

import httpx

from app.services.stream_reader import StreamAccumulator

# Slightly above the server's 240s stream ceiling
READ_TIMEOUT_SECONDS = 300.0


def _print_error(response: httpx.Response) -> None:
    try:
        body = response.json()
    except ValueError:
        print(f"Error {response.status_code}: {response.text}", file=sys.stderr)
        return
    message = body.get("error", "Error processing file")
    details = body.get("details")
    print(f"Error {response.status_code}: {message}", file=sys.stderr)
    if details:
        print(f"  {details}", file=sys.stderr)


def analyze(pdf_path: Path, base_url: str, buffered: bool) -> int:
    timeout = httpx.Timeout(READ_TIMEOUT_SECONDS, connect=10.0)
    url = f"{base_url.rstrip('/')}/api/analyze"
    params = {"mode": "buffered" if buffered else "stream"}

    with httpx.Client(timeout=timeout) as client, pdf_path.open("rb") as fh:
        files = {"file": (pdf_path.name, fh, "application/pdf")}

        if buffered:
            response = client.post(url, params=params, files=files)
            if response.status_code != 200:
                _print_error(response)
                return 1
            body = response.json()
            print(body["analysis"])
            print(f"\n[{body['textLength']} characters extracted]", file=sys.stderr)
            return 0

        accumulator = StreamAccumulator(
            on_content=lambda piece: print(piece, end="", flush=True),
        )
        try:
            with client.stream("POST", url, params=params, files=files) as response:
                if response.status_code != 200:
                    response.read()
                    _print_error(response)
                    return 1
                for line in response.iter_lines():
                    accumulator.feed_line(line)
        except httpx.HTTPError as exc:
            print(f"\nError: stream interrupted ({exc})", file=sys.stderr)
            return 1

    print()
    if not accumulator.done:
        print("Error: stream ended without completion marker", file=sys.stderr)
        return 1
    if accumulator.skipped_frames:
        print(f"[{accumulator.skipped_frames} malformed frames skipped]", file=sys.stderr)
    return 0


def main() -> None:
    parser = argparse.ArgumentParser(description="Run a GCP gap analysis on a PDF")
    parser.add_argument("pdf", type=Path, help="PDF file to analyze")
    parser.add_argument("--url", default="http://localhost:8000", help="Analyzer base URL")
    parser.add_argument(
        "--buffered", action="store_true", help="Wait for the full analysis instead of streaming",
    )
    args = parser.parse_args()

    if not args.pdf.is_file():
        parser.error(f"file not found: {args.pdf}")

    sys.exit(analyze(args.pdf, args.url, args.buffered))


if __name__ == "__main__":
    main()
