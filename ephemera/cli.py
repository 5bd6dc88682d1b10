"""
Command Line Client

Usage:
    ephemera-cli upload -t <token> [-e <seconds>] [--host <url>] <file> [<file> ...]
    ephemera-cli generate [-l <length>]

``upload`` sends files to a running server through ``POST /api/v1/files``.
``generate`` prints a random token suitable for the auth config file.
"""

import argparse
import json
import mimetypes
import os
import secrets
import string
import sys
from pathlib import Path
from typing import List, Optional

import httpx

DEFAULT_HOST = "http://localhost:8000"
UPLOAD_PATH = "/api/v1/files"
DEFAULT_TIMEOUT = 30.0

TOKEN_CHARSET = string.ascii_letters + string.digits + "_-+?!#$&%"
DEFAULT_TOKEN_LENGTH = 32
MIN_TOKEN_LENGTH = 2


class UploadError(Exception):
    """Raised when the server did not accept an upload."""


def generate_token(length: int = DEFAULT_TOKEN_LENGTH) -> str:
    """
    Generate a random auth token.

    Args:
        length: Number of characters

    Returns:
        Token drawn from TOKEN_CHARSET

    Raises:
        ValueError: If length is below MIN_TOKEN_LENGTH
    """
    if length < MIN_TOKEN_LENGTH:
        raise ValueError(
            f"You cannot generate a token with this length. Must be >={MIN_TOKEN_LENGTH}."
        )
    return "".join(secrets.choice(TOKEN_CHARSET) for _ in range(length))


def normalize_host(host: str) -> str:
    """Default to https when no scheme is given."""
    if not host.startswith("http"):
        host = "https://" + host
    return host.rstrip("/")


def upload_file(client: httpx.Client, path: Path, expires: int = -1) -> str:
    """
    Upload one file.

    Args:
        client: Client bound to the server's base URL and token
        path: Local file
        expires: Seconds until expiry, -1 for never

    Returns:
        The id the server assigned

    Raises:
        UploadError: If the file cannot be read or the server rejects it
    """
    content_type = mimetypes.guess_type(path.name)[0] or "application/octet-stream"
    metadata = json.dumps({"expiration": expires})

    try:
        with path.open("rb") as fh:
            response = client.post(
                UPLOAD_PATH,
                files={"file": (path.name, fh, content_type)},
                data={"metadata": metadata},
            )
        response.raise_for_status()
        return response.json()["id"]
    except OSError as e:
        raise UploadError(f"could not open file: {e}") from e
    except httpx.HTTPStatusError as e:
        raise UploadError(
            f"bad status code: {e.response.status_code} - {e.response.text}"
        ) from e
    except httpx.RequestError as e:
        raise UploadError(f"Request failed: {e}") from e
    except (ValueError, KeyError) as e:
        raise UploadError(f"unexpected response: {e}") from e


def _run_upload(args: argparse.Namespace) -> int:
    host = normalize_host(args.host)

    with httpx.Client(
        base_url=host,
        headers={"Authorization": f"Bearer {args.token}"},
        timeout=args.timeout,
    ) as client:
        for name in args.files:
            try:
                file_id = upload_file(client, Path(name), args.expires)
            except UploadError as e:
                print(f"could not upload file {name}: {e}", file=sys.stderr)
                return 1
            print(f"Uploaded file {name} to {host}/{file_id}")

    return 0


def _run_generate(args: argparse.Namespace) -> int:
    try:
        print(generate_token(args.length))
    except ValueError as e:
        print(e, file=sys.stderr)
        return 1
    return 0


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser for the CLI"""
    parser = argparse.ArgumentParser(
        prog="ephemera-cli",
        description="Tool to upload local files to an ephemera server.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    upload = subparsers.add_parser("upload", help="Uploads files to the server")
    upload.add_argument("files", nargs="+", metavar="file", help="Files to upload")
    upload.add_argument(
        "--host",
        default=os.environ.get("EPHEMERA_HOST", DEFAULT_HOST),
        help=f"Server to upload to (default: {DEFAULT_HOST})",
    )
    upload.add_argument(
        "-t", "--token",
        default=os.environ.get("EPHEMERA_TOKEN", ""),
        help="Token used for authorization",
    )
    upload.add_argument(
        "-e", "--expires",
        type=int,
        default=-1,
        help="Time in seconds when the file should expire. -1 = never.",
    )
    upload.add_argument("--timeout", type=float, default=DEFAULT_TIMEOUT, help=argparse.SUPPRESS)
    upload.set_defaults(handler=_run_upload)

    generate = subparsers.add_parser("generate", aliases=["gen"], help="Generates a possible auth token")
    generate.add_argument(
        "-l", "--length",
        type=int,
        default=DEFAULT_TOKEN_LENGTH,
        help="Length of the token",
    )
    generate.set_defaults(handler=_run_generate)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = create_parser().parse_args(argv)
    return args.handler(args)


if __name__ == "__main__":
    sys.exit(main())
