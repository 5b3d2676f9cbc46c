#!/usr/bin/env python3
"""
CLI interface for the validation engine.

Usage:
    focusguard-check url "https://www.youtube.com/watch?v=dQw4w9WgXcQ"
    focusguard-check file --name clip.mp4 --size 1048576 --type video/mp4
    focusguard-check text "<b>hello</b>" --kind text
    focusguard-check token --length 48
    focusguard-check embed dQw4w9WgXcQ

    # Or using Python module:
    python -m focusguard.cli url "https://youtu.be/dQw4w9WgXcQ"

Results are printed as JSON. Exit status is 0 when the input is accepted,
1 when it is rejected and 2 on usage errors.
"""

import argparse
import json
import sys
from typing import Any, Dict, List, Optional

from focusguard.core.security import (
    FileCandidate,
    InputKind,
    InvalidReferenceError,
    MAX_TOKEN_LENGTH,
    ValidationFacade,
    ValidationResult,
    load_security_policy,
)

CLI_IDENTIFIER = "cli"


def _result_payload(result: ValidationResult) -> Dict[str, Any]:
    return {
        "accepted": result.accepted,
        "sanitized": result.sanitized_value,
        "errors": [code.value for code in result.errors],
    }


def _emit(payload: Dict[str, Any]) -> None:
    print(json.dumps(payload, indent=2))


def cmd_url(facade: ValidationFacade, args: argparse.Namespace) -> int:
    result = facade.validate_submission(args.url, CLI_IDENTIFIER)
    payload = _result_payload(result)
    payload["reference"] = result.reference
    payload["embed_url"] = facade.build_embed_url(result.reference) if result.reference else None
    _emit(payload)
    return 0 if result.accepted else 1


def cmd_file(facade: ValidationFacade, args: argparse.Namespace) -> int:
    candidate = None
    if args.name is not None or args.size is not None or args.type is not None:
        candidate = FileCandidate(
            declared_size=args.size if args.size is not None else 0,
            declared_mime_type=args.type or "",
            name=args.name or "",
        )
    result = facade.validate_file_upload(candidate)
    _emit(_result_payload(result))
    return 0 if result.accepted else 1


def cmd_text(facade: ValidationFacade, args: argparse.Namespace) -> int:
    result = facade.validate_text(args.value, InputKind(args.kind))
    _emit(_result_payload(result))
    return 0 if result.accepted else 1


def cmd_token(facade: ValidationFacade, args: argparse.Namespace) -> int:
    token = facade.generate_token(args.length)
    _emit({"token": token.value, "strength": token.strength.value})
    return 0


def cmd_embed(facade: ValidationFacade, args: argparse.Namespace) -> int:
    try:
        embed_url = facade.build_embed_url(args.reference)
    except InvalidReferenceError as e:
        _emit({"error": e.code.value, "detail": e.message})
        return 1
    _emit({"reference": args.reference, "embed_url": embed_url})
    return 0


def _token_length(value: str) -> int:
    length = int(value)
    if not 1 <= length <= MAX_TOKEN_LENGTH:
        raise argparse.ArgumentTypeError(f"length must be between 1 and {MAX_TOKEN_LENGTH}")
    return length


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="focusguard-check",
        description="Validate video links, uploads and free text against the security policy.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    url_parser = subparsers.add_parser("url", help="Validate a video link submission")
    url_parser.add_argument("url", help="Link to validate")
    url_parser.set_defaults(handler=cmd_url)

    file_parser = subparsers.add_parser("file", help="Validate declared upload metadata")
    file_parser.add_argument("--name", help="Declared filename")
    file_parser.add_argument("--size", type=int, help="Declared size in bytes")
    file_parser.add_argument("--type", help="Declared MIME type")
    file_parser.set_defaults(handler=cmd_file)

    text_parser = subparsers.add_parser("text", help="Validate and sanitize free-form input")
    text_parser.add_argument("value", help="Input to validate")
    text_parser.add_argument(
        "--kind",
        choices=[kind.value for kind in InputKind],
        default=InputKind.TEXT.value,
        help="Input class (default: text)",
    )
    text_parser.set_defaults(handler=cmd_text)

    token_parser = subparsers.add_parser("token", help="Generate a random token")
    token_parser.add_argument("--length", type=_token_length, default=32, help="Token length (default: 32)")
    token_parser.set_defaults(handler=cmd_token)

    embed_parser = subparsers.add_parser("embed", help="Build the embed URL for a video ID")
    embed_parser.add_argument("reference", help="11 character video ID")
    embed_parser.set_defaults(handler=cmd_embed)

    return parser


def main(argv: Optional[List[str]] = None, facade: Optional[ValidationFacade] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if facade is None:
        facade = ValidationFacade(policy=load_security_policy())
    return args.handler(facade, args)


if __name__ == "__main__":
    sys.exit(main())
