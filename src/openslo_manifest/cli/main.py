"""
openslo-manifest CLI — check and format OpenSLO SLO manifests.

Usage:
    python -m openslo_manifest.cli.main validate slo.yaml [more.yaml ...]
    python -m openslo_manifest.cli.main fmt slo.yaml [--write]
    python -m openslo_manifest.cli.main kind
    python -m openslo_manifest.cli.main version

Reports go to stdout; decode and I/O errors go to stderr.
"""

import argparse
import logging
import sys
from typing import List, Optional

from openslo_manifest import __version__
from openslo_manifest.codec import encode_slo, load_slo
from openslo_manifest.config import CodecOptions
from openslo_manifest.errors import DecodeError, ManifestValidationError
from openslo_manifest.v1 import SLO, Violation, validate_slo

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_INVALID = 1
EXIT_DECODE_ERROR = 2
EXIT_IO_ERROR = 3


def _report(path: str, violations: List[Violation]) -> None:
    print(f"{path}: {len(violations)} violation(s)")
    for violation in violations:
        print(f"  - {violation}")


def _validate(paths: List[str]) -> int:
    status = EXIT_OK
    for path in paths:
        try:
            slo = load_slo(path)
        except DecodeError as exc:
            print(f"{path}: decode error: {exc}", file=sys.stderr)
            status = EXIT_DECODE_ERROR
            continue
        violations = validate_slo(slo)
        if not violations:
            print(f"{path}: OK")
            continue
        _report(path, violations)
        status = max(status, EXIT_INVALID)
    return status


def _fmt(path: str, write: bool, check: bool) -> int:
    try:
        slo = load_slo(path)
    except DecodeError as exc:
        print(f"{path}: decode error: {exc}", file=sys.stderr)
        return EXIT_DECODE_ERROR
    try:
        output = encode_slo(slo, CodecOptions(validate_on_encode=check))
    except ManifestValidationError as exc:
        _report(path, exc.violations)
        return EXIT_INVALID
    if not write:
        sys.stdout.write(output)
        return EXIT_OK
    try:
        with open(path, "w", encoding="utf-8") as f:
            f.write(output)
    except OSError as exc:
        print(f"{path}: cannot write: {exc}", file=sys.stderr)
        return EXIT_IO_ERROR
    logger.info("Formatted %s", path)
    return EXIT_OK


def cli(args: Optional[List[str]] = None) -> int:
    """Main CLI entry point. Returns exit code."""
    parser = argparse.ArgumentParser(
        prog="openslo-manifest",
        description="Validate and format OpenSLO SLO manifests",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command")

    validate_parser = subparsers.add_parser("validate", help="Validate SLO manifests")
    validate_parser.add_argument("files", nargs="+", help="Manifest files")

    fmt_parser = subparsers.add_parser("fmt", help="Print a manifest in canonical form")
    fmt_parser.add_argument("file", help="Manifest file")
    fmt_parser.add_argument("--write", action="store_true", help="Rewrite the file in place")
    fmt_parser.add_argument(
        "--no-validate", action="store_true", help="Format even if the manifest is invalid"
    )

    subparsers.add_parser("kind", help="Show the manifest kind handled")
    subparsers.add_parser("version", help="Show version")

    parsed = parser.parse_args(args)

    logging.basicConfig(
        level=logging.DEBUG if parsed.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if parsed.command == "version":
        print(f"openslo-manifest {__version__}")
        return EXIT_OK

    if parsed.command == "kind":
        print(SLO.manifest_kind())
        return EXIT_OK

    if parsed.command == "validate":
        return _validate(parsed.files)

    if parsed.command == "fmt":
        return _fmt(parsed.file, write=parsed.write, check=not parsed.no_validate)

    parser.print_help()
    return 1


def main() -> None:
    sys.exit(cli())


if __name__ == "__main__":
    main()
