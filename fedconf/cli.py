"""fedconf CLI - Command-line interface for federation config validation.

This module provides command-line tools for:
- Validating FederatedTypeConfig and KubeFedConfig documents
- Listing the known feature gates

Example:
    # Validate every document in a file
    fedconf validate --file deploy/federation.yaml

    # Validate only the status of FederatedTypeConfig documents, as JSON
    fedconf validate --file ftc.yaml --status --json

    # List feature gates
    fedconf features
"""

import argparse
import json
import logging
import sys
from typing import Any

from fedconf.config.loader import load_documents
from fedconf.config.settings import load_settings
from fedconf.core.features import DEFAULT_FEATURE_GATES, known_feature_names
from fedconf.errors import ConfigLoadError, SettingsError
from fedconf.observability.logging import configure_logging
from fedconf.validation.documents import validate_document
from fedconf.validation.field import format_errors

logger = logging.getLogger(__name__)


# =============================================================================
# Commands
# =============================================================================


def validate_command(args: argparse.Namespace) -> int:
    """Validate every document in a config file.

    Args:
        args: Parsed command-line arguments with 'file', 'status', 'json' and
            'jitter_factor' attributes

    Returns:
        Exit code (0 when every document is valid, 1 otherwise)
    """
    try:
        settings = load_settings(jitter_factor=args.jitter_factor)
        documents = load_documents(args.file)
    except (ConfigLoadError, SettingsError) as e:
        logger.error("%s", e.message)
        if args.json:
            print(json.dumps({"valid": False, "error": e.to_details().to_dict()}, indent=2))
        else:
            print(f"ERROR: {e.message}", file=sys.stderr)
        return 1

    report: list[dict[str, Any]] = []
    has_errors = False
    for document in documents:
        errs = validate_document(document, settings=settings, status_subresource=args.status)
        has_errors = has_errors or bool(errs)
        logger.info(
            "Validated %s %r: %d violation(s)",
            document.kind,
            document.name,
            len(errs),
            extra={"document": document.name, "kind": document.kind, "violations": len(errs)},
        )
        report.append(
            {
                "kind": document.kind,
                "name": document.name,
                "valid": not errs,
                "errors": [error.to_dict() for error in errs],
            }
        )

        if not args.json:
            header = f"{document.kind} {document.name!r}"
            if errs:
                print(f"{header}: INVALID")
                print(format_errors(errs))
            else:
                print(f"{header}: OK")

    if args.json:
        print(json.dumps({"valid": not has_errors, "documents": report}, indent=2))

    return 1 if has_errors else 0


def features_command(args: argparse.Namespace) -> int:
    """List known feature gates with their defaults."""
    rows = []
    for feature, spec in DEFAULT_FEATURE_GATES.items():
        rows.append(
            {"name": feature.value, "default": spec.default, "maturity": spec.maturity.value}
        )

    if args.json:
        print(json.dumps(rows, indent=2))
        return 0

    for name in known_feature_names():
        row = next(r for r in rows if r["name"] == name)
        state = "enabled" if row["default"] else "disabled"
        print(f"{name}\t{row['maturity']}\t{state} by default")
    return 0


# =============================================================================
# Parser
# =============================================================================


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser.

    Returns:
        Configured ArgumentParser
    """
    parser = argparse.ArgumentParser(
        prog="fedconf",
        description="fedconf - Validate federation configuration documents",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Validate a file of FederatedTypeConfig / KubeFedConfig documents
  fedconf validate --file federation.yaml

  # Validate the status sub-resource only
  fedconf validate --file ftc.yaml --status

  # List known feature gates
  fedconf features
        """,
    )

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
        help="Set logging level (default: WARNING)",
    )
    parser.add_argument(
        "--log-format",
        choices=["text", "json"],
        default="text",
        help="Log output format (default: text)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    validate_parser = subparsers.add_parser("validate", help="Validate configuration documents")
    validate_parser.add_argument("--file", "-f", required=True, help="Path to YAML file")
    validate_parser.add_argument(
        "--status",
        action="store_true",
        help="Validate the status sub-resource of FederatedTypeConfig documents",
    )
    validate_parser.add_argument("--json", action="store_true", help="Emit a JSON report")
    validate_parser.add_argument(
        "--jitter-factor",
        type=float,
        default=None,
        help="Leader election jitter factor (default: FEDCONF_JITTER_FACTOR or 1.2)",
    )
    validate_parser.set_defaults(func=validate_command)

    features_parser = subparsers.add_parser("features", help="List known feature gates")
    features_parser.add_argument("--json", action="store_true", help="Emit JSON")
    features_parser.set_defaults(func=features_command)

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI.

    Returns:
        Exit code (0 for success, non-zero for failure)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    configure_logging(args.log_level, json_format=args.log_format == "json")

    if not hasattr(args, "func"):
        parser.print_help()
        return 1

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
