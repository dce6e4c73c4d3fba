from __future__ import annotations

import argparse
import logging
import sys
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import find_dotenv, load_dotenv

from teamprov.adapters.template_file import TemplateFileError, load_template_file
from teamprov.app import provision_from_file
from teamprov.config import (
    ConfigurationError,
    build_graph_resilience,
    configure_logging,
    get_graph_config,
    optional_env_float,
)
from teamprov.config.graph import GRAPH_TIMEOUT_SECONDS

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

    from teamprov.config import GraphConfig

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Provision Microsoft Teams from a template file")
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log debug output, including every Graph request that fails",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    apply = subparsers.add_parser("apply", help="Provision the teams declared in a template file")
    apply.add_argument("file", type=str, help="Path to the JSON template file")
    apply.add_argument(
        "--param",
        dest="params",
        action="append",
        default=[],
        metavar="NAME=VALUE",
        help="Value for a {parameter:NAME} token (repeatable, overrides file defaults)",
    )
    apply.add_argument(
        "--access-token",
        type=str,
        help="Graph bearer token (defaults to GRAPH_ACCESS_TOKEN)",
    )
    apply.add_argument(
        "--base-url",
        type=str,
        help="Graph base URL (defaults to GRAPH_BASE_URL or the beta endpoint)",
    )

    validate = subparsers.add_parser("validate", help="Check a template file without provisioning")
    validate.add_argument("file", type=str, help="Path to the JSON template file")

    return parser.parse_args(list(argv))


def _parse_parameters(values: Sequence[str]) -> dict[str, str]:
    parameters: dict[str, str] = {}
    for value in values:
        name, separator, parameter_value = value.partition("=")
        if not separator or not name.strip():
            raise ValueError(f"Invalid --param {value!r}, expected NAME=VALUE")
        parameters[name.strip()] = parameter_value
    return parameters


def _build_config(args: argparse.Namespace) -> GraphConfig:
    resilience = None
    if args.base_url:
        resilience = build_graph_resilience(
            base_url=args.base_url,
            timeout_seconds=optional_env_float("GRAPH_TIMEOUT_SECONDS", GRAPH_TIMEOUT_SECONDS),
        )
    return get_graph_config(access_token=args.access_token, resilience=resilience)


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    configure_logging()
    parsed_args: argparse.Namespace
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    try:
        parsed_args = _parse_args(args_list)
        if parsed_args.verbose:
            configure_logging(level=logging.DEBUG, force=True)
        if parsed_args.command == "validate":
            template = load_template_file(parsed_args.file)
            log.info(
                "Template %s is valid: team_templates=%s, teams=%s",
                parsed_args.file,
                len(template.section.team_templates),
                len(template.section.teams),
            )
            return
        parameters = _parse_parameters(parsed_args.params)
        config = _build_config(parsed_args)
    except (ValueError, ConfigurationError):
        log.exception("CLI validation error")
        sys.exit(2)

    try:
        report = provision_from_file(parsed_args.file, parameters=parameters, config=config)
    except TemplateFileError:
        log.exception("Invalid template file")
        sys.exit(2)
    except Exception:
        log.exception("Fatal error during provisioning")
        sys.exit(1)

    if report.failed:
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run(argv: Sequence[str] | None = None) -> None:
    """Console script entry point: load ``.env`` from the working directory first."""
    load_dotenv(find_dotenv(usecwd=True))
    signal(SIGINT, sigint_handler)
    main(argv)


if __name__ == "__main__":
    run()
