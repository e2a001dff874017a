# Copyright 2025 Amazon.com, Inc. or its affiliates.
# SPDX-License-Identifier: Apache-2.0

"""
Command-line interface for the bfsg_audit package.

This module provides the ``bfsg-audit`` command, which audits local HTML
files (or standard input) and prints an accessibility report.

Exit codes:
    0: every input is accessible
    1: accessibility violations were found
    2: usage, configuration or document errors, or an analyzer failed
"""

import argparse
import logging
import os
import sys
from typing import Any, Dict, List, Optional

from bfsg_audit import __version__
from bfsg_audit.api import create_auditor
from bfsg_audit.audit.report_generator import filter_violations, generate_report
from bfsg_audit.audit.standards import SEVERITY_LEVELS
from bfsg_audit.utils.config import (
    ANALYZER_KEYS,
    COMPLIANCE_LEVELS,
    REPORT_FORMATS,
    config_manager,
    load_config_file,
    save_config,
    validate_checks,
)
from bfsg_audit.utils.logging_helper import (
    AccessibilityAuditError,
    BfsgAuditError,
    ConfigurationError,
    set_package_level,
    setup_logger,
)

# Set up module-level logger
logger = setup_logger(__name__)

EXIT_OK = 0
EXIT_VIOLATIONS = 1
EXIT_ERROR = 2

STDIN_INPUT = "-"


def configure_logging(debug: bool = False, quiet: bool = False) -> None:
    """Configure logging based on debug and quiet flags."""
    if quiet:
        level = logging.ERROR
    elif debug:
        level = logging.DEBUG
    else:
        level = logging.INFO

    # Force the level on all bfsg_audit loggers
    set_package_level(level)


def _add_standardized_arguments(parser: argparse.ArgumentParser) -> None:
    """Add input, output and logging arguments."""
    parser.add_argument(
        "inputs",
        nargs="*",
        metavar="INPUT",
        help=f"HTML files to audit; '{STDIN_INPUT}' reads from standard input",
    )
    parser.add_argument(
        "--output",
        "-o",
        help="Write the report to this file instead of standard output",
    )

    # Common options
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    parser.add_argument(
        "--quiet",
        "-q",
        action="store_true",
        help="Only output reports, suppress other output",
    )
    parser.add_argument("--config", "-c", help="Path to configuration file (YAML or JSON)")
    parser.add_argument(
        "--save-config",
        metavar="CONFIG_PATH",
        help="Save the resolved audit configuration to the specified file path",
    )


def _add_audit_arguments(parser: argparse.ArgumentParser) -> None:
    """Add accessibility audit arguments."""
    parser.add_argument(
        "--format",
        "-f",
        choices=REPORT_FORMATS,
        help="Output format for the audit report (default: text)",
    )
    parser.add_argument(
        "--level",
        choices=COMPLIANCE_LEVELS,
        help="WCAG compliance level for the contrast threshold (default: AA)",
    )
    parser.add_argument(
        "--checks",
        help=f"Comma-separated list of checks to run ({', '.join(ANALYZER_KEYS)})",
    )
    parser.add_argument("--disable", help="Comma-separated list of checks to skip")
    parser.add_argument(
        "--severity",
        choices=list(SEVERITY_LEVELS),
        help="Minimum severity level to include in report (default: notice)",
    )
    parser.add_argument(
        "--detailed",
        action="store_true",
        help="Include element details in text reports",
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the command-line argument parser."""
    parser = argparse.ArgumentParser(
        prog="bfsg-audit",
        description="Check HTML documents for BFSG/WCAG accessibility violations.",
    )

    _add_standardized_arguments(parser)
    _add_audit_arguments(parser)

    # Version information
    parser.add_argument(
        "--version", action="store_true", help="Show version information"
    )

    return parser


def _split_list(value: Optional[str]) -> List[str]:
    if not value:
        return []
    return [item.strip() for item in value.split(",") if item.strip()]


def build_options(args: Dict[str, Any]) -> Dict[str, Any]:
    """
    Translate command-line arguments into audit option overrides.

    Raises:
        ConfigurationError: If a check name is unknown
    """
    options: Dict[str, Any] = {}

    if args.get("format"):
        options["report_format"] = args["format"]
    if args.get("level"):
        options["compliance_level"] = args["level"]
    if args.get("severity"):
        options["severity_threshold"] = args["severity"]
    if args.get("detailed"):
        options["detailed"] = True

    checks: Dict[str, bool] = {}
    selected = _split_list(args.get("checks"))
    if selected:
        validate_checks({name: True for name in selected})
        checks.update({key: key in selected for key in ANALYZER_KEYS})
    disabled = _split_list(args.get("disable"))
    if disabled:
        validate_checks({name: False for name in disabled})
        checks.update({name: False for name in disabled})
    if checks:
        options["checks"] = checks

    return options


def load_configuration(config_path: str) -> None:
    """
    Load a configuration file into the shared configuration manager.

    The file may hold an ``audit`` section or the audit options at the top
    level.

    Raises:
        ConfigurationError: If the file cannot be loaded or the ``audit``
            section is not a mapping
    """
    logger.info(f"Loading configuration from {config_path}")
    config_data = load_config_file(config_path)
    section = config_data.get("audit", config_data)
    if section is None:
        # An empty "audit:" key in YAML
        section = {}
    if not isinstance(section, dict):
        raise ConfigurationError(
            f"The audit section of {config_path} must be a mapping, "
            f"got {type(section).__name__}"
        )
    config_manager.set_user_config(section, "audit")
    logger.debug("Applied configuration for section: audit")


def _read_input(source: str) -> str:
    if source == STDIN_INPUT:
        return sys.stdin.read()
    try:
        with open(source, "r", encoding="utf-8") as f:
            return f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise AccessibilityAuditError(f"Failed to read HTML file {source}: {e}") from e


def _combine_reports(reports: List[str], report_format: str) -> str:
    if report_format == "json" and len(reports) > 1:
        return "[\n" + ",\n".join(reports) + "\n]"
    return "\n".join(reports)


def run_audit_command(args: Dict[str, Any]) -> int:
    """Run the accessibility audit over every input."""
    options = build_options(args)
    auditor, resolved = create_auditor(options)

    if args.get("save_config"):
        save_config({"audit": resolved}, args["save_config"], _config_format(args["save_config"]))

    report_format = resolved.get("report_format", "text")
    severity_threshold = resolved.get("severity_threshold", "notice")

    reports = []
    found_violations = False
    analyzer_failed = False

    for source in args["inputs"]:
        label = "<stdin>" if source == STDIN_INPUT else source
        if not args.get("quiet"):
            logger.info(f"Auditing HTML for accessibility: {label}")

        violations = auditor.analyze(_read_input(source))
        for name, error in auditor.get_errors().items():
            logger.error(f"{name} analyzer failed on {label}: {error}")
            analyzer_failed = True

        if filter_violations(violations, severity_threshold):
            found_violations = True

        reports.append(
            generate_report(
                violations,
                report_format=report_format,
                source=label,
                detailed=resolved.get("detailed", False),
                severity_threshold=severity_threshold,
            )
        )

    output = _combine_reports(reports, report_format)
    output_path = args.get("output")
    if output_path:
        output_dir = os.path.dirname(os.path.abspath(output_path))
        os.makedirs(output_dir, exist_ok=True)
        with open(output_path, "w", encoding="utf-8") as f:
            f.write(output)
        logger.info(f"Saved {report_format} report to: {output_path}")
    else:
        print(output)

    if analyzer_failed:
        return EXIT_ERROR
    return EXIT_VIOLATIONS if found_violations else EXIT_OK


def _config_format(path: str) -> str:
    return "json" if path.lower().endswith(".json") else "yaml"


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    args = vars(parser.parse_args(argv))

    # Show version if requested
    if args["version"]:
        print(f"bfsg-audit v{__version__}")
        return EXIT_OK

    if not args["inputs"]:
        parser.print_help(sys.stderr)
        return EXIT_ERROR

    # Configure logging based on debug and quiet flags
    configure_logging(debug=args["debug"], quiet=args["quiet"])

    try:
        if args.get("config"):
            load_configuration(args["config"])
        return run_audit_command(args)

    except BfsgAuditError as e:
        logger.error(f"Error in accessibility audit: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR


if __name__ == "__main__":
    sys.exit(main())
