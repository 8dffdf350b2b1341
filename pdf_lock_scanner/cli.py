#!/usr/bin/env python3
"""
Command-line interface for the PDF Lock Scanner.
"""

import argparse
import os
import platform
import sys
import time
from typing import List, Optional

from pdf_lock_scanner import __version__
from pdf_lock_scanner.core.cracker import PDFCracker
from pdf_lock_scanner.core.engine import LOCK_POLICIES, GhostscriptEngine
from pdf_lock_scanner.core.progress import ConsoleProgress
from pdf_lock_scanner.core.report import display_results, write_report
from pdf_lock_scanner.core.scanner import PDFScanner
from pdf_lock_scanner.utils.config import Config, verbosity_to_level
from pdf_lock_scanner.utils.exceptions import ConfigError, PDFLockScannerError
from pdf_lock_scanner.utils.logger import Logger


EXAMPLES = """\
examples:
  Check every PDF under the current directory:
    pdf-lock-scanner

  Check a directory and try to recover passwords of locked files:
    pdf-lock-scanner ~/Documents --crack

  Use a specific Ghostscript binary and write the report elsewhere:
    pdf-lock-scanner ~/Documents --crack --gs gswin64c -o ~/lock-report.md
"""

# Command-line option -> config key
CONFIG_OPTIONS = {
    "gs": "gs_command",
    "lock_policy": "lock_policy",
    "timeout": "timeout",
    "chunk_size": "chunk_size",
    "concurrency": "max_concurrency",
    "min_age": "min_age",
    "max_age": "max_age",
    "report": "report_path",
    "verbosity": "verbosity",
    "log_file": "log_file",
}


def create_parser() -> argparse.ArgumentParser:
    """Create the command-line argument parser"""
    parser = argparse.ArgumentParser(
        prog="pdf-lock-scanner",
        description="Find password-protected PDFs and recover date-based passwords",
        epilog=EXAMPLES,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "directory", nargs="?", default=".", help="Directory to scan (default: current directory)"
    )
    parser.add_argument(
        "--crack", action="store_true", help="Try to recover passwords of locked files"
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    # Defaults are None so that unset options fall back to the config file
    engine_group = parser.add_argument_group("Engine Options")
    engine_group.add_argument("--gs", help="Ghostscript executable (default: gs)")
    engine_group.add_argument(
        "--lock-policy",
        choices=LOCK_POLICIES,
        help="'phrases' trusts only password diagnostics; 'strict' also treats "
             "failed runs reporting an error as locked (default: phrases)",
    )
    engine_group.add_argument(
        "--timeout", type=float, help="Seconds allowed per Ghostscript run"
    )

    crack_group = parser.add_argument_group("Cracking Options")
    crack_group.add_argument(
        "--chunk-size", type=int, help="Candidates tried sequentially per task (default: 100)"
    )
    crack_group.add_argument(
        "--concurrency", type=int, help="Maximum parallel Ghostscript processes (default: 10)"
    )
    crack_group.add_argument(
        "--min-age", type=int, help="Youngest owner age for birth-date candidates (default: 20)"
    )
    crack_group.add_argument(
        "--max-age", type=int, help="Oldest owner age for birth-date candidates (default: 85)"
    )

    output_group = parser.add_argument_group("Output Options")
    output_group.add_argument(
        "-o", "--report", help="Markdown report path (default: pdf-lock-report.md)"
    )
    output_group.add_argument(
        "-v",
        "--verbosity",
        choices=["debug", "info", "warning", "error", "critical"],
        help="Logging verbosity level (default: info)",
    )
    output_group.add_argument("--log-file", help="Save log output to this file")
    output_group.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Suppress log messages on the console (errors still go to stderr)",
    )

    config_group = parser.add_argument_group("Configuration")
    config_group.add_argument("--config", help="Path to configuration file")
    config_group.add_argument(
        "--save-config",
        action="store_true",
        help="Save current settings as default configuration",
    )

    return parser


def apply_args_to_config(args, config: Config) -> None:
    """Command-line arguments override values from the config file"""
    for option, key in CONFIG_OPTIONS.items():
        value = getattr(args, option, None)
        if value is not None:
            config.set(key, value)


def setup_logger(args, config: Config) -> Logger:
    """Set up logging based on command-line arguments and config"""
    return Logger(
        name="pdf_lock_scanner",
        log_file=config.get("log_file"),
        level=verbosity_to_level(config.get("verbosity", "info")),
        console=not args.quiet,
    )


def print_system_info(logger, engine: GhostscriptEngine) -> None:
    """Log system information useful for debugging"""
    logger.debug("=== System Information ===")
    logger.debug(f"Python version: {platform.python_version()}")
    logger.debug(f"Platform: {platform.platform()}")
    logger.debug(f"CPU count: {os.cpu_count()}")
    logger.debug(f"Ghostscript ({engine.command}) version: {engine.version() or 'unavailable'}")
    logger.debug("=========================")


def build_scanner(config: Config, logger, progress) -> PDFScanner:
    """Wire engine, cracker and scanner from the effective configuration"""
    engine = GhostscriptEngine(
        command=config.get("gs_command", "gs"),
        timeout=config.get("timeout"),
        lock_policy=config.get("lock_policy", "phrases"),
        logger=logger.getChild("engine"),
    )
    try:
        cracker = PDFCracker(
            engine,
            chunk_size=config.get("chunk_size", 100),
            max_concurrency=config.get("max_concurrency", 10),
            progress=progress,
            min_age=config.get("min_age", 20),
            max_age=config.get("max_age", 85),
            logger=logger.getChild("cracker"),
        )
    except ValueError as e:
        raise ConfigError(str(e))
    return PDFScanner(
        engine,
        cracker=cracker,
        progress=progress,
        extensions=config.get("extensions", [".pdf"]),
        skip_hidden=config.get("skip_hidden", True),
        logger=logger.getChild("scanner"),
    )


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the PDF lock scanner CLI

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    try:
        config = Config(args.config)
    except PDFLockScannerError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    apply_args_to_config(args, config)

    logger = setup_logger(args, config).get_logger()

    try:
        if args.save_config:
            config.save()
            logger.info(f"Configuration saved to {config.config_path}")

        progress = ConsoleProgress(logger, show_bar=not args.quiet)
        scanner = build_scanner(config, logger, progress)
        print_system_info(logger, scanner.engine)

        start_time = time.time()
        logger.info(f"Scanning for PDFs in: {args.directory}")
        pdf_files = scanner.find_files(args.directory)

        if not pdf_files:
            print("No PDF files found")
            return 0

        logger.info(f"Found {len(pdf_files)} PDF files")
        results = scanner.scan_files(pdf_files, crack=args.crack)

        display_results(results, crack_enabled=args.crack)

        report_path = write_report(
            results, config.get("report_path", "pdf-lock-report.md"), crack_enabled=args.crack
        )
        print(f"\nReport saved to: {report_path}")
        logger.info(f"Total time: {time.time() - start_time:.2f} seconds")
        return 0

    except PDFLockScannerError as e:
        logger.error(f"Error: {str(e)}")
        if args.quiet:
            print(f"Error: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        logger.info("\nProcess interrupted by user.")
        return 130
    except Exception as e:
        logger.exception(f"Unexpected error: {str(e)}")
        if args.quiet:
            print(f"Unexpected error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
