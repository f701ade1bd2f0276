"""Command-line interface for dir2sheet.

This module provides the command-line interface for dir2sheet, which walks a root
directory and writes a spreadsheet with one row per directory and file beneath it.
It handles argument parsing, logging setup, report writing and error reporting.

Exit Codes:
    0: Successful completion
    1: Configuration or runtime error
    2: Command-line syntax error
    130: Interrupted by SIGINT (Ctrl+C)

Example:
    # Report every file
    $ dir2sheet --path /path/to/dir

    # Only TypeScript sources, written as CSV
    $ dir2sheet -p /path/to/dir -e ts,tsx -f csv
"""

import logging
import sys
from typing import Mapping

from dir2sheet.cli.argparser import create_parser, validate_args
from dir2sheet.dir2sheet import Dir2Sheet
from dir2sheet.exclusion_rules.git_rules import GitIgnoreExclusionRules

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(levelname)s: %(message)s"


def format_counts(counts: Mapping[str, int]) -> str:
    """Format the counts into a human-readable string.

    Args:
        counts: Mapping containing the directory, file and error counts.

    Returns:
        A formatted string showing all counts with appropriate labels.
    """
    return "\n".join(
        [
            f"Directories: {counts['directories']}",
            f"Files: {counts['files']}",
            f"Unreadable directories: {counts['errors']}",
        ]
    )


def configure_logging(quiet: bool) -> None:
    logging.basicConfig(format=LOG_FORMAT)
    logging.getLogger().setLevel(logging.WARNING if quiet else logging.INFO)


def main() -> None:
    """Main entry point for the dir2sheet command-line interface.

    Exit codes:
        0: Successful completion
        1: Configuration or runtime error
        2: Command-line syntax error
        130: Interrupted by SIGINT (Ctrl+C)
    """
    try:
        # Populated while the command line is parsed
        exclusion_rules = GitIgnoreExclusionRules()

        parser = create_parser(exclusion_rules)
        args = parser.parse_args()

        validate_args(args)
        configure_logging(args.quiet)

        report = Dir2Sheet(
            args.path,
            extensions=args.include_only_extensions,
            exclusion_rules=exclusion_rules if exclusion_rules.has_rules() else None,
            output_format=args.format,
            sort_children=args.sort,
        )

        logger.info("Excluded items: %s", sorted(report.exclusions))
        if not report.extension_filter.accepts_all:
            logger.info("Including only files with extensions: %s", sorted(report.extension_filter.extensions or ()))

        output_path = report.write(args.output)
        logger.info("Report generated successfully at: %s", output_path)

        if args.summary:
            counts = {
                "directories": report.directory_count,
                "files": report.file_count,
                "errors": report.error_count,
            }
            print(format_counts(counts), file=sys.stderr)

    except KeyboardInterrupt:
        print("Interrupted", file=sys.stderr)
        sys.exit(130)
    except Exception as e:
        print(f"Error: {str(e)}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
