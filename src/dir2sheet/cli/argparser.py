"""Command-line argument parsing for dir2sheet.

This module defines the command-line interface for dir2sheet,
handling argument parsing and validation.
"""

import argparse
from pathlib import Path
from typing import Any, List, Optional, Sequence, Type, Union

from dir2sheet import __version__
from dir2sheet.exclusion_rules.base_rules import BaseExclusionRules


def create_exclusion_action(exclusion_rules: BaseExclusionRules) -> Type[argparse.Action]:
    """Create a custom action class for handling extra exclusion rules.

    The action updates the provided exclusion rules object as arguments are processed,
    preserving the order of -x/--exclude-from and -i/--ignore options as they appear on
    the command line.

    Args:
        exclusion_rules: The exclusion rules object to update during parsing.

    Returns:
        A custom action class for use with argparse.
    """

    class ExclusionRulesAction(argparse.Action):
        """Action to add exclusion rules as arguments are processed."""

        def __init__(self, option_strings: List[str], dest: str, **kwargs: Any) -> None:
            super().__init__(option_strings, dest, **kwargs)

        def __call__(
            self,
            parser: argparse.ArgumentParser,
            namespace: argparse.Namespace,
            values: Union[str, Sequence[Any], None],
            option_string: Optional[str] = None,
        ) -> None:
            if values is None:
                return

            if option_string in ("-x", "--exclude-from"):
                try:
                    exclusion_rules.load_rules(Path(str(values)))
                except FileNotFoundError as e:
                    parser.error(str(e))
            else:  # -i/--ignore
                exclusion_rules.add_rule(str(values))

            recorded = getattr(namespace, self.dest, None) or []
            recorded.append(values)
            setattr(namespace, self.dest, recorded)

    return ExclusionRulesAction


def create_parser(exclusion_rules: BaseExclusionRules) -> argparse.ArgumentParser:
    """Create and configure the command-line argument parser.

    Args:
        exclusion_rules: The exclusion rules object to update during parsing.

    Returns:
        An ArgumentParser instance configured with dir2sheet's options.
    """
    description = """
    dir2sheet: Generate a spreadsheet listing every directory and file under a root.

    Each row holds the item's depth, its type (Directory/File), its indented name,
    its path relative to the root and a status drop-down (pending, processing, done)
    for tracking work on large trees of files.

    Exclusions:
    A file named TO_EXCLUDE_TREE_TEMP.txt directly under the root lists paths to leave
    out, one per line, relative to the root. A line ending in "/" excludes a directory
    and everything beneath it. The file always excludes itself.

    Extension filter:
    With -e, only files with the given extensions are listed, and directories without
    any such file beneath them are left out entirely.
    """

    epilog = """
    Examples:
      # Generate tree for all files
      dir2sheet --path ./my-project

      # Generate tree for JavaScript/TypeScript files only
      dir2sheet --path ./my-project -e "js,jsx,ts,tsx"

      # Write CSV to a chosen file
      dir2sheet -p ./my-project -f csv -o tree.csv

      # Leave out extra paths using gitignore-style patterns
      dir2sheet -p ./my-project -i "*.log" -i "node_modules/" -x .gitignore

      # Print a summary to stderr
      dir2sheet -p ./my-project -s
    """

    parser = argparse.ArgumentParser(
        prog="dir2sheet",
        description=description,
        epilog=epilog,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "-V", "--version", action="version", version=f"dir2sheet {__version__}", help="Show the version and exit"
    )

    ExclusionAction = create_exclusion_action(exclusion_rules)

    parser.add_argument(
        "-p",
        "--path",
        type=Path,
        required=True,
        metavar="DIR",
        help="Root directory path to generate tree from.",
    )
    parser.add_argument(
        "-e",
        "--include-only-extensions",
        metavar="EXTS",
        default="",
        help=(
            'Comma-separated list of file extensions to include (e.g., "js,jsx,ts,tsx"). Empty items are '
            "ignored, so files without an extension are never matched."
        ),
    )
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        metavar="FILE",
        help="Output file path (default: directory-tree.xlsx or directory-tree.csv in the current directory).",
    )
    parser.add_argument(
        "-f",
        "--format",
        choices=["xlsx", "csv"],
        default="xlsx",
        help="Output format (default: xlsx).",
    )
    parser.add_argument(
        "-i",
        "--ignore",
        type=str,
        metavar="PATTERN",
        action=ExclusionAction,
        help=(
            "Additional gitignore-style pattern to exclude files and directories. Can be specified "
            "multiple times."
        ),
    )
    parser.add_argument(
        "-x",
        "--exclude-from",
        type=Path,
        metavar="FILE",
        action=ExclusionAction,
        help="File of additional gitignore-style patterns (e.g., .gitignore). Can be specified multiple times.",
    )
    parser.add_argument(
        "--sort",
        action="store_true",
        help="Sort entries by name within each directory instead of keeping the filesystem's listing order.",
    )
    parser.add_argument(
        "-s",
        "--summary",
        action="store_true",
        help="Print directory, file and error counts to stderr.",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Only log warnings and errors.",
    )

    return parser


def validate_args(args: argparse.Namespace) -> None:
    """Validate command-line arguments.

    Performs additional validation beyond what argparse can handle.

    Args:
        args: Parsed command-line arguments.

    Raises:
        ValueError: If any arguments fail validation.
    """
    if args.output is not None and args.output.is_dir():
        raise ValueError(f"--output must be a file path, not a directory: {args.output}")
