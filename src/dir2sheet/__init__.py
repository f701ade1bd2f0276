"""Directory tree to spreadsheet utilities.

This package walks a directory and produces an ordered, indented listing of its
directories and files as a spreadsheet with a per-row triage status, honoring an
exclusion-list file and an optional file-extension filter.
"""

from importlib.metadata import PackageNotFoundError, version

# Expose the version for both programmatic use and CLI
try:
    __version__ = version("dir2sheet")
except PackageNotFoundError:
    __version__ = "unknown"
