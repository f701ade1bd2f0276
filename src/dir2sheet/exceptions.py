from typing import Optional

from dir2sheet.types import PathType


class ConfigurationError(Exception):
    """
    Exception raised when the run cannot start with the given configuration.

    This is the only fatal error of a run. It is raised when the root directory is
    missing, is not a directory, or cannot be listed.

    Attributes:
        path (str): The path that failed validation.
        reason (str): Human-readable description of the failure.

    Example:
        >>> error = ConfigurationError("/no/such/dir", "directory does not exist")
        >>> str(error)
        'Invalid root directory /no/such/dir: directory does not exist'
    """

    def __init__(self, path: PathType, reason: str) -> None:
        """
        Initialize the exception with the offending path.

        Args:
            path: The root path that could not be used.
            reason: Why the path could not be used.
        """
        self.path = str(path)
        self.reason = reason
        super().__init__(f"Invalid root directory {self.path}: {reason}")


class ExclusionFileError(Exception):
    """
    Exception raised when an exclusion-list file exists but cannot be read or decoded.

    Callers loading the exclusion list for a run catch this error, log it, and fall
    back to the built-in default exclusions.

    Example:
        >>> error = ExclusionFileError("root/TO_EXCLUDE_TREE_TEMP.txt", "not valid UTF-8")
        >>> str(error)
        'Cannot read exclusion file root/TO_EXCLUDE_TREE_TEMP.txt: not valid UTF-8'
    """

    def __init__(self, path: PathType, reason: str) -> None:
        self.path = str(path)
        self.reason = reason
        super().__init__(f"Cannot read exclusion file {self.path}: {reason}")


class TraversalError(Exception):
    """
    Error describing a directory that could not be listed during a walk.

    Traversal errors are never raised out of the walker. They are logged and
    collected so that callers can report them after the run.

    Attributes:
        path (str): Path of the directory that could not be listed.
        reason (str): Description of the underlying OS error.
        cause (Optional[OSError]): The original error, if any.

    Example:
        >>> error = TraversalError("root/private", "Permission denied")
        >>> str(error)
        'Error processing directory root/private: Permission denied'
    """

    def __init__(self, path: PathType, reason: str, cause: Optional[OSError] = None) -> None:
        self.path = str(path)
        self.reason = reason
        self.cause = cause
        super().__init__(f"Error processing directory {self.path}: {reason}")
