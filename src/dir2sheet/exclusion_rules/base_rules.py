from abc import ABC, abstractmethod
from typing import Sequence, Union

from dir2sheet.types import PathType


class BaseExclusionRules(ABC):
    """
    Abstract base class defining the interface for file/directory exclusion rules.

    This class serves as a contract for the rule types that decide which paths are
    left out of a directory report (e.g., the plain exclusion-list file found at the
    root, or .gitignore-style patterns given on the command line). All implementations
    must provide logic for checking if a given path should be excluded. File loading
    and individual rule addition are optional capabilities that depend on the rule type.

    Paths handed to exclude() are relative to the root of the walk and use forward
    slashes. Directory paths carry a trailing slash.

    Example:
        >>> from dir2sheet.exclusion_rules.path_list_rules import PathListExclusionRules
        >>> rules = PathListExclusionRules()
        >>> rules.add_rule("build/")
        >>> rules.exclude("build/output.txt")
        True
        >>> rules.exclude("builder/output.txt")
        False
        >>>
        >>> from dir2sheet.exclusion_rules.git_rules import GitIgnoreExclusionRules
        >>> git_rules = GitIgnoreExclusionRules()
        >>> git_rules.add_rule('*.pyc')
        >>> git_rules.exclude('test.pyc')
        True
    """

    @abstractmethod
    def exclude(self, path: str) -> bool:
        """
        Determine if a given path should be excluded based on the loaded rules.

        Args:
            path (str): The file or directory path to check, relative to the root of
                the directory being processed.

        Returns:
            bool: True if the path should be excluded, False if it should be included.
        """
        pass

    def load_rules(self, rules_files: Union[PathType, Sequence[PathType]]) -> None:
        """
        Load and parse exclusion rules from one or more files.

        Rule types that don't support file operations (e.g., composite rules) use the
        default implementation which raises NotImplementedError.

        Args:
            rules_files: Path to a file or sequence of paths containing exclusion rules.

        Raises:
            NotImplementedError: If this rule type doesn't support loading from files.
            FileNotFoundError: If any rules file does not exist (for file-supporting rule types).
        """
        raise NotImplementedError(f"{self.__class__.__name__} doesn't support loading rules from files.")

    def add_rule(self, rule: str) -> None:
        """
        Add a single exclusion rule directly.

        Args:
            rule (str): The exclusion rule to add. The format depends on the specific
                implementation (e.g., a path like "build/" or a pattern like "*.pyc").

        Raises:
            NotImplementedError: If this rule type doesn't support adding individual rules.
        """
        raise NotImplementedError(f"{self.__class__.__name__} doesn't support adding individual rules.")

    def has_rules(self) -> bool:
        """
        Report whether any rule has been configured.

        Rule types that cannot tell assume they have rules.

        Returns:
            bool: True if the rules can exclude anything at all.
        """
        return True
