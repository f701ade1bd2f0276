"""Exclusion rules for filtering files and directories."""

from .base_rules import BaseExclusionRules
from .composite_rules import CompositeExclusionRules
from .git_rules import GitIgnoreExclusionRules
from .path_list_rules import (
    EXCLUSION_FILE_NAME,
    PathListExclusionRules,
    is_excluded,
    load_exclusions,
    normalize_path,
)

__all__ = [
    "EXCLUSION_FILE_NAME",
    "BaseExclusionRules",
    "CompositeExclusionRules",
    "GitIgnoreExclusionRules",
    "PathListExclusionRules",
    "is_excluded",
    "load_exclusions",
    "normalize_path",
]
