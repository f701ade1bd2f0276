"""Row records produced by the tree walker."""

from dataclasses import dataclass

from dir2sheet.types import EntryKind, Status

INDENT = "  "


@dataclass
class Entry:
    """One row of a directory report.

    Attributes:
        level (int): Depth below the root; the root's direct children are at level 0.
        kind (EntryKind): Whether the row describes a directory or a file.
        name (str): The bare name of the item.
        relative_path (str): Forward-slash path from the root. Directory paths end
            in "/", file paths never do.
        status (Status): Triage status. Starts as PENDING; only report consumers
            change it.

    Example:
        >>> entry = Entry(1, EntryKind.FILE, "main.py", "src/main.py")
        >>> entry.display_name
        '  main.py'
        >>> entry.status.value
        'pending'
    """

    level: int
    kind: EntryKind
    name: str
    relative_path: str
    status: Status = Status.PENDING

    @property
    def is_dir(self) -> bool:
        return self.kind is EntryKind.DIRECTORY

    @property
    def display_name(self) -> str:
        """The name indented by depth, as shown in the Name column."""
        return INDENT * self.level + self.name
