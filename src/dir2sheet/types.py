from enum import Enum
from os import PathLike
from typing import Union

# Complete path type including strings and any path-like object
PathType = Union[str, PathLike[str]]


class EntryKind(str, Enum):
    """Kind of item an emitted row describes.

    The values double as the text written to the Type column of the report.

    Attributes:
        DIRECTORY: A directory.
        FILE: Anything that is not a directory.
    """

    DIRECTORY = "Directory"
    FILE = "File"


class Status(str, Enum):
    """Triage status of a row in the report.

    The first member is the initial value of every row; the report offers all
    three values as a drop-down list.
    """

    PENDING = "pending"
    PROCESSING = "processing"
    DONE = "done"
