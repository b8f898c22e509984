# Directory - the persisted link record, its store accessor and grouping.
# Created: 2026-03-03

from linkboard.directory.errors import (
    AdminSecretWriteError,
    DirectoryWriteError,
    InvalidAdminSecret,
    InvalidDirectoryPayload,
    LinkBoardError,
)
from linkboard.directory.grouping import (
    UNCATEGORIZED,
    UNCATEGORIZED_LABEL,
    CategoryGroup,
    group_links,
)
from linkboard.directory.models import Directory, Link, Ok, Recovered, default_directory
from linkboard.directory.store import DirectoryStore, StoreConfig

__all__ = [
    "AdminSecretWriteError",
    "UNCATEGORIZED",
    "UNCATEGORIZED_LABEL",
    "CategoryGroup",
    "Directory",
    "DirectoryStore",
    "DirectoryWriteError",
    "InvalidAdminSecret",
    "InvalidDirectoryPayload",
    "Link",
    "LinkBoardError",
    "Ok",
    "Recovered",
    "StoreConfig",
    "default_directory",
    "group_links",
]
