"""
Models for the drivefs in-memory filesystem.
Contains the entity variants and the entity arena type definitions.
"""
from typing import Dict, Union, Literal, Optional

EntityType = Literal["drive", "folder", "text_file", "zip_file"]

DRIVE: EntityType = "drive"
FOLDER: EntityType = "folder"
TEXT_FILE: EntityType = "text_file"
ZIP_FILE: EntityType = "zip_file"

ENTITY_TYPES = (DRIVE, FOLDER, TEXT_FILE, ZIP_FILE)
CONTAINER_TYPES = (DRIVE, FOLDER, ZIP_FILE)


class DriveNode:
    """The root container of a filesystem. Has no parent."""

    def __init__(self, id: int, name: str):
        self.id: int = id
        self.type: Literal["drive"] = DRIVE
        self.name: str = name
        self.parent_id: None = None
        self.children: Dict[str, int] = {}


class FolderNode:
    """A general purpose container."""

    def __init__(self, id: int, name: str, parent_id: int):
        self.id: int = id
        self.type: Literal["folder"] = FOLDER
        self.name: str = name
        self.parent_id: int = parent_id
        self.children: Dict[str, int] = {}


class ZipFileNode:
    """A container whose reported size is compressed."""

    def __init__(self, id: int, name: str, parent_id: int):
        self.id: int = id
        self.type: Literal["zip_file"] = ZIP_FILE
        self.name: str = name
        self.parent_id: int = parent_id
        self.children: Dict[str, int] = {}


class TextFileNode:
    """A leaf holding text content."""

    def __init__(self, id: int, name: str, parent_id: int, content: str = ""):
        self.id: int = id
        self.type: Literal["text_file"] = TEXT_FILE
        self.name: str = name
        self.parent_id: int = parent_id
        self.content: str = content


ContainerNode = Union[DriveNode, FolderNode, ZipFileNode]
Entity = Union[DriveNode, FolderNode, ZipFileNode, TextFileNode]

# Type definition for the arena owning every entity of a filesystem
EntityMap = Dict[int, Entity]


def is_container(entity: Optional[Entity]) -> bool:
    """Return True if the entity can hold children."""
    return entity is not None and entity.type in CONTAINER_TYPES
