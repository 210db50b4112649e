"""
Core filesystem engine for drivefs.
Implements create, delete, move, write and traversal over an entity arena.
"""
import logging
import threading
from typing import Callable, Iterator, List, Optional, Tuple, Union

import click

from .config import DEFAULT_DRIVE_NAME, PATH_SEPARATOR, ZIP_COMPRESSION_RATIO
from .errors import (
    PathNotFound,
    PathAlreadyExists,
    IllegalFileSystemOperation,
    NotATextFile,
)
from .models import (
    ENTITY_TYPES,
    DRIVE,
    FOLDER,
    ZIP_FILE,
    DriveNode,
    FolderNode,
    ZipFileNode,
    TextFileNode,
    ContainerNode,
    Entity,
    EntityMap,
    EntityType,
    is_container,
)
from .resolver import resolve, join_path, dirname


# Configure logger
logger = logging.getLogger(__name__)

# (name, size, depth) rows produced by traversal
TraversalRow = Tuple[str, float, int]
Target = Union[str, Entity, None]


class FileSystem:
    """An in-memory tree of entities rooted at a single drive."""

    def __init__(self, drive_name: str = DEFAULT_DRIVE_NAME):
        """
        Initialize the filesystem with an empty drive.

        Args:
            drive_name: Name of the root drive, the first segment of every path
        """
        self._check_name(drive_name)

        self._lock = threading.RLock()
        self._next_id = 0
        self._entities: EntityMap = {}

        drive = DriveNode(self._allocate_id(), drive_name)
        self._entities[drive.id] = drive
        self.root_id: int = drive.id

    @property
    def drive(self) -> DriveNode:
        """The root drive."""
        return self._entities[self.root_id]

    @property
    def entities(self) -> EntityMap:
        """Snapshot of the entity arena keyed by entity ID."""
        with self._lock:
            return dict(self._entities)

    # Lookups

    def get(self, path: str) -> Entity:
        """Return the entity at ``path``."""
        with self._lock:
            return resolve(self._entities, self.root_id, path)

    def get_entity(self, entity_id: int) -> Entity:
        """Return the entity with the given ID."""
        with self._lock:
            if entity_id not in self._entities:
                logger.error(f"Entity ID {entity_id} not found")
                raise PathNotFound(f"Entity ID {entity_id} not found")
            return self._entities[entity_id]

    def exists(self, path: str) -> bool:
        """Return True if ``path`` resolves to an entity."""
        try:
            self.get(path)
        except (PathNotFound, IllegalFileSystemOperation):
            return False
        return True

    def parent_of(self, target: Target) -> Optional[ContainerNode]:
        """Return the container holding the target, or None for the drive."""
        with self._lock:
            entity = self._lookup(target)
            if entity.parent_id is None:
                return None
            return self._entities[entity.parent_id]

    def list_children(self, path: str) -> List[str]:
        """
        List the names of the direct children of a container.

        Args:
            path: Path of a container

        Returns:
            Sorted child names
        """
        with self._lock:
            entity = resolve(self._entities, self.root_id, path)
            if not is_container(entity):
                logger.error(f"Cannot list children of {entity.type} {path!r}")
                raise IllegalFileSystemOperation(
                    f"{path!r} is a {entity.type}, not a container", path
                )
            return sorted(entity.children)

    def read_file(self, path: str) -> str:
        """Return the content of the text file at ``path``."""
        with self._lock:
            entity = resolve(self._entities, self.root_id, path)
            if not isinstance(entity, TextFileNode):
                logger.error(f"Cannot read {entity.type} {path!r}")
                raise NotATextFile(f"{path!r} is a {entity.type}, not a text file", path)
            return entity.content

    # Derived properties

    def size(self, target: Target = None) -> float:
        """
        Compute the size of an entity.

        Text files report their character count, folders and drives the sum
        of their children, and zip files that sum compressed.

        Args:
            target: Path or entity (the drive if None)

        Returns:
            Size of the entity
        """
        with self._lock:
            return self._size(self._lookup(target))

    def path_of(self, target: Union[int, Entity]) -> str:
        """
        Compute an entity's path by walking parent links up to the drive.

        Args:
            target: Entity or entity ID

        Returns:
            Separator-delimited path, drive name first
        """
        with self._lock:
            if isinstance(target, int):
                entity = self.get_entity(target)
            else:
                entity = self._lookup(target)
            names = [entity.name]
            while entity.parent_id is not None:
                entity = self._entities[entity.parent_id]
                names.append(entity.name)
            return join_path(reversed(names))

    # Mutations

    def create(self, entity_type: EntityType, name: str, parent_path: str) -> int:
        """
        Create an empty entity under an existing container.

        Args:
            entity_type: One of "folder", "text_file", "zip_file"
            name: Name of the new entity, unique among its siblings
            parent_path: Path of the container to create it in

        Returns:
            ID of the created entity
        """
        if entity_type not in ENTITY_TYPES:
            logger.error(f"Unknown entity type: {entity_type!r}")
            raise ValueError(f"Unknown entity type: {entity_type!r}")

        # A second drive is illegal wherever it is placed
        if entity_type == DRIVE:
            logger.error(f"Refusing to create a second drive {name!r}")
            raise IllegalFileSystemOperation(
                "A filesystem has exactly one drive", parent_path
            )

        self._check_name(name)

        with self._lock:
            parent = resolve(self._entities, self.root_id, parent_path)

            if not is_container(parent):
                logger.error(f"Cannot create {name!r} inside {parent.type} {parent_path!r}")
                raise IllegalFileSystemOperation(
                    f"{parent_path!r} is a {parent.type}, not a container", parent_path
                )

            if name in parent.children:
                new_path = f"{self.path_of(parent)}{PATH_SEPARATOR}{name}"
                logger.error(f"Path already exists: {new_path!r}")
                raise PathAlreadyExists(f"Path already exists: {new_path!r}", new_path)

            entity_id = self._allocate_id()
            if entity_type == FOLDER:
                entity = FolderNode(entity_id, name, parent.id)
            elif entity_type == ZIP_FILE:
                entity = ZipFileNode(entity_id, name, parent.id)
            else:
                entity = TextFileNode(entity_id, name, parent.id)

            self._entities[entity_id] = entity
            parent.children[name] = entity_id

            logger.info(f"Created {entity_type} {self.path_of(entity_id)!r}")
            return entity_id

    def delete(self, path: str) -> None:
        """
        Delete an entity and its whole subtree.

        Args:
            path: Path of the entity to delete
        """
        with self._lock:
            entity = resolve(self._entities, self.root_id, path)

            if entity.parent_id is None:
                logger.error(f"Refusing to delete the drive {path!r}")
                raise IllegalFileSystemOperation("The drive cannot be deleted", path)

            parent = self._entities[entity.parent_id]
            del parent.children[entity.name]

            removed = self._discard_subtree(entity)
            logger.info(f"Deleted {path!r} ({removed} entities)")

    def move(self, source_path: str, destination_path: str) -> None:
        """
        Move an entity, with its subtree, under another container.

        The destination's last segment only locates the new parent; the
        entity keeps its own name. Use rename() to change it.

        Args:
            source_path: Path of the entity to move
            destination_path: Path the entity should end up at
        """
        with self._lock:
            entity = resolve(self._entities, self.root_id, source_path)

            if entity.parent_id is None:
                logger.error(f"Source has no parent: {source_path!r}")
                raise PathNotFound(f"Source has no parent: {source_path!r}", source_path)

            new_parent_path = dirname(destination_path)
            if not new_parent_path:
                logger.error(f"Destination has no parent: {destination_path!r}")
                raise PathNotFound(
                    f"Destination has no parent: {destination_path!r}", destination_path
                )

            new_parent = resolve(self._entities, self.root_id, new_parent_path)

            if not is_container(new_parent):
                logger.error(f"Cannot move into {new_parent.type} {new_parent_path!r}")
                raise IllegalFileSystemOperation(
                    f"{new_parent_path!r} is a {new_parent.type}, not a container",
                    new_parent_path,
                )

            if self._is_ancestor(entity, new_parent):
                logger.error(f"Cannot move {source_path!r} into its own subtree")
                raise IllegalFileSystemOperation(
                    f"Cannot move {source_path!r} inside itself", destination_path
                )

            if entity.name in new_parent.children:
                logger.error(f"{new_parent_path!r} already contains {entity.name!r}")
                raise PathAlreadyExists(
                    f"{new_parent_path!r} already contains {entity.name!r}",
                    destination_path,
                )

            old_parent = self._entities[entity.parent_id]
            del old_parent.children[entity.name]
            new_parent.children[entity.name] = entity.id
            entity.parent_id = new_parent.id

            logger.info(f"Moved {source_path!r} to {self.path_of(entity)!r}")

    def rename(self, path: str, new_name: str) -> None:
        """
        Rename an entity in place.

        Args:
            path: Path of the entity
            new_name: New name, unique among its siblings
        """
        self._check_name(new_name)

        with self._lock:
            entity = resolve(self._entities, self.root_id, path)

            if entity.parent_id is None:
                logger.error(f"Refusing to rename the drive {path!r}")
                raise IllegalFileSystemOperation("The drive cannot be renamed", path)

            parent = self._entities[entity.parent_id]
            if new_name == entity.name:
                return
            if new_name in parent.children:
                logger.error(f"{self.path_of(parent)!r} already contains {new_name!r}")
                raise PathAlreadyExists(
                    f"{self.path_of(parent)!r} already contains {new_name!r}", path
                )

            del parent.children[entity.name]
            parent.children[new_name] = entity.id
            entity.name = new_name

            logger.info(f"Renamed {path!r} to {new_name!r}")

    def write_to_file(self, path: str, content: str) -> None:
        """
        Replace the content of a text file.

        Args:
            path: Path of the text file
            content: New content
        """
        with self._lock:
            entity = resolve(self._entities, self.root_id, path)

            if not isinstance(entity, TextFileNode):
                logger.error(f"Cannot write to {entity.type} {path!r}")
                raise NotATextFile(f"{path!r} is a {entity.type}, not a text file", path)

            entity.content = content
            logger.debug(f"Wrote {len(content)} characters to {path!r}")

    # Traversal

    def traverse(self, start: Target = None, depth: int = 0) -> Iterator[TraversalRow]:
        """
        Lazily walk the descendants of a container, depth first.

        The start entity itself is not yielded. Calling again restarts the walk.

        Args:
            start: Path or entity to start from (the drive if None)
            depth: Depth reported for the start entity's children

        Returns:
            Iterator of (name, size, depth) tuples
        """
        with self._lock:
            entity = self._lookup(start)
        return self._walk(entity.id, depth)

    def print_system(
        self,
        start: Target = None,
        levels: int = 0,
        echo: Callable[[str], None] = click.echo,
    ) -> None:
        """
        Print the tree below ``start``, one tab of indent per level.

        Args:
            start: Path or entity to start from (the drive if None)
            levels: Indent level of the first row
            echo: Output function receiving one line at a time
        """
        for name, size, depth in self.traverse(start, levels):
            indent = "\t" * depth
            echo(f"{indent} name: {name}, size:{size}")

    # Internals

    def _walk(self, entity_id: int, depth: int) -> Iterator[TraversalRow]:
        # Snapshot each level under the lock; yield outside it
        with self._lock:
            entity = self._entities.get(entity_id)
            if not is_container(entity):
                return
            rows = []
            for child_id in entity.children.values():
                child = self._entities[child_id]
                rows.append((child.name, self._size(child), child_id, is_container(child)))

        for name, size, child_id, container in rows:
            yield name, size, depth
            if container:
                yield from self._walk(child_id, depth + 1)

    def _lookup(self, target: Target) -> Entity:
        if target is None:
            return self._entities[self.root_id]
        if isinstance(target, str):
            return resolve(self._entities, self.root_id, target)
        if self._entities.get(target.id) is not target:
            logger.error(f"Entity {target.name!r} is not part of this filesystem")
            raise PathNotFound(f"Entity {target.name!r} is not part of this filesystem")
        return target

    def _size(self, entity: Entity) -> float:
        match entity:
            case TextFileNode():
                return float(len(entity.content))
            case ZipFileNode():
                return self._children_size(entity) / ZIP_COMPRESSION_RATIO
            case _:
                return self._children_size(entity)

    def _children_size(self, container: ContainerNode) -> float:
        return sum(
            (self._size(self._entities[child_id]) for child_id in container.children.values()),
            0.0,
        )

    def _is_ancestor(self, ancestor: Entity, entity: Entity) -> bool:
        """Return True if ``ancestor`` is ``entity`` or one of its parents."""
        current_id: Optional[int] = entity.id
        while current_id is not None:
            if current_id == ancestor.id:
                return True
            current_id = self._entities[current_id].parent_id
        return False

    def _discard_subtree(self, entity: Entity) -> int:
        """Remove an entity and all its descendants from the arena."""
        stack = [entity.id]
        removed = 0
        while stack:
            node = self._entities.pop(stack.pop())
            removed += 1
            if is_container(node):
                stack.extend(node.children.values())
        return removed

    def _allocate_id(self) -> int:
        entity_id = self._next_id
        self._next_id += 1
        return entity_id

    @staticmethod
    def _check_name(name: str) -> None:
        if not isinstance(name, str) or not name:
            logger.error(f"Invalid name: {name!r}")
            raise IllegalFileSystemOperation(f"Invalid name: {name!r}")
        if PATH_SEPARATOR in name:
            logger.error(f"Name {name!r} contains the path separator")
            raise IllegalFileSystemOperation(
                f"Name {name!r} must not contain {PATH_SEPARATOR!r}"
            )

