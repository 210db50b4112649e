"""
Path resolution for the drivefs tree.
Translates separator-delimited path strings into entities of an entity arena.
"""
import logging
from typing import List, Iterable

from .config import PATH_SEPARATOR
from .errors import PathNotFound, IllegalFileSystemOperation
from .models import Entity, EntityMap, is_container


logger = logging.getLogger(__name__)


def split_path(path: str) -> List[str]:
    """
    Split a path into its name segments.

    Empty segments are dropped, so ``drive\\docs\\`` and ``drive\\docs``
    yield the same segments.

    Args:
        path: Separator-delimited path

    Returns:
        List of segment names, root name first
    """
    return [part for part in path.split(PATH_SEPARATOR) if part]


def join_path(segments: Iterable[str]) -> str:
    """Join name segments into a path string."""
    return PATH_SEPARATOR.join(segments)


def dirname(path: str) -> str:
    """Return the path with its last segment removed ("" for a root-only path)."""
    return join_path(split_path(path)[:-1])


def resolve(entities: EntityMap, root_id: int, path: str) -> Entity:
    """
    Walk the tree from the root and return the entity at ``path``.

    Args:
        entities: Entity arena
        root_id: ID of the root drive
        path: Separator-delimited path; the first segment must be the root name

    Returns:
        The entity located at the path

    Raises:
        PathNotFound: If a segment does not exist
        IllegalFileSystemOperation: If a non-final segment is not a container
    """
    segments = split_path(path)
    root = entities[root_id]

    if not segments or segments[0] != root.name:
        logger.debug(f"Root {root.name!r} does not match {path!r}")
        raise PathNotFound(f"Path not found: {path!r}", path)

    current = root
    for depth, name in enumerate(segments[1:], start=1):
        if not is_container(current):
            logger.debug(f"Segment {name!r} of {path!r} is below a {current.type}")
            raise IllegalFileSystemOperation(
                f"Cannot descend into {current.type} {join_path(segments[:depth])!r}",
                path,
            )

        child_id = current.children.get(name)
        if child_id is None:
            logger.debug(f"Segment {name!r} of {path!r} not found")
            raise PathNotFound(f"Path not found: {path!r}", path)

        current = entities[child_id]

    logger.debug(f"Resolved {path!r} to entity {current.id}")
    return current
