"""
Unit tests for drivefs/models.py
"""
import pytest
from drivefs.models import (
    DriveNode,
    FolderNode,
    ZipFileNode,
    TextFileNode,
    is_container,
)


def test_text_file_node_creation():
    """Test creating a TextFileNode with correct attributes."""
    text_file = TextFileNode(id=123, name="a.txt", parent_id=7)

    assert text_file.id == 123
    assert text_file.name == "a.txt"
    assert text_file.parent_id == 7
    assert text_file.type == "text_file"
    assert text_file.content == ""


def test_folder_node_creation():
    """Test creating a FolderNode with correct attributes."""
    folder_node = FolderNode(id=456, name="docs", parent_id=0)

    assert folder_node.id == 456
    assert folder_node.type == "folder"
    assert folder_node.parent_id == 0
    assert folder_node.children == {}


def test_zip_file_node_creation():
    """Test creating a ZipFileNode with correct attributes."""
    zip_node = ZipFileNode(id=789, name="z", parent_id=0)

    assert zip_node.type == "zip_file"
    assert zip_node.children == {}


def test_drive_node_has_no_parent():
    """Test that a DriveNode is a parentless container."""
    drive = DriveNode(id=0, name="drive")

    assert drive.type == "drive"
    assert drive.parent_id is None
    assert drive.children == {}


def test_children_are_separate_per_instance():
    """Test that containers do not share their children maps."""
    first = FolderNode(id=1, name="a", parent_id=0)
    second = FolderNode(id=2, name="b", parent_id=0)

    first.children["x"] = 3

    assert second.children == {}


@pytest.mark.parametrize("entity,expected", [
    (DriveNode(id=0, name="drive"), True),
    (FolderNode(id=1, name="f", parent_id=0), True),
    (ZipFileNode(id=2, name="z", parent_id=0), True),
    (TextFileNode(id=3, name="t", parent_id=0), False),
    (None, False),
])
def test_is_container(entity, expected):
    """Test container detection for every variant."""
    assert is_container(entity) is expected
