"""Print the hierarchy of folders, albums, masters and versions of a library."""

from __future__ import annotations

import os

from aplib.album import Album, AlbumSubclass
from aplib.folder import Folder, FolderType
from aplib.library import Library
from aplib.master import Master
from aplib.version import Version

Tree = dict[str, list[str]]

TOP_LEVEL = "LibraryFolder"

_ALBUM_LETTERS = {
    AlbumSubclass.IMPLICIT: "I",
    AlbumSubclass.SMART: "S",
    AlbumSubclass.USER: "U",
    AlbumSubclass.INVALID: "*",
}

_FOLDER_LETTERS = {
    FolderType.FOLDER: "F",
    FolderType.PROJECT: "P",
    FolderType.INVALID: "*",
}


def add_object(uuid: str, tree: Tree, library: Library) -> None:
    """Add the object ``uuid`` to ``tree`` under its parent."""
    obj = library.get(uuid)
    if obj is None:
        print(f"ERROR: Object {uuid} not found")
        return
    parent = obj.parent()
    if parent is not None:
        tree.setdefault(parent, []).append(uuid)
    tree.setdefault(uuid, [])


def build_tree(library: Library) -> Tree:
    """Tree of the loaded folders, albums, masters and versions, keyed by parent."""
    tree: Tree = {}
    for uuids in (library.folders, library.albums, library.masters, library.versions):
        for uuid in sorted(uuids):
            add_object(uuid, tree, library)
    return tree


def _type_label(obj: object) -> str:
    if isinstance(obj, Album):
        if obj.album_type is not None and obj.album_type != 1:
            print(f"ERROR: unknown type {obj.album_type}")
        return "A" + _ALBUM_LETTERS.get(obj.subclass, "")
    if isinstance(obj, Folder):
        return "F" + _FOLDER_LETTERS.get(obj.folder_type, "")
    if isinstance(obj, Version):
        number = obj.version_number if obj.version_number is not None else -1
        return f"V{number}"
    if isinstance(obj, Master):
        return "M"
    return "*"


def _name_of(obj: object) -> str:
    if isinstance(obj, (Folder, Album, Version, Master)):
        return obj.name or ""
    return ""


def print_children_for(
    uuid: str, tree: Tree, library: Library, skip_masters: bool, indent: int
) -> None:
    """Print the children of ``uuid``, recursively, indented by ``indent`` spaces."""
    children = tree.get(uuid)
    if children is None:
        return
    skipped_masters = 0
    skipped_versions = 0
    pad = " " * indent
    for child in children:
        obj = library.get(child)
        if obj is None:
            raise KeyError(child)
        if skip_masters:
            if isinstance(obj, Master):
                skipped_masters += 1
                continue
            if isinstance(obj, Version):
                skipped_versions += 1
                continue
        print(pad, end="")
        label = _type_label(obj)
        print(f"[{label}] {_name_of(obj)}")
        print_children_for(child, tree, library, skip_masters, indent + 2)
    if skip_masters and (skipped_masters or skipped_versions):
        print(
            f"{pad}(Skipped {skipped_masters} masters and {skipped_versions} versions.)"
        )


def process_tree(path: str | os.PathLike, skip_masters: bool = False) -> None:
    """Load the library at ``path`` and print its tree."""
    library = Library(path)
    library.load_folders()
    library.load_albums()
    library.load_masters()
    library.load_versions()
    tree = build_tree(library)
    print("TOP LEVEL")
    print_children_for(TOP_LEVEL, tree, library, skip_masters, 2)