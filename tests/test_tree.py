import plistlib

import pytest

from aplib.album import Album, AlbumSubclass
from aplib.folder import Folder, FolderType
from aplib.library import Library
from aplib.master import Master
from aplib.tree import TOP_LEVEL, add_object, build_tree, print_children_for, process_tree
from aplib.version import Version


@pytest.fixture
def library(tmp_path):
    lib = Library(tmp_path)
    objects = [
        Folder(uuid="f1", parent_uuid=TOP_LEVEL, folder_type=FolderType.FOLDER, name="Pictures"),
        Album(uuid="a1", folder_uuid="f1", subclass=AlbumSubclass.USER, album_type=1, name="Trip"),
        Master(uuid="m1", project_uuid="f1", name="img"),
        Version(uuid="v1", master_uuid="m1", version_number=0, name="img"),
    ]
    for obj in objects:
        lib.store(obj)
    lib.folders.add("f1")
    lib.albums.add("a1")
    lib.masters.add("m1")
    lib.versions.add("v1")
    return lib


def test_add_object_links_parent_and_child(library):
    tree = {}
    add_object("a1", tree, library)
    assert tree["f1"] == ["a1"]
    assert tree["a1"] == []


def test_add_object_missing(library, capsys):
    tree = {}
    add_object("nope", tree, library)
    assert tree == {}
    assert "ERROR: Object nope not found" in capsys.readouterr().out


def test_build_tree(library):
    tree = build_tree(library)
    assert tree[TOP_LEVEL] == ["f1"]
    assert tree["f1"] == ["a1", "m1"]
    assert tree["m1"] == ["v1"]
    assert tree["v1"] == []


def test_print_children(library, capsys):
    tree = build_tree(library)
    print_children_for(TOP_LEVEL, tree, library, False, 2)
    lines = capsys.readouterr().out.splitlines()
    assert lines == ["  [FF] Pictures", "    [AU] Trip", "    [M] img", "      [V0] img"]


def test_print_children_skip_masters(library, capsys):
    tree = build_tree(library)
    print_children_for(TOP_LEVEL, tree, library, True, 2)
    out = capsys.readouterr().out
    assert "[M]" not in out
    assert "[V0]" not in out
    assert "    (Skipped 1 masters and 0 versions.)" in out.splitlines()


def test_unknown_album_type_and_missing_version_number(tmp_path, capsys):
    lib = Library(tmp_path)
    lib.store(Album(uuid="a2", folder_uuid=TOP_LEVEL, album_type=2, name="Odd"))
    lib.store(Version(uuid="v2", master_uuid=TOP_LEVEL, name="pic"))
    tree = {}
    add_object("a2", tree, lib)
    add_object("v2", tree, lib)
    print_children_for(TOP_LEVEL, tree, lib, False, 0)
    out = capsys.readouterr().out
    assert "ERROR: unknown type 2" in out
    assert "[V-1] pic" in out
    assert "[A] Odd" in out


def test_process_tree(tmp_path, capsys):
    folder_file = tmp_path / "Database" / "Folders" / "x.apfolder"
    folder_file.parent.mkdir(parents=True)
    folder_file.write_bytes(
        plistlib.dumps(
            {"uuid": "fx", "parentFolderUuid": TOP_LEVEL, "folderType": 2, "name": "Holidays"}
        )
    )
    process_tree(tmp_path, False)
    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == "TOP LEVEL"
    assert "  [FP] Holidays" in lines