import plistlib
import sqlite3
from pathlib import Path

import pytest

from aplib.album import Album
from aplib.audit import Reporter, SkipReason
from aplib.folder import Folder, FolderType
from aplib.library import (
    BUNDLE_IDENTIFIER,
    KEYWORDS_PLIST,
    Library,
    LibraryError,
    parse_model_info,
)
from aplib.master import Master
from aplib.version import Version
from aplib.volume import Volume


def _write(path: Path, data) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "wb") as fp:
        plistlib.dump(data, fp)
    return path


def _info(root: Path, **data) -> Path:
    return _write(root / "Info.plist", data)


def _versions_dir(root: Path) -> Path:
    return root / "Database" / "Versions" / "2011" / "01" / "01" / "20110101-1" / "item"


@pytest.fixture
def lib_root(tmp_path):
    root = tmp_path / "Test.aplibrary"
    root.mkdir()
    return root


def test_library_version(lib_root):
    _info(lib_root, CFBundleShortVersionString="3.4.5", CFBundleIdentifier=BUNDLE_IDENTIFIER)
    assert Library(lib_root).library_version() == "3.4.5"


def test_library_version_wrong_bundle(lib_root):
    _info(lib_root, CFBundleShortVersionString="3.4.5", CFBundleIdentifier="com.example.other")
    with pytest.raises(LibraryError) as err:
        Library(lib_root).library_version()
    assert err.value.reason is SkipReason.INVALID_DATA


def test_library_version_missing(lib_root):
    with pytest.raises(LibraryError) as err:
        Library(lib_root).library_version()
    assert err.value.reason is SkipReason.NOT_FOUND


def test_library_version_no_bundle_id_only_fails_in_audit(lib_root):
    _info(lib_root, CFBundleShortVersionString="3.4.5")
    assert Library(lib_root).library_version() == "3.4.5"
    with pytest.raises(LibraryError) as err:
        Library(lib_root, auditor=Reporter()).library_version()
    assert err.value.reason is SkipReason.NOT_FOUND


def test_library_version_audit(lib_root):
    path = _info(
        lib_root,
        CFBundleShortVersionString="3.4.5",
        CFBundleIdentifier=BUNDLE_IDENTIFIER,
        Extra="x",
    )
    library = Library(lib_root, auditor=Reporter())
    assert library.library_version() == "3.4.5"
    report = library.auditor.parsed[str(path)]
    assert report.ignored == {"Extra"}
    assert report.parsed == {"CFBundleShortVersionString", "CFBundleIdentifier"}


def test_model_info(lib_root):
    _write(
        lib_root / "Database" / "DataModelVersion.plist",
        {
            "DatabaseVersion": 110,
            "DatabaseMinorVersion": 230,
            "createDate": "2011-01-01",
            "masterCount": 2,
            "isIPhotoLibrary": False,
        },
    )
    info = Library(lib_root).get_model_info()
    assert info.db_version == 110
    assert info.db_minor_version == 230
    assert info.create_date == "2011-01-01"
    assert info.master_count == 2
    assert info.is_iphoto_library is False
    assert info.version_count is None


def test_parse_model_info_not_dict():
    assert parse_model_info([1, 2]) is None


def test_load_folders(lib_root):
    path = _write(
        lib_root / "Database" / "Folders" / "f1.apfolder",
        {"uuid": "F1", "parentFolderUuid": "LibraryFolder", "folderType": 2, "name": "Trip"},
    )
    library = Library(lib_root, auditor=Reporter())
    library.load_folders()
    assert library.folders == {"F1"}
    folder = library.get("F1")
    assert isinstance(folder, Folder)
    assert folder.folder_type is FolderType.PROJECT
    assert str(path) in library.auditor.parsed


def test_load_albums_parse_failure_audited(lib_root):
    bad = _write(lib_root / "Database" / "Albums" / "bad.apalbum", {"nothing": 1})
    _write(
        lib_root / "Database" / "Albums" / "good.apalbum",
        {"InfoDictionary": {"uuid": "A1", "folderUuid": "F1", "albumSubclass": 3}},
    )
    library = Library(lib_root, auditor=Reporter())
    library.load_albums()
    assert library.albums == {"A1"}
    assert isinstance(library.get("A1"), Album)
    assert library.auditor.skipped[str(bad)] is SkipReason.PARSE_FAILED


def test_load_cached(lib_root):
    folders = lib_root / "Database" / "Folders"
    _write(folders / "a.apfolder", {"uuid": "F1"})
    library = Library(lib_root)
    library.load_folders()
    _write(folders / "b.apfolder", {"uuid": "F2"})
    library.load_folders()
    assert library.folders == {"F1"}


def test_progress_cancel(lib_root):
    folders = lib_root / "Database" / "Folders"
    _write(folders / "a.apfolder", {"uuid": "F1"})
    _write(folders / "b.apfolder", {"uuid": "F2"})
    calls = []

    def progress(inc):
        calls.append(inc)
        return False

    library = Library(lib_root)
    library.load_folders(progress)
    assert calls == [1]
    assert len(library.folders) == 1


def test_load_versions_and_masters(lib_root):
    vdir = _versions_dir(lib_root)
    _write(vdir / "Version-0.apversion", {"uuid": "V1", "masterUuid": "M1", "versionNumber": 0})
    _write(vdir / "Master.apmaster", {"uuid": "M1", "projectUuid": "P1", "imagePath": "a.cr2"})
    _write(lib_root / "Database" / "Versions" / "2011" / "stray.apversion", {"uuid": "V9"})
    library = Library(lib_root)
    library.load_versions()
    library.load_masters()
    assert library.versions == {"V1"}
    assert library.masters == {"M1"}
    assert isinstance(library.get("V1"), Version)
    assert isinstance(library.get("M1"), Master)
    assert library.objects.parent_uuid("V1") == "M1"


def test_load_volumes_from_plist(lib_root):
    _write(
        lib_root / "Database" / "Volumes" / "v.apvolume",
        {"uuid": "VOL1", "volumeName": "Photos", "modelId": 3},
    )
    library = Library(lib_root)
    library.load_volumes()
    assert library.volumes == {"VOL1"}
    assert library.get("VOL1").volume_name == "Photos"


def test_load_volumes_without_database(lib_root):
    library = Library(lib_root)
    library.load_volumes()
    assert library.volumes == set()


def test_store_duplicate(lib_root):
    library = Library(lib_root)
    assert library.store(Folder(uuid="F1")) is True
    assert library.store(Folder(uuid="F1")) is False
    assert library.store(Folder()) is False


def test_resolve_master_path(lib_root):
    library = Library(lib_root)
    library.store(Master(uuid="M1", image_path="2011/a.cr2", file_volume_uuid="VOL1"))
    library.store(Volume(uuid="VOL1", volume_name="Photos"))
    library.store(Master(uuid="M2", image_path="2011/b.jpg"))
    library.store(Master(uuid="M3", image_path="c.jpg", file_volume_uuid="MISSING"))
    assert library.resolve_master_path("M1") == "/Volumes/Photos/2011/a.cr2"
    assert library.resolve_master_path("M2") == "Masters/2011/b.jpg"
    assert library.resolve_master_path("M3") is None
    assert library.resolve_master_path("VOL1") is None
    assert library.resolve_master_path("nothing") is None


def test_resolve_master_path_without_image_path(lib_root):
    library = Library(lib_root)
    library.store(Master(uuid="M1"))
    with pytest.raises(LibraryError):
        library.resolve_master_path("M1")


def test_list_keywords(lib_root):
    _write(
        lib_root / "Database" / KEYWORDS_PLIST,
        {
            "keywords_version": 7,
            "keywords": [
                {
                    "uuid": "K1",
                    "name": "Places",
                    "zChildren": [{"uuid": "K2", "name": "Paris", "parentUuid": "K1"}],
                }
            ],
        },
    )
    library = Library(lib_root, auditor=Reporter())
    keywords = library.list_keywords()
    assert [k.name for k in keywords] == ["Places"]
    assert keywords[0].children[0].parent() == "K1"
    assert "keywords_version" in library.auditor.parsed[KEYWORDS_PLIST].parsed


def test_list_keywords_missing(lib_root):
    library = Library(lib_root, auditor=Reporter())
    assert library.list_keywords() is None
    assert library.auditor.skipped[KEYWORDS_PLIST] is SkipReason.PARSE_FAILED