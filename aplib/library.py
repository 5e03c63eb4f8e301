"""An Aperture library bundle and the objects loaded from it."""

from __future__ import annotations

import os
import sqlite3
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from aplib.album import Album
from aplib.audit import Report, Reporter, SkipReason, audit_get_str_value
from aplib.folder import Folder
from aplib.keyword import Keyword, parse_keywords
from aplib.master import Master
from aplib.model import AplibObject
from aplib.plutils import get_bool_value, get_int_value, get_str_value, parse_plist
from aplib.store import ObjectStore
from aplib.version import Version
from aplib.volume import Volume

INFO_PLIST = "Info.plist"
BUNDLE_IDENTIFIER = "com.apple.Aperture.library"
DATABASE_DIR = "Database"
DATABASE_FILE = "Database/apdb/Library.apdb"

DATAMODEL_VERSION_PLIST = "DataModelVersion.plist"
KEYWORDS_PLIST = "Keywords.plist"
ALBUMS_DIR = "Albums"
FOLDERS_DIR = "Folders"
VOLUMES_DIR = "Volumes"
VERSIONS_BASE_DIR = "Versions"

_VERSIONS_DEPTH = 4

Progress = Callable[[int], bool]
"""Called with an increment after each item; returning False cancels."""

_UNSET: Any = object()


class LibraryError(Exception):
    """The bundle is not a usable library."""

    def __init__(self, message: str, reason: SkipReason) -> None:
        super().__init__(message)
        self.reason = reason


@dataclass
class ModelInfo:
    """Info of the library data model."""

    is_iphoto_library: bool | None = None
    db_version: int | None = None
    db_minor_back_compatible_version: int | None = None
    db_minor_version: int | None = None
    db_uuid: str | None = None
    create_date: str | None = None
    image_io_version: str | None = None
    raw_camera_bundle_version: str | None = None
    touched_by_aperture: bool | None = None
    master_count: int | None = None
    version_count: int | None = None
    project_compat_back_to_version: int | None = None
    project_version: int | None = None


def parse_model_info(plist: Any) -> ModelInfo | None:
    """Build the model info from the data model plist, None if not a dict."""
    if not isinstance(plist, dict):
        return None
    return ModelInfo(
        db_uuid=get_str_value(plist, "databaseUuid"),
        db_minor_back_compatible_version=get_int_value(
            plist, "DatabaseCompatibleBackToMinorVersion"
        ),
        db_minor_version=get_int_value(plist, "DatabaseMinorVersion"),
        db_version=get_int_value(plist, "DatabaseVersion"),
        is_iphoto_library=get_bool_value(plist, "isIPhotoLibrary"),
        create_date=get_str_value(plist, "createDate"),
        image_io_version=get_str_value(plist, "imageIOVersion"),
        raw_camera_bundle_version=get_str_value(plist, "rawCameraBundleVersion"),
        touched_by_aperture=get_bool_value(plist, "touchedByAperture"),
        master_count=get_int_value(plist, "masterCount"),
        version_count=get_int_value(plist, "versionCount"),
        project_version=get_int_value(plist, "projectVersion"),
        project_compat_back_to_version=get_int_value(plist, "projectCompatibleBackToVersion"),
    )


def _files_with_ext(directory: Path, ext: str) -> list[Path]:
    suffix = f".{ext}"
    return sorted(p for p in directory.iterdir() if p.suffix == suffix)


def _dirs_at_depth(path: Path, level: int) -> list[Path]:
    found: list[Path] = []
    for entry in sorted(path.iterdir()):
        if entry.is_dir():
            if level == 0:
                found.append(entry)
            else:
                found.extend(_dirs_at_depth(entry, level - 1))
    return found


class Library:
    """An Aperture library bundle directory.

    Set ``auditor`` to a :class:`Reporter` to record what is parsed.
    """

    def __init__(self, path: str | os.PathLike, auditor: Reporter | None = None) -> None:
        self.path = Path(path)
        self.auditor = auditor
        self.version = ""
        self.folders: set[str] = set()
        self.albums: set[str] = set()
        self.masters: set[str] = set()
        self.versions: set[str] = set()
        self.volumes: set[str] = set()
        self.objects = ObjectStore()
        self._database: sqlite3.Connection | None = _UNSET

    def database(self) -> sqlite3.Connection | None:
        """The main database of the library, opened once; None if it can't be."""
        if self._database is _UNSET:
            try:
                self._database = sqlite3.connect(self.path / DATABASE_FILE)
            except sqlite3.Error:
                self._database = None
        return self._database

    def store(self, obj: AplibObject) -> bool:
        """Store ``obj``; False if its uuid is missing or already used."""
        return self.objects.add(obj)

    def get(self, uuid: str) -> AplibObject | None:
        return self.objects.get(uuid)

    def _new_report(self) -> Report | None:
        return Report() if self.auditor is not None else None

    def _build_path(self, name: str, database: bool) -> Path:
        base = self.path / DATABASE_DIR if database else self.path
        return base / name

    def library_version(self) -> str:
        """The library version string, read from the bundle Info.plist.

        Raises LibraryError when the bundle isn't a library.
        """
        if self.version:
            return self.version
        plist_path = self._build_path(INFO_PLIST, False)
        plist = parse_plist(plist_path)
        report = self._new_report()
        if not isinstance(plist, dict):
            if self.auditor is not None:
                self.auditor.skip(str(plist_path), SkipReason.INVALID_TYPE)
            return self.version

        version = audit_get_str_value(plist, "CFBundleShortVersionString", report)
        if version is None:
            print("FATAL no library version found")
            raise LibraryError("no library version found", SkipReason.NOT_FOUND)
        self.version = version

        bundle_id = audit_get_str_value(plist, "CFBundleIdentifier", report)
        if bundle_id is not None:
            if bundle_id != BUNDLE_IDENTIFIER:
                if report is not None:
                    report.skip("CFBundleIdentifier", SkipReason.INVALID_DATA)
                print("FATAL not a library")
                raise LibraryError("not a library", SkipReason.INVALID_DATA)
        elif report is not None:
            report.skip("CFBundleIdentifier", SkipReason.NOT_FOUND)
            print("FATAL no bundle identifier")
            raise LibraryError("no bundle identifier", SkipReason.NOT_FOUND)

        if report is not None and self.auditor is not None:
            report.audit_ignored(plist, None)
            self.auditor.add_parsed(str(plist_path), report)
        return self.version

    def get_model_info(self) -> ModelInfo | None:
        """The data model info block."""
        return parse_model_info(parse_plist(self._build_path(DATAMODEL_VERSION_PLIST, True)))

    def _list_items(self, directory: str, ext: str) -> list[Path]:
        path = self._build_path(directory, True)
        if not path.is_dir():
            return []
        return _files_with_ext(path, ext)

    def _list_recursive_items(self, directory: str, ext: str) -> list[Path]:
        path = self._build_path(directory, True)
        if not path.is_dir():
            return []
        items: list[Path] = []
        for subdir in _dirs_at_depth(path, _VERSIONS_DEPTH):
            items.extend(_files_with_ext(subdir, ext))
        return items

    def _load_files(
        self,
        cls: type,
        files: list[Path],
        uuids: set[str],
        progress: Progress | None,
        failure: str,
    ) -> None:
        for file in files:
            report = self._new_report()
            obj = cls.from_path(file, report)
            if obj is not None:
                if obj.uuid is not None:
                    uuids.add(obj.uuid)
                    if self.auditor is not None and report is not None:
                        self.auditor.add_parsed(str(file), report)
                    self.store(obj)
            else:
                if self.auditor is not None:
                    self.auditor.skip(str(file), SkipReason.PARSE_FAILED)
                print(f"{failure} {str(file)!r}")
            if progress is not None and not progress(1):
                print("Cancelled")
                return

    def load_albums(self, progress: Progress | None = None) -> None:
        """Load albums once; later calls keep the cached result."""
        if not self.albums:
            albums: set[str] = set()
            files = self._list_items(ALBUMS_DIR, "apalbum")
            self._load_files(Album, files, albums, progress, "Failed to decode object from")
            self.albums = albums

    def load_folders(self, progress: Progress | None = None) -> None:
        """Load folders once; later calls keep the cached result."""
        if not self.folders:
            folders: set[str] = set()
            files = self._list_items(FOLDERS_DIR, "apfolder")
            self._load_files(Folder, files, folders, progress, "Failed to decode object from")
            self.folders = folders

    def _volumes_from_database(self, uuids: set[str]) -> None:
        conn = self.database()
        if conn is None:
            return
        loaded: list[Volume] = []
        try:
            rows = conn.execute(f"SELECT {Volume.COLUMNS} FROM {Volume.TABLES}").fetchall()
        except sqlite3.Error:
            return
        for row in rows:
            try:
                volume = Volume.from_row(row)
            except TypeError:
                continue
            if volume.uuid is not None:
                uuids.add(volume.uuid)
                loaded.append(volume)
        for volume in loaded:
            self.store(volume)

    def load_volumes(self, progress: Progress | None = None) -> None:
        """Load volumes from their plists, or from the database if there are none."""
        if not self.volumes:
            volumes: set[str] = set()
            files = self._list_items(VOLUMES_DIR, "apvolume")
            if files:
                self._load_files(Volume, files, volumes, progress, "Error decoding object from")
            else:
                self._volumes_from_database(volumes)
            self.volumes = volumes

    def load_versions(self, progress: Progress | None = None) -> None:
        """Load versions once; later calls keep the cached result."""
        if not self.versions:
            versions: set[str] = set()
            files = self._list_recursive_items(VERSIONS_BASE_DIR, "apversion")
            self._load_files(Version, files, versions, progress, "Error decoding object from")
            self.versions = versions

    def load_masters(self, progress: Progress | None = None) -> None:
        """Load masters once; later calls keep the cached result."""
        if not self.masters:
            masters: set[str] = set()
            files = self._list_recursive_items(VERSIONS_BASE_DIR, "apmaster")
            self._load_files(Master, files, masters, progress, "Error decoding object from")
            self.masters = masters

    def resolve_master_path(self, uuid: str) -> str | None:
        """On-disk location of a master: on its volume or inside the library.

        Raises LibraryError if the master has no image path.
        """
        master = self.get(uuid)
        if not isinstance(master, Master):
            return None
        image_path = master.image_path
        if image_path is None:
            raise LibraryError(f"master {uuid} has no image path", SkipReason.NOT_FOUND)
        if master.file_volume_uuid is not None:
            volume = self.get(master.file_volume_uuid)
            if not isinstance(volume, Volume):
                return None
            return f"/Volumes/{volume.volume_name or ''}/{image_path}"
        return f"Masters/{image_path}"

    def list_keywords(self) -> list[Keyword] | None:
        """The keywords of the library, None if they can't be parsed."""
        report = self._new_report()
        result = parse_keywords(self._build_path(KEYWORDS_PLIST, True), report)
        if self.auditor is not None:
            if result is not None and report is not None:
                self.auditor.add_parsed(KEYWORDS_PLIST, report)
            else:
                self.auditor.skip(KEYWORDS_PLIST, SkipReason.PARSE_FAILED)
        return result