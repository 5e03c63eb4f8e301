"""Command line tool to dump, audit, list and show the tree of a library."""

from __future__ import annotations

import argparse
import os
import sys
from collections.abc import Sequence

from aplib.album import Album, AlbumSubclass
from aplib.audit import Report, Reporter
from aplib.folder import Folder, FolderType
from aplib.keyword import Keyword
from aplib.library import Library, LibraryError, ModelInfo
from aplib.master import Master
from aplib.tree import process_tree
from aplib.version import Version
from aplib.volume import Volume


class _Progress:
    """Progress shown on stderr: a spinner, or a counter when the total is known."""

    _TICKS = "|/-\\"

    def __init__(self, total: int | None = None) -> None:
        self._total = total
        self._count = 0

    def __call__(self, inc: int) -> bool:
        self._count += inc
        if self._total is None:
            sys.stderr.write(f"\r{self._TICKS[self._count % len(self._TICKS)]}")
        else:
            sys.stderr.write(f"\r{self._count}/{self._total}")
        sys.stderr.flush()
        return True

    def __enter__(self) -> _Progress:
        return self

    def __exit__(self, *exc: object) -> None:
        sys.stderr.write("\n")
        sys.stderr.flush()


def _bool_str(value: bool) -> str:
    return "true" if value else "false"


def print_report(report: Report) -> None:
    """Print the ignored and skipped keys of ``report``."""
    print(f"+---- Ignored {len(report.ignored)}")
    for key in sorted(report.ignored):
        print(f"    +- {key}")
    print(f"+---- Skipped {len(report.skipped)}")
    for key in sorted(report.skipped):
        print(f"    +- {key} ({report.skipped[key].value})")


def print_keywords(keywords: Sequence[Keyword], indent: str) -> None:
    """Print keywords, indenting children below their parent."""
    for keyword in keywords:
        if not keyword.is_valid():
            continue
        name = keyword.name or ""
        parent = keyword.parent() or ""
        print(f"| {keyword.uuid:<26} | {parent:<26} | {indent}{name}")
        if keyword.children is not None:
            new_indent = "+- " + indent if not indent else "\t" + indent
            print_keywords(keyword.children, new_indent)


def process_list(path: str | os.PathLike) -> None:
    """Print the on-disk path of every master."""
    library = Library(path)
    try:
        library.library_version()
    except LibraryError:
        print("Invalid library")
        return
    library.load_volumes()
    library.load_masters()
    for uuid in sorted(library.masters):
        if not uuid:
            continue
        try:
            master_path = library.resolve_master_path(uuid)
        except LibraryError:
            master_path = None
        if master_path is not None:
            print(master_path)
        else:
            print(f"Can't resolve master path for {uuid}", file=sys.stderr)


def process_audit(path: str | os.PathLike) -> None:
    """Load everything with an auditor and print what was skipped or ignored."""
    library = Library(path, auditor=Reporter())
    try:
        library.library_version()
    except LibraryError:
        print("Invalid library")
        return
    library.load_volumes()
    library.load_folders()
    library.load_albums()
    library.load_masters()
    library.load_versions()

    auditor = library.auditor
    print("Audit:")
    print(f"Parsed {len(auditor.parsed)}")
    print("+-----------------------------")
    for key in sorted(auditor.parsed):
        report = auditor.parsed[key]
        if report.skipped or report.ignored:
            print(f"| {key} ")
            print_report(report)
    print("+-----------------------------")
    print(f"Skipped {len(auditor.skipped)}")
    for key in sorted(auditor.skipped):
        print(f"| {key} ")
    print(f"Ignored {len(auditor.ignored)}")
    for key in sorted(auditor.ignored):
        print(f"| {key} ")


def _dump_volumes(library: Library) -> None:
    with _Progress() as progress:
        library.load_volumes(progress)
    print(f"{len(library.volumes)} Volumes:")
    print("| Name                   | uuid                   | Disk UUID                            | id   |")
    print("+------------------------+------------------------+--------------------------------------+------+")
    for uuid in sorted(library.volumes):
        if not uuid:
            continue
        volume = library.get(uuid)
        if isinstance(volume, Volume):
            print(
                f"| {volume.volume_name or '':<22} | {volume.uuid:<22} | "
                f"{volume.disk_uuid or '':<36} | {volume.get_model_id():>4} |"
            )
        else:
            print("Folder not found.")


def _dump_folders(library: Library) -> None:
    with _Progress() as progress:
        library.load_folders(progress)
    print(f"{len(library.folders)} Folders:")
    print("| Name                   | uuid                   | parent                 | impl album                            | type      | model id | path")
    print("+------------------------+------------------------+------------------------+---------------------------------------+-----------+----------+----------")
    for uuid in sorted(library.folders):
        if not uuid:
            continue
        folder = library.get(uuid)
        if isinstance(folder, Folder):
            folder_type = folder.folder_type or FolderType.INVALID
            type_num = int(folder.folder_type) if folder.folder_type is not None else 0
            print(
                f"| {folder.name or '':<22} | {folder.uuid:<22} | {folder.parent() or '':<22} | "
                f"{folder.implicit_album_uuid or '':<37} | "
                f"{folder_type.name.capitalize():<7}{type_num:>2} | "
                f"{folder.get_model_id():>8} | {folder.path or ''}"
            )
        else:
            print(f"folder {uuid} not found")


def _dump_albums(library: Library) -> None:
    with _Progress() as progress:
        library.load_albums(progress)
    print(f"{len(library.albums)} Albums:")
    print("| uuid                                  | parent (fldr)              | query (fldr)               | type | class      | model id | name")
    print("+---------------------------------------+----------------------------+----------------------------+------+------------+----------+-----")
    for uuid in sorted(library.albums):
        if not uuid:
            continue
        album = library.get(uuid)
        if isinstance(album, Album):
            subclass = album.subclass or AlbumSubclass.INVALID
            class_num = int(album.subclass) if album.subclass is not None else 0
            album_type = album.album_type if album.album_type is not None else 0
            print(
                f"| {album.uuid:<37} | {album.parent() or '':<26} | "
                f"{album.query_folder_uuid or '':<26} | {album_type:>4} | "
                f"{subclass.name.capitalize():<8}{class_num:>2} | "
                f"{album.get_model_id():>8} | {album.name or ''}"
            )
        else:
            print(f"album {uuid} not found")


def _dump_keywords(library: Library) -> None:
    keywords = library.list_keywords()
    if keywords is None:
        return
    print(f"{len(keywords)} keywords:")
    print("| uuid                       | parent                     | name")
    print("+----------------------------+----------------------------+-----------")
    print_keywords(keywords, "")


def _dump_masters(model_info: ModelInfo, library: Library) -> None:
    with _Progress(model_info.master_count or 0) as progress:
        library.load_masters(progress)
    print(f"{len(library.masters)} Masters:")
    print("| uuid                   | project                | alternate              | mtyp | subt  | orig | path")
    print("+------------------------+------------------------+------------------------+------+-------+-----------------------")
    for uuid in sorted(library.masters):
        if not uuid:
            continue
        master = library.get(uuid)
        if isinstance(master, Master):
            print(
                f"| {master.uuid:<22} | {master.parent() or '':<22} | "
                f"{master.alternate_master or '':<22} | {master.master_type or '':<4} | "
                f"{master.subtype or '':<5} | {master.original_version_uuid or ''} | "
                f"{master.image_path or ''}"
            )
        else:
            print(f"master {uuid} not found")


def _dump_versions(model_info: ModelInfo, library: Library) -> None:
    with _Progress(model_info.version_count or 0) as progress:
        library.load_versions(progress)
    print(f"{len(library.versions)} Versions:")
    print("| uuid                   | master                 | project                | orig  | raw   | num | name")
    print("+------------------------+------------------------+------------------------+-------+-------+-----+------------")
    for uuid in sorted(library.versions):
        if not uuid:
            continue
        version = library.get(uuid)
        if isinstance(version, Version):
            raw_master = version.raw_master_uuid == version.master_uuid
            num = str(version.version_number) if version.version_number is not None else ""
            print(
                f"| {version.uuid:<22} | {version.parent() or '':<22} | "
                f"{version.project_uuid or '':<22} | "
                f"{_bool_str(bool(version.is_original)):>5} | {_bool_str(raw_master):>5} | "
                f"{num:>3} | {version.name or ''}"
            )
        else:
            print(f"version {uuid} not found")


def process_dump(args: argparse.Namespace) -> None:
    """Print the model info and the objects selected by ``args``."""
    library = Library(args.path)
    try:
        version = library.library_version()
    except LibraryError:
        print("Version not found.")
        return
    print(f"Version {version}")

    model_info = library.get_model_info() or ModelInfo()
    print("model info")
    print(f"\tDB version: {model_info.db_version or 0}")
    print(f"\tDB minor version: {model_info.db_minor_version or 0}")
    print(f"\tDB back compat: {model_info.db_minor_back_compatible_version or 0}")
    print(f"\tProject version: {model_info.project_version or 0}")
    print(f"\tCreation date: {model_info.create_date or 'NONE'}")
    print(
        f"\tImageIO: {model_info.image_io_version or 'NONE'} "
        f"Camera RAW: {model_info.raw_camera_bundle_version or 'NONE'}"
    )

    if args.all or args.volumes:
        _dump_volumes(library)
    if args.all or args.folders:
        _dump_folders(library)
    if args.all or args.albums:
        _dump_albums(library)
    if args.all or args.keywords:
        _dump_keywords(library)
    if args.all or args.masters:
        _dump_masters(model_info, library)
    if args.all or args.versions:
        _dump_versions(model_info, library)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dumper", description="Extract data from Aperture libraries."
    )
    commands = parser.add_subparsers(dest="command", required=True)
    for name in ("dump", "audit", "list"):
        sub = commands.add_parser(name)
        for flag in ("all", "albums", "versions", "masters", "folders", "keywords", "volumes"):
            sub.add_argument(f"--{flag}", action="store_true")
        sub.add_argument("path")
    tree = commands.add_parser("tree")
    tree.add_argument("--skip-masters", action="store_true")
    tree.add_argument("path")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point of the command line tool."""
    args = _build_parser().parse_args(argv)
    if args.command == "dump":
        process_dump(args)
    elif args.command == "audit":
        process_audit(args.path)
    elif args.command == "list":
        process_list(args.path)
    else:
        process_tree(args.path, args.skip_masters)
    return 0


if __name__ == "__main__":
    sys.exit(main())