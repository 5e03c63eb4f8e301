import plistlib

import pytest

from aplib.audit import Report, SkipReason
from aplib.cli import main, print_keywords, print_report
from aplib.keyword import Keyword
from aplib.library import BUNDLE_IDENTIFIER


def _write(path, data):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(plistlib.dumps(data))


@pytest.fixture
def lib(tmp_path):
    root = tmp_path / "Test.aplibrary"
    _write(
        root / "Info.plist",
        {"CFBundleShortVersionString": "3.4.5", "CFBundleIdentifier": BUNDLE_IDENTIFIER},
    )
    _write(root / "Database" / "DataModelVersion.plist", {"DatabaseVersion": 110})
    _write(
        root / "Database" / "Folders" / "p.apfolder",
        {
            "uuid": "proj1",
            "parentFolderUuid": "LibraryFolder",
            "folderType": 2,
            "name": "Trips",
            "folderPath": "1/5/",
            "modelId": 5,
            "unknownKey": "x",
        },
    )
    _write(
        root / "Database" / "Versions" / "2011" / "01" / "02" / "20110102-1" / "img" / "Master.apmaster",
        {"uuid": "m1", "projectUuid": "proj1", "imagePath": "2011/img.cr2", "name": "img"},
    )
    _write(
        root / "Database" / "Keywords.plist",
        {
            "keywords_version": 7,
            "keywords": [{"uuid": "k1", "name": "Nature", "zChildren": [
                {"uuid": "k2", "parentUuid": "k1", "name": "Trees"}
            ]}],
        },
    )
    return root


def test_print_report_sorted(capsys):
    report = Report()
    report.ignore("b")
    report.ignore("a")
    report.skip("x", SkipReason.NOT_FOUND)
    print_report(report)
    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == "+---- Ignored 2"
    assert lines[1:3] == ["    +- a", "    +- b"]
    assert lines[3] == "+---- Skipped 1"
    assert lines[4] == "    +- x (NotFound)"


def test_print_keywords_hierarchy(capsys):
    child = Keyword(uuid="k2", parent_uuid="k1", name="Trees")
    invalid = Keyword(name="ghost")
    keywords = [Keyword(uuid="k1", name="Nature", children=[child]), invalid]
    print_keywords(keywords, "")
    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == 2
    assert lines[0].endswith("| Nature")
    assert lines[1].endswith("| +- Trees")
    assert lines[1].startswith("| k2 ")


def test_list_resolves_masters(lib, capsys):
    assert main(["list", str(lib)]) == 0
    assert "Masters/2011/img.cr2" in capsys.readouterr().out.splitlines()


def test_list_invalid_library(tmp_path, capsys):
    main(["list", str(tmp_path)])
    assert "Invalid library" in capsys.readouterr().out


def test_audit_reports_unknown_key(lib, capsys):
    main(["audit", str(lib)])
    out = capsys.readouterr().out
    assert out.startswith("Audit:")
    assert "    +- unknownKey" in out.splitlines()


def test_dump_folders_and_keywords(lib, capsys):
    main(["dump", "--folders", "--keywords", str(lib)])
    out = capsys.readouterr().out
    lines = out.splitlines()
    assert lines[0] == "Version 3.4.5"
    assert "\tDB version: 110" in lines
    assert "1 Folders:" in lines
    row = next(line for line in lines if "Trips" in line)
    assert "proj1" in row and "Project" in row
    assert "1 keywords:" in lines


def test_dump_all_lists_masters(lib, capsys):
    main(["dump", "--all", str(lib)])
    out = capsys.readouterr().out
    assert "1 Masters:" in out.splitlines()
    assert "2011/img.cr2" in out


def test_dump_invalid_library(tmp_path, capsys):
    main(["dump", str(tmp_path)])
    assert "Version not found." in capsys.readouterr().out


def test_tree_command(lib, capsys):
    main(["tree", "--skip-masters", str(lib)])
    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == "TOP LEVEL"
    assert "  [FP] Trips" in lines
    assert "    (Skipped 1 masters and 0 versions.)" in lines


def test_missing_command_exits():
    with pytest.raises(SystemExit):
        main([])