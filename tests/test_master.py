import plistlib
from datetime import datetime, timezone

from aplib.audit import Report, SkipReason
from aplib.master import Master
from aplib.model import AplibType

MASTER_PLIST = {
    "uuid": "JpLq7STrRMmgm5YZTm6IzA",
    "projectUuid": "evHgvM2oQ3GR0j6gEMnNTQ",
    "originalVersionUuid": "VF%CkiTKQy+h53Oyr7KCOA",
    "colorSpaceName": "kCGColorSpaceGenericHDR",
    "fileIsReference": True,
    "fileName": "img_8826.cr2",
    "type": "IMGT",
    "subtype": "RAWST",
    "modelId": 42,
    "imagePath": "2011/img_8826.cr2",
    "fileSize": 12345,
    "createDate": datetime(2011, 5, 6, 7, 8, 9),
    "colorSpaceDefinition": b"\x01\x02",
    "notes": [{"note": "hello", "uuid": "note-1"}],
}


def _write(tmp_path, data, name="Master.apmaster"):
    path = tmp_path / name
    with open(path, "wb") as fp:
        plistlib.dump(data, fp)
    return path


def test_master_parse(tmp_path):
    master = Master.from_path(_write(tmp_path, MASTER_PLIST), None)
    assert master is not None
    assert master.uuid == "JpLq7STrRMmgm5YZTm6IzA"
    assert master.project_uuid == "evHgvM2oQ3GR0j6gEMnNTQ"
    assert master.original_version_uuid == "VF%CkiTKQy+h53Oyr7KCOA"
    assert master.color_space_name == "kCGColorSpaceGenericHDR"
    assert master.is_reference is True
    assert master.filename == "img_8826.cr2"
    assert master.master_type == "IMGT"
    assert master.subtype == "RAWST"


def test_master_other_fields(tmp_path):
    master = Master.from_path(_write(tmp_path, MASTER_PLIST))
    assert master.image_path == "2011/img_8826.cr2"
    assert master.file_size == 12345
    assert master.create_date == datetime(2011, 5, 6, 7, 8, 9, tzinfo=timezone.utc)
    assert master.colour_space_definition == b"\x01\x02"
    assert master.notes is not None and master.notes[0].note == "hello"
    assert master.file_volume_uuid is None


def test_master_object_interface(tmp_path):
    master = Master.from_path(_write(tmp_path, MASTER_PLIST))
    assert master.obj_type() is AplibType.MASTER
    assert master.parent() == "evHgvM2oQ3GR0j6gEMnNTQ"
    assert master.get_model_id() == 42
    assert master.is_valid()


def test_master_without_uuid_is_invalid(tmp_path):
    master = Master.from_path(_write(tmp_path, {"name": "x"}))
    assert master.uuid is None
    assert not master.is_valid()
    assert master.get_model_id() == 0


def test_master_not_a_dict(tmp_path):
    assert Master.from_path(_write(tmp_path, ["a", "b"])) is None


def test_master_audit(tmp_path):
    data = dict(MASTER_PLIST, fileAliasData=b"zz", mysteryKey=1)
    report = Report()
    Master.from_path(_write(tmp_path, data), report)
    assert "uuid" in report.parsed
    assert report.skipped["fileAliasData"] is SkipReason.IGNORE
    assert report.skipped["plistWriteTimestamp"] is SkipReason.IGNORE
    assert report.skipped["alternateMasterUuid"] is SkipReason.NOT_FOUND
    assert "mysteryKey" in report.ignored
    assert "fileAliasData" not in report.ignored