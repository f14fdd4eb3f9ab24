import os
from datetime import datetime

from activity_log import ActivityLog


def test_record_appends_one_line(tmp_path):
    path = tmp_path / "activity.log"
    log = ActivityLog(str(path))
    when = datetime(2024, 1, 2, 3, 4, 5)
    assert log.record("encrypt", 5, "/d/a.txt", "/d/5c.a.txt", when=when)
    assert log.record("decrypt", 5, "/d/5c.a.txt", "/d/a.txt", when=when)
    assert path.read_text().splitlines() == [
        "2024-01-02T03:04:05 encrypt 5 /d/a.txt -> /d/5c.a.txt",
        "2024-01-02T03:04:05 decrypt 5 /d/5c.a.txt -> /d/a.txt",
    ]


def test_undecodable_name_is_escaped(tmp_path):
    path = tmp_path / "activity.log"
    name = os.fsdecode(b"\xff.txt")
    assert ActivityLog(str(path)).record("encrypt", 1, name, "1c." + name)
    line = path.read_text(encoding="utf-8")
    assert "\\udcff.txt" in line


def test_appends_to_corrupt_log(tmp_path):
    path = tmp_path / "activity.log"
    path.write_bytes(b"\xff\xfe garbage\n")
    assert ActivityLog(str(path)).record("encrypt", 1, "/a", "/1c.a")
    assert path.read_bytes().startswith(b"\xff\xfe garbage\n")


def test_persist_failure_is_best_effort(tmp_path):
    log = ActivityLog(str(tmp_path / "missing-dir" / "activity.log"))
    assert log.persist("entry") is False
    assert log.persist("") is False
