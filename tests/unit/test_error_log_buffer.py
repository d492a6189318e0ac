from __future__ import annotations

import json
from pathlib import Path

from sales_history.logging.error_log import ErrorLogBuffer, ErrorRecord


def test_error_record_creation_and_json_line():
    rec = ErrorRecord.create(file="sales.csv", line=10, error_type="ROW_ERROR", message="too many fields")
    data = json.loads(rec.to_json_line())
    assert data["file"] == "sales.csv"
    assert data["line"] == 10
    assert data["error_type"] == "ROW_ERROR"
    assert data["timestamp"].endswith("Z")
    assert set(data.keys()) == {"timestamp", "file", "line", "error_type", "message"}


def test_error_record_keeps_non_ascii():
    rec = ErrorRecord.create("sales.csv", -1, "FIELD_PARSE_ERROR", "Could not parse price string '£x'")
    assert "£x" in rec.to_json_line()


def test_error_log_buffer_flush(temp_workdir: Path):
    buf = ErrorLogBuffer()
    buf.append(ErrorRecord.create("a.csv", 1, "SCHEMA_ERROR", "Column user_id not found"))
    buf.append(ErrorRecord.create("b.csv", -1, "TRAILER_ERROR", "no seller id"))
    path = buf.flush()
    assert path is not None and path.exists()
    assert path.parent == Path("logs")
    lines = path.read_text(encoding="utf-8").strip().splitlines()
    assert len(lines) == 2
    assert len(buf) == 0


def test_error_log_buffer_empty_flush_creates_nothing(tmp_path: Path):
    buf = ErrorLogBuffer(logs_dir=tmp_path / "logs")
    assert buf.flush() is None
    assert not (tmp_path / "logs").exists()


def test_error_log_buffer_multiple_flushes_append(tmp_path: Path):
    buf = ErrorLogBuffer(logs_dir=tmp_path)
    buf.append(ErrorRecord.create("f.csv", 1, "ROW_ERROR", "x"))
    path = buf.flush()
    size1 = path.stat().st_size
    buf.append(ErrorRecord.create("f.csv", 2, "ROW_ERROR", "y"))
    path2 = buf.flush()
    assert path == path2
    assert path2.stat().st_size > size1
