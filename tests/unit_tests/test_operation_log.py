import asyncio

from services.log_service import (
    HEADER_ROW,
    OperationLog,
    OperationLogEntry,
    OperationType,
    format_row,
)


def _record_all(log: OperationLog, entries):
    async def run():
        return await asyncio.gather(*(log.record(entry) for entry in entries))
    return asyncio.run(run())


def test_header_row_layout():
    assert HEADER_ROW.startswith("Type" + " " * 26 + "Filename")
    assert HEADER_ROW.index("Filename") == 30
    assert HEADER_ROW.index("File ID") == 65
    assert HEADER_ROW.index("URL") == 115
    assert HEADER_ROW.endswith("URL\n")


def test_format_row__fixed_width_columns():
    row = format_row(OperationLogEntry(
        operation_type=OperationType.PUBLIC_URL,
        filename="report.pdf",
        file_id="1AbC",
        url="https://drive.google.com/file/d/1AbC/view"
    ))

    assert row[:30].rstrip() == "public_URL"
    assert row[30:65].rstrip() == "report.pdf"
    assert row[65:115].rstrip() == "1AbC"
    assert row[115:] == "https://drive.google.com/file/d/1AbC/view\n"


def test_format_row__long_values_are_not_truncated():
    long_name = "x" * 50
    row = format_row(OperationLogEntry(
        operation_type=OperationType.UPLOAD, filename=long_name, file_id="id1"
    ))

    assert long_name in row
    assert row.rstrip().endswith("id1")


def test_record__creates_file_with_header(log_path):
    log = OperationLog(log_path)
    entry = OperationLogEntry(operation_type=OperationType.UPLOAD, filename="a.txt", file_id="id-1")

    assert _record_all(log, [entry]) == [True]

    lines = log_path.read_text().splitlines(keepends=True)
    assert lines == [HEADER_ROW, format_row(entry)]


def test_record__never_duplicates_header(log_path):
    log = OperationLog(log_path)
    _record_all(log, [OperationLogEntry(operation_type=OperationType.UPLOAD, filename="a.txt", file_id="id-1")])

    # a fresh writer on an existing file must not add a second header
    second = OperationLog(log_path)
    _record_all(second, [OperationLogEntry(operation_type=OperationType.DELETE, filename="a.txt", file_id="id-1")])

    content = log_path.read_text()
    assert content.count("File ID") == 1
    lines = content.splitlines()
    assert [line.split()[0] for line in lines[1:]] == ["upload", "delete"]


def test_record__creates_missing_parent_directory(tmp_path):
    path = tmp_path / "nested" / "dir" / "log.txt"
    log = OperationLog(path)

    _record_all(log, [OperationLogEntry(operation_type=OperationType.UPLOAD, filename="a", file_id="b")])

    assert path.read_text().startswith(HEADER_ROW)


def test_record__concurrent_appends_keep_every_row(log_path):
    log = OperationLog(log_path)
    entries = [
        OperationLogEntry(operation_type=OperationType.UPLOAD, filename=f"file-{i}.txt", file_id=f"id-{i}")
        for i in range(50)
    ]

    results = _record_all(log, entries)

    assert all(results)
    lines = log_path.read_text().splitlines(keepends=True)
    assert lines[0] == HEADER_ROW
    assert sorted(lines[1:]) == sorted(format_row(entry) for entry in entries)


def test_record__write_failure_is_swallowed(tmp_path, caplog):
    # the log path is a directory, so opening it for append fails
    log = OperationLog(tmp_path)
    entry = OperationLogEntry(operation_type=OperationType.DELETE, filename="a", file_id="b")

    assert _record_all(log, [entry]) == [False]
    assert "Operation log write failed" in caplog.text
