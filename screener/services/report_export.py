import csv
import io
from pathlib import Path
from typing import Any, Iterable

from screener.agents.nodes.finalize import RATING_FIELD, STATUS_FIELD, SUMMARY_FIELD

RESULT_FIELDS = (STATUS_FIELD, RATING_FIELD, SUMMARY_FIELD)


def report_columns(rows: Iterable[dict[str, Any]]) -> list[str]:
    columns: list[str] = []
    seen: set[str] = set()
    for row in rows:
        for key in row:
            if key in RESULT_FIELDS or key in seen:
                continue
            seen.add(key)
            columns.append(key)
    return [*columns, *RESULT_FIELDS]


def rows_to_csv(rows: list[dict[str, Any]]) -> str:
    buffer = io.StringIO()
    writer = csv.DictWriter(buffer, fieldnames=report_columns(rows), extrasaction="ignore", lineterminator="\n")
    writer.writeheader()
    for row in rows:
        writer.writerow({key: ("" if value is None else value) for key, value in row.items()})
    return buffer.getvalue()


def read_records_csv(path: Path) -> list[dict[str, str]]:
    records: list[dict[str, str]] = []
    with path.open(newline="", encoding="utf-8-sig") as handle:
        for row in csv.DictReader(handle):
            record = {
                key.strip(): value.strip()
                for key, value in row.items()
                if key and isinstance(value, str)
            }
            if any(record.values()):
                records.append(record)
    return records
