"""Batch export of records to CSV or JSON lines."""
import json
import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

import pandas as pd

from convlog.pipeline.dag import Pipeline, process
from convlog.pipeline.filters import filter_records
from convlog.pipeline.source import resolve_files
from convlog.utils.config import Settings
from convlog.utils.logger import log_anomaly, log_pipeline_stage, measure_latency
from convlog.utils.schemas import Record

CSV_COLUMNS = (
    "timestamp",
    "userIdSha256",
    "output.context.state",
    "output.context.data.selectedArticleId",
    "output.replies",
)

CHUNK_SIZE = 500


@dataclass
class ExportStats:
    """Statistics from an export run."""

    files: int = 0
    records: int = 0


def write_csv(records: Iterable[Record], output_path: str | Path, columns: tuple[str, ...] = CSV_COLUMNS) -> int:
    """Stream records to CSV in chunks; header is always written. Returns row count."""
    count = 0
    chunk: list[dict] = []
    with open(output_path, "w", encoding="utf-8", newline="") as f:
        pd.DataFrame(columns=columns).to_csv(f, index=False)
        for record in records:
            chunk.append(record.to_dict())
            if len(chunk) >= CHUNK_SIZE:
                count += _flush(chunk, f, columns)
        count += _flush(chunk, f, columns)
    return count


def _flush(chunk: list[dict], f, columns: tuple[str, ...]) -> int:
    if not chunk:
        return 0
    pd.DataFrame(chunk).reindex(columns=columns).to_csv(f, index=False, header=False)
    n = len(chunk)
    chunk.clear()
    return n


def export_csv(
    glob_pattern: str,
    output_path: str | Path,
    settings: Settings | None = None,
    *,
    isolate_files: bool = False,
) -> ExportStats:
    """Filtered records (article selection changed) from every matching file, as CSV."""
    run_id = str(uuid.uuid4())
    files = resolve_files(glob_pattern)
    log_pipeline_stage("export_csv", run_id=run_id, files=len(files), output=str(output_path))
    pipeline = Pipeline(settings, isolate_files=isolate_files)

    def records() -> Iterable[Record]:
        for path in files:
            yield from pipeline.iter_records(path)

    try:
        with measure_latency("export_csv", run_id=run_id):
            count = write_csv(filter_records(records()), output_path)
    except Exception as e:
        log_anomaly("export_failed", str(e), run_id=run_id)
        raise
    if not count:
        log_anomaly("empty_export", f"No records written to {output_path}", run_id=run_id)
    return ExportStats(files=len(files), records=count)


async def export_jsonl(
    glob_pattern: str,
    output_path: str | Path,
    settings: Settings | None = None,
    *,
    isolate_files: bool = False,
) -> ExportStats:
    """Every record, unfiltered, one JSON object per line."""
    with open(output_path, "w", encoding="utf-8") as f:

        def write(record: Record) -> None:
            f.write(json.dumps(record.to_dict(), ensure_ascii=False) + "\n")

        summary = await process(glob_pattern, write, settings=settings, isolate_files=isolate_files)
    return ExportStats(files=summary["files"], records=summary["records"])
