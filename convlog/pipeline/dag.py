"""Orchestrated pipeline: lines -> timestamps -> conversations -> sink."""
import asyncio
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterator

from convlog.pipeline.assembler import AccumulatorState, ConversationAssembler
from convlog.pipeline.sink import Handler, SinkAdapter
from convlog.pipeline.source import iter_lines, resolve_files
from convlog.pipeline.timestamps import TimestampExtractor
from convlog.utils.config import Settings, settings as default_settings
from convlog.utils.logger import log_anomaly, log_latency, log_pipeline_stage, measure_latency
from convlog.utils.schemas import Record


class Pipeline:
    """One parse pipeline. All files fed through it share one accumulator
    unless `isolate_files` is set, so a conversation cut across two files
    is merged (or corrupted) exactly as the line stream dictates.
    """

    def __init__(self, settings: Settings | None = None, *, isolate_files: bool = False):
        self.settings = settings or default_settings
        self.isolate_files = isolate_files
        self.state = AccumulatorState()
        self.extractor = TimestampExtractor(self.settings)
        self.assembler = ConversationAssembler(self.state, self.settings)

    def _assembler_for_file(self) -> ConversationAssembler:
        if self.isolate_files:
            return ConversationAssembler(AccumulatorState(), self.settings)
        return self.assembler

    def iter_records(self, path: str | Path) -> Iterator[Record]:
        """Synchronous chain over a single file."""
        assembler = self._assembler_for_file()
        yield from assembler.assemble(self.extractor.extract(iter_lines(path)))

    async def submit(self, path: str | Path, sink: SinkAdapter) -> int:
        """Drive one file into `sink`, yielding to the event loop after every line."""
        assembler = self._assembler_for_file()
        count = 0
        for line in self.extractor.extract(iter_lines(path)):
            record = assembler.feed(line)
            if record is not None:
                await sink.deliver(record)
                count += 1
            await asyncio.sleep(0)
        return count


async def process(
    glob_pattern: str,
    handler: Handler,
    sequential: bool = True,
    *,
    settings: Settings | None = None,
    isolate_files: bool = False,
    run_id: str | None = None,
) -> dict:
    """Parse every file matching `glob_pattern` and hand each record to `handler`.

    Sequential mode drains each file, awaiting the handler per record, before
    the next file is submitted. Concurrent mode submits all files at once; with
    several files their lines can interleave in the shared accumulator and
    corrupt conversations unless `isolate_files` is set.
    """
    run_id = run_id or str(uuid.uuid4())
    started = datetime.now(timezone.utc)
    files = resolve_files(glob_pattern)
    pipeline = Pipeline(settings, isolate_files=isolate_files)
    sink = SinkAdapter(handler, sequential=sequential)
    log_pipeline_stage("process", run_id=run_id, files=len(files), sequential=sequential)

    try:
        if sequential:
            for path in files:
                with measure_latency("process_file", run_id=run_id, path=path):
                    await pipeline.submit(path, sink)
        else:
            await asyncio.gather(*(pipeline.submit(path, sink) for path in files))
    except Exception as e:
        log_anomaly("pipeline_failed", str(e), run_id=run_id)
        raise

    duration_sec = (datetime.now(timezone.utc) - started).total_seconds()
    log_pipeline_stage("process_complete", run_id=run_id, files=len(files), records=sink.delivered)
    log_latency("pipeline_run", duration_sec * 1000, run_id=run_id, record_count=sink.delivered)
    return {
        "run_id": run_id,
        "files": len(files),
        "records": sink.delivered,
        "status": "success",
        "pending": sink.pending,
    }
