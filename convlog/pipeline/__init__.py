from .dag import Pipeline, process
from .source import iter_lines, resolve_files
from .timestamps import TimestampExtractor, TimestampError
from .assembler import AccumulatorState, ConversationAssembler, project_record
from .filters import accept_record, filter_records
from .sink import SinkAdapter
from .export import export_csv, export_jsonl, CSV_COLUMNS, ExportStats

__all__ = [
    "Pipeline",
    "process",
    "iter_lines",
    "resolve_files",
    "TimestampExtractor",
    "TimestampError",
    "AccumulatorState",
    "ConversationAssembler",
    "project_record",
    "accept_record",
    "filter_records",
    "SinkAdapter",
    "export_csv",
    "export_jsonl",
    "CSV_COLUMNS",
    "ExportStats",
]
