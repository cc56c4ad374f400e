"""Extract conversation records from chat-bot log files."""
from .pipeline import process, export_csv, export_jsonl

__all__ = ["process", "export_csv", "export_jsonl"]
