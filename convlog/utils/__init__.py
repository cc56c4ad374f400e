from .config import settings, Settings
from .logger import logger, log_pipeline_stage, log_latency, log_anomaly, measure_latency
from .text import sha256_hex, collapse_lines, RETURN_SYMBOL

__all__ = [
    "settings",
    "Settings",
    "logger",
    "log_pipeline_stage",
    "log_latency",
    "log_anomaly",
    "measure_latency",
    "sha256_hex",
    "collapse_lines",
    "RETURN_SYMBOL",
]
