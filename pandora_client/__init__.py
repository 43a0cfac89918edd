# pandora_client/__init__.py
from .config import ClientConfig, Settings, DEFAULT_MAX_POINT_SIZE
from .client import LogDBClient
from .pipeline import PipelineClient
from .points import Field, Point, parse_record, parse_records, serialize_points
from .batching import batch_points
from .log import configure_logging
from . import models
from . import exceptions

__all__ = [
    "ClientConfig", "Settings", "DEFAULT_MAX_POINT_SIZE",
    "LogDBClient", "PipelineClient",
    "Field", "Point", "parse_record", "parse_records", "serialize_points",
    "batch_points", "configure_logging", "models", "exceptions",
]
