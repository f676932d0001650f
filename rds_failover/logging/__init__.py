"""
Logging

Journal de diagnostic structuré:
- Format JSON, une ligne par événement
- Champs obligatoires: timestamp, level, correlation_id, instance_id, message
- Timestamp ISO 8601 UTC
- Niveaux: DEBUG, INFO, WARN, ERROR, CRITICAL
"""

from .interfaces import (
    # Enums
    LogLevel,
    # Dataclasses
    LogEntry,
    LogConfig,
    # Interfaces
    IStructuredLogger,
)
from .structured_logger import (
    StructuredLogger,
    file_output_handler,
    # Exceptions
    MissingRequiredFieldError,
)

__all__ = [
    # Enums
    "LogLevel",
    # Dataclasses
    "LogEntry",
    "LogConfig",
    # Interfaces
    "IStructuredLogger",
    # Implementations
    "StructuredLogger",
    "file_output_handler",
    # Exceptions
    "MissingRequiredFieldError",
]
