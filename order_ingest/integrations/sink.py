"""
Record sink interface.

A sink is an append-only tabular store addressed by table name. Adapters
raise on failure; callers decide whether a failure matters.
"""
from typing import Any, Mapping, Protocol


class SinkError(Exception):
    """Base class for sink failures"""


class SinkConfigurationError(SinkError):
    """Raised when the sink is used without the credentials it needs"""


class SinkNotFoundError(SinkError):
    """Raised when the named table does not exist in the backing store"""

    def __init__(self, table_name: str):
        super().__init__(f"Sheet not found: {table_name}")
        self.table_name = table_name


class RecordSink(Protocol):
    def append(self, table_name: str, record: Mapping[str, Any]) -> None:
        ...
