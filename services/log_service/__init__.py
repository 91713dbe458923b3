"""
Operation log service.
"""
from .models import OperationType, OperationLogEntry
from .operation_log import OperationLog, HEADER_ROW, format_row

__all__ = [
    "OperationType",
    "OperationLogEntry",
    "OperationLog",
    "HEADER_ROW",
    "format_row",
]
