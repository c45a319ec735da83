from .file_log import FileAuditLog, serialize_record
from .inmemory import InMemoryAuditLog

__all__ = ["FileAuditLog", "InMemoryAuditLog", "serialize_record"]
