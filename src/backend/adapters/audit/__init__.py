"""Audit trail adapters for contrast results."""

from .log_file import Auditor, LogFileAuditor, MemoryAuditor, render_audit_line

__all__ = [
    "Auditor",
    "LogFileAuditor",
    "MemoryAuditor",
    "render_audit_line",
]
