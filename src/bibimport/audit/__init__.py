"""Audit logging subsystem for bibimport.

Main Components
---------------
- AuditLogger: JSONL event logger
- LogEvent: Event envelope written per line
"""

from bibimport.audit.helpers import generate_run_id, get_environment_info
from bibimport.audit.logger import AuditLogger
from bibimport.audit.models import LogEvent

__all__ = [
    "AuditLogger",
    "LogEvent",
    "generate_run_id",
    "get_environment_info",
]
