"""Best-effort, write-only audit trail for operators."""

from .models import AuditEntry
from .service import AuditTrail

__all__ = ["AuditEntry", "AuditTrail"]
