from auditpro.models.transcript import ActiveView, AuditStatus, TranscriptEntry

__all__ = [
    "ActiveView",
    "AuditStatus",
    "TranscriptEntry",
]
