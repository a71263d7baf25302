"""Audit field contract, auto-fill policy and ORM wiring."""

from .autofill import AuditFieldAutoFiller, utc_now
from .listeners import (
    SESSION_CONTEXT_KEY,
    bind_session_context,
    install_audit_listeners,
    session_context_of,
)
from .records import AuditColumnsMixin, AuditableRecord

__all__ = [
    "SESSION_CONTEXT_KEY",
    "AuditColumnsMixin",
    "AuditFieldAutoFiller",
    "AuditableRecord",
    "bind_session_context",
    "install_audit_listeners",
    "session_context_of",
    "utc_now",
]
