"""Interactive session and batch service."""

from .service import BatchReport, BatchService, FileReport
from .session import Message, MessageKind, Session, SessionState, Transition, interact

__all__ = [
    "BatchReport",
    "BatchService",
    "FileReport",
    "Message",
    "MessageKind",
    "Session",
    "SessionState",
    "Transition",
    "interact",
]
