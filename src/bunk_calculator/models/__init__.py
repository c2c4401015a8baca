from .session import DURATION_LABELS, Configuration, DurationMode, SessionState, Subject

__all__ = [
    "Configuration",
    "DurationMode",
    "DURATION_LABELS",
    "SessionState",
    "Subject",
]
