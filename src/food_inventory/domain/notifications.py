"""Domain models for user-facing notifications."""

from dataclasses import dataclass

SUCCESS = "success"
WARNING = "warning"
ERROR = "error"


@dataclass(frozen=True)
class Notification:
    """Message shown to the user after an inventory action."""

    kind: str
    title: str
    message: str
