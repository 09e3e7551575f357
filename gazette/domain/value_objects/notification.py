"""User-facing feedback returned by review operations instead of UI callbacks."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional


class NotificationLevel(str, Enum):
    SUCCESS = "success"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True)
class Notification:
    level: NotificationLevel
    message: str
    field_name: Optional[str] = None

    @classmethod
    def success(cls, message: str, field_name: str | None = None) -> Notification:
        return cls(NotificationLevel.SUCCESS, message, field_name)

    @classmethod
    def info(cls, message: str, field_name: str | None = None) -> Notification:
        return cls(NotificationLevel.INFO, message, field_name)

    @classmethod
    def warning(cls, message: str, field_name: str | None = None) -> Notification:
        return cls(NotificationLevel.WARNING, message, field_name)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "level": self.level.value,
            "message": self.message,
            "field_name": self.field_name,
        }
