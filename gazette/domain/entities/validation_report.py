"""Validation diagnostics produced for a mapping result."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple


class Severity(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


@dataclass(frozen=True)
class Diagnostic:
    severity: Severity
    field_path: str
    message: str

    def to_dict(self) -> Dict[str, Any]:
        return {"severity": self.severity.value, "field_path": self.field_path, "message": self.message}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Diagnostic:
        return cls(Severity(data["severity"]), data.get("field_path", ""), data.get("message", ""))


@dataclass(frozen=True)
class ValidationReport:
    """A report passes when it holds no critical diagnostic."""

    diagnostics: Tuple[Diagnostic, ...]
    target_id: Optional[str] = None
    validated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self):
        if not isinstance(self.diagnostics, tuple):
            object.__setattr__(self, 'diagnostics', tuple(self.diagnostics))

    @property
    def passed(self) -> bool:
        return not self.by_severity(Severity.CRITICAL)

    def by_severity(self, severity: Severity) -> List[Diagnostic]:
        return [item for item in self.diagnostics if item.severity == severity]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "passed": self.passed,
            "target_id": self.target_id,
            "diagnostics": [item.to_dict() for item in self.diagnostics],
            "validated_at": self.validated_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> ValidationReport:
        return cls(
            diagnostics=tuple(Diagnostic.from_dict(item) for item in data.get("diagnostics", [])),
            target_id=data.get("target_id"),
            validated_at=datetime.fromisoformat(data["validated_at"]) if data.get("validated_at") else datetime.now(timezone.utc),
        )
