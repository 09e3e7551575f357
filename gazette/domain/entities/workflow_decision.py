"""Final approval decision recorded by the workflow stage."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional


class WorkflowStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    NEEDS_REVIEW = "needs_review"


@dataclass(frozen=True)
class WorkflowDecision:
    status: WorkflowStatus
    reviewer: Optional[str] = None
    comments: str = ""
    final_data: Dict[str, Optional[str]] = field(default_factory=dict)
    decided_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self):
        if not isinstance(self.status, WorkflowStatus):
            object.__setattr__(self, 'status', WorkflowStatus(self.status))

    @property
    def is_final(self) -> bool:
        return self.status in {WorkflowStatus.APPROVED, WorkflowStatus.REJECTED}

    def to_dict(self) -> Dict[str, Any]:
        return {
            "status": self.status.value,
            "reviewer": self.reviewer,
            "comments": self.comments,
            "final_data": dict(self.final_data),
            "decided_at": self.decided_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> WorkflowDecision:
        return cls(
            status=WorkflowStatus(data.get("status", WorkflowStatus.PENDING.value)),
            reviewer=data.get("reviewer"),
            comments=data.get("comments", ""),
            final_data=dict(data.get("final_data") or {}),
            decided_at=datetime.fromisoformat(data["decided_at"]) if data.get("decided_at") else datetime.now(timezone.utc),
        )
