"""
PipelineStage value object

The four ordered phases a document goes through:
extraction -> mapping -> validation -> workflow.
"""
from __future__ import annotations

from enum import Enum
from typing import Optional, Tuple


class PipelineStage(str, Enum):
    """Strictly ordered pipeline stages."""
    EXTRACTION = "extraction"
    MAPPING = "mapping"
    VALIDATION = "validation"
    WORKFLOW = "workflow"

    @classmethod
    def ordered(cls) -> Tuple[PipelineStage, ...]:
        return (cls.EXTRACTION, cls.MAPPING, cls.VALIDATION, cls.WORKFLOW)

    @property
    def index(self) -> int:
        return PipelineStage.ordered().index(self)

    def predecessor(self) -> Optional[PipelineStage]:
        """
        Stage whose result gates this one.

        Examples:
            >>> PipelineStage.MAPPING.predecessor()
            <PipelineStage.EXTRACTION: 'extraction'>
            >>> PipelineStage.EXTRACTION.predecessor() is None
            True
        """
        if self.index == 0:
            return None
        return PipelineStage.ordered()[self.index - 1]

    def successor(self) -> Optional[PipelineStage]:
        stages = PipelineStage.ordered()
        if self.index + 1 >= len(stages):
            return None
        return stages[self.index + 1]

    def prerequisites(self) -> Tuple[PipelineStage, ...]:
        """Every stage that must hold a result before this one is accessible."""
        return PipelineStage.ordered()[: self.index]
