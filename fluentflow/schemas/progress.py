"""
Progress tracking schemas for FluentFlow.

Defines Pydantic models for persisted learner progress. The progression
engine only cares about which modules are completed; scores and
timestamps live here for the store and the UI.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class ModuleCompletion(BaseModel):
    module_id: str
    completed_at: datetime
    best_score: Optional[float] = None
    attempts: int = Field(default=1, ge=1)


class LearnerProgress(BaseModel):
    learner_id: str = "default"  # single-user mode
    completions: dict[str, ModuleCompletion] = {}

    @property
    def completed_module_ids(self) -> list[str]:
        return list(self.completions)
