"""
Module schemas for FluentFlow.

Defines Pydantic models for the progression engine including:
- Learning module definitions (id, unit, prerequisites, display payload)
- Module status for UI display
- Unit and overall progression statistics
"""

from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field, computed_field


# -----------------------------------------------------------------------------
# Module definitions
# -----------------------------------------------------------------------------


class LearningModule(BaseModel):
    """
    One learning module as supplied by the content catalog.

    Only id, unit and prerequisites matter to the engine. Everything else
    is display payload; unknown keys are kept as extras.
    """
    model_config = ConfigDict(frozen=True, extra="allow")

    id: str = Field(..., min_length=1)
    unit: int = Field(..., ge=1)           # structural level, e.g. 1-6
    prerequisites: list[str] = []          # module IDs, duplicates tolerated

    # Display payload
    name: Optional[str] = None
    description: Optional[str] = None
    learning_mode: Optional[str] = None    # flashcard, quiz, sorting, ...
    category: Optional[str] = None
    level: Optional[Union[str, list[str]]] = None
    estimated_time: Optional[int] = None   # minutes
    difficulty: Optional[int] = None
    tags: list[str] = []

    @computed_field
    @property
    def distinct_prerequisites(self) -> list[str]:
        """Prerequisite IDs with duplicates removed, first occurrence wins."""
        return list(dict.fromkeys(self.prerequisites))


class ModuleStatus(str, Enum):
    """Module status for UI display."""
    COMPLETED = "completed"
    UNLOCKED = "unlocked"
    LOCKED = "locked"


# -----------------------------------------------------------------------------
# Statistics
# -----------------------------------------------------------------------------


class UnitCompletionStatus(BaseModel):
    unit: int
    total: int = Field(..., ge=0)
    completed: int = Field(..., ge=0)
    percentage: int = Field(..., ge=0, le=100)
    all_completed: bool


class UnitStats(BaseModel):
    unit: int
    total: int = Field(..., ge=0)
    completed: int = Field(..., ge=0)
    percentage: int = Field(..., ge=0, le=100)


class ProgressionStats(BaseModel):
    """Overall progression statistics, derived fresh on every call."""
    total_modules: int = Field(..., ge=0)
    completed_modules: int = Field(..., ge=0)
    unlocked_modules: int = Field(..., ge=0)
    locked_modules: int = Field(..., ge=0)
    completion_percentage: int = Field(..., ge=0, le=100)
    unit_stats: list[UnitStats] = []
