"""
FluentFlow Schemas - Pydantic models for the progression engine.

This module exports all schema classes for:
- Module: module definitions, status, unit and overall statistics
- Progress: persisted module completions per learner
"""

# Module schemas
from .module import (
    LearningModule,
    ModuleStatus,
    UnitCompletionStatus,
    UnitStats,
    ProgressionStats,
)

# Progress schemas
from .progress import (
    ModuleCompletion,
    LearnerProgress,
)

__all__ = [
    # Module
    'LearningModule',
    'ModuleStatus',
    'UnitCompletionStatus',
    'UnitStats',
    'ProgressionStats',
    # Progress
    'ModuleCompletion',
    'LearnerProgress',
]
