"""
FluentFlow Progression - Module prerequisite graph and learner progress.

This module provides:
- ModuleCatalog: Immutable snapshot of module definitions
- ProgressionEngine: Unlock status, paths, stats and recommendations
- load_catalog: Read module definitions from YAML/JSON
- ProgressStore: Persist module completions
- ProgressionSession: Keep engine and store in sync
"""

from .errors import (
    ProgressionError,
    UnknownModuleError,
    NotInitializedError,
    CatalogError,
)

from .catalog import ModuleCatalog

from .engine import ProgressionEngine

from .loader import (
    load_catalog,
    parse_modules,
)

from .store import (
    ProgressStore,
    DEFAULT_PROGRESS_DIR,
    DEFAULT_PROGRESS_DB,
)

from .session import ProgressionSession

__all__ = [
    # Errors
    "ProgressionError",
    "UnknownModuleError",
    "NotInitializedError",
    "CatalogError",
    # Engine
    "ModuleCatalog",
    "ProgressionEngine",
    # Collaborators
    "load_catalog",
    "parse_modules",
    "ProgressStore",
    "DEFAULT_PROGRESS_DIR",
    "DEFAULT_PROGRESS_DB",
    "ProgressionSession",
]
