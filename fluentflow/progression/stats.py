"""
Statistics aggregation over catalog + completion set.

Everything is derived fresh on each call so stats always agree with the
latest completion.
"""

from typing import AbstractSet

from fluentflow.schemas import ProgressionStats, UnitCompletionStatus, UnitStats

from .catalog import ModuleCatalog
from .unlock import prerequisites_met


def percentage(part: int, total: int) -> int:
    """Whole-number percentage rounded half up; 0 when total is 0."""
    if total <= 0:
        return 0
    return (200 * part + total) // (2 * total)


def completed_count(catalog: ModuleCatalog, completed: AbstractSet[str]) -> int:
    """Number of catalog modules in the completion set (stale IDs ignored)."""
    return sum(1 for module in catalog if module.id in completed)


def unit_completion_status(catalog: ModuleCatalog, unit: int, completed: AbstractSet[str]) -> UnitCompletionStatus:
    """
    Get completion status for a unit.

    An empty (or unknown) unit reports zero totals and is never
    all_completed.
    """
    unit_modules = catalog.modules_by_unit(unit)
    total = len(unit_modules)
    done = sum(1 for module in unit_modules if module.id in completed)
    return UnitCompletionStatus(
        unit=unit,
        total=total,
        completed=done,
        percentage=percentage(done, total),
        all_completed=total > 0 and done == total,
    )


def progression_stats(catalog: ModuleCatalog, completed: AbstractSet[str]) -> ProgressionStats:
    """Get overall progression statistics with per-unit breakdown."""
    total = len(catalog)
    unlocked = sum(1 for module in catalog if prerequisites_met(catalog, module, completed))
    done = completed_count(catalog, completed)

    unit_stats = []
    for unit in catalog.units():
        status = unit_completion_status(catalog, unit, completed)
        unit_stats.append(UnitStats(
            unit=unit,
            total=status.total,
            completed=status.completed,
            percentage=status.percentage,
        ))

    return ProgressionStats(
        total_modules=total,
        completed_modules=done,
        unlocked_modules=unlocked,
        locked_modules=total - unlocked,
        completion_percentage=percentage(done, total),
        unit_stats=unit_stats,
    )
