"""Exceptions raised by the progression engine."""


class ProgressionError(Exception):
    """Base class for progression engine errors."""


class UnknownModuleError(ProgressionError, KeyError):
    """A caller referenced a module ID that is not in the loaded catalog."""

    def __init__(self, module_id: str):
        self.module_id = module_id
        super().__init__(module_id)

    def __str__(self) -> str:
        return f"Unknown module: {self.module_id!r}"


class NotInitializedError(ProgressionError, RuntimeError):
    """The engine was queried before initialize() was called."""

    def __init__(self, message: str = "Progression engine has not been initialized"):
        super().__init__(message)


class CatalogError(ProgressionError, ValueError):
    """Module definitions could not be turned into a valid catalog."""
