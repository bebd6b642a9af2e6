"""
Catalog loader - Read module definitions from YAML or JSON files.

Accepted documents:
- A list of module mappings
- A mapping with a "modules" key holding that list
"""

import json
import logging
from pathlib import Path
from typing import Any, Iterable

import yaml
from pydantic import ValidationError

from fluentflow.schemas import LearningModule

from .catalog import ModuleCatalog
from .errors import CatalogError

logger = logging.getLogger(__name__)

YAML_SUFFIXES = {".yaml", ".yml"}


def parse_modules(records: Iterable[Any]) -> list[LearningModule]:
    """
    Validate raw module records.

    Raises:
        CatalogError: If any record is not a valid module definition
    """
    modules = []
    for position, record in enumerate(records):
        try:
            modules.append(LearningModule.model_validate(record))
        except ValidationError as e:
            raise CatalogError(f"Invalid module definition at index {position}: {e}") from e
    return modules


def _read_document(file_path: Path) -> Any:
    with open(file_path, "r", encoding="utf-8") as f:
        if file_path.suffix.lower() in YAML_SUFFIXES:
            try:
                return yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise CatalogError(f"Could not parse {file_path}: {e}") from e
        try:
            return json.load(f)
        except json.JSONDecodeError as e:
            raise CatalogError(f"Could not parse {file_path}: {e}") from e


def load_catalog(path: str | Path) -> ModuleCatalog:
    """
    Load a module catalog from a YAML or JSON file.

    Args:
        path: Catalog file (.yaml/.yml parsed as YAML, anything else as JSON)

    Returns:
        ModuleCatalog in file order

    Raises:
        FileNotFoundError: If the file doesn't exist
        CatalogError: If the document is malformed or has duplicate IDs
    """
    file_path = Path(path)
    if not file_path.exists():
        raise FileNotFoundError(f"Module catalog not found: {file_path}")

    document = _read_document(file_path)
    if isinstance(document, dict):
        document = document.get("modules")
    if not isinstance(document, list):
        raise CatalogError(f"Expected a list of modules in {file_path}")

    catalog = ModuleCatalog(parse_modules(document))
    catalog.log_diagnostics()
    logger.info(f"Loaded {len(catalog)} modules from {file_path}")
    return catalog
