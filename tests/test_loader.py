"""Tests for loading module catalogs from YAML and JSON."""

import json

import pytest

from fluentflow.progression import CatalogError, load_catalog, parse_modules


MODULES = [
    {"id": "a1", "unit": 1, "prerequisites": [], "name": "Basic Vocabulary", "learningMode": "flashcard"},
    {"id": "a2", "unit": 1, "prerequisites": ["a1"]},
    {"id": "b1", "unit": 2, "prerequisites": ["a2"]},
]


class TestLoadCatalog:
    """Test catalog files."""

    def test_yaml_list(self, tmp_path):
        path = tmp_path / "modules.yaml"
        path.write_text(
            "- id: a1\n  unit: 1\n"
            "- id: a2\n  unit: 1\n  prerequisites: [a1]\n",
            encoding="utf-8",
        )
        catalog = load_catalog(path)
        assert catalog.ids == ["a1", "a2"]
        assert catalog.require("a2").prerequisites == ["a1"]

    def test_yaml_mapping(self, tmp_path):
        path = tmp_path / "modules.yml"
        path.write_text(
            "modules:\n"
            "  - id: a1\n    unit: 1\n"
            "  - id: b1\n    unit: 2\n    prerequisites: [a1]\n",
            encoding="utf-8",
        )
        assert load_catalog(path).units() == [1, 2]

    def test_json(self, tmp_path):
        path = tmp_path / "modules.json"
        path.write_text(json.dumps({"modules": MODULES}), encoding="utf-8")
        catalog = load_catalog(str(path))
        assert catalog.ids == ["a1", "a2", "b1"]
        assert catalog.require("a1").model_extra == {"learningMode": "flashcard"}

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_catalog(tmp_path / "nope.yaml")

    def test_invalid_module(self, tmp_path):
        path = tmp_path / "modules.json"
        path.write_text(json.dumps([{"id": "a1", "unit": 0}]), encoding="utf-8")
        with pytest.raises(CatalogError):
            load_catalog(path)

    def test_duplicate_ids(self, tmp_path):
        path = tmp_path / "modules.json"
        path.write_text(json.dumps([MODULES[0], MODULES[0]]), encoding="utf-8")
        with pytest.raises(CatalogError):
            load_catalog(path)

    def test_not_a_list(self, tmp_path):
        path = tmp_path / "modules.yaml"
        path.write_text("title: nothing here\n", encoding="utf-8")
        with pytest.raises(CatalogError):
            load_catalog(path)

    def test_malformed_yaml(self, tmp_path):
        path = tmp_path / "modules.yaml"
        path.write_text("- id: [unclosed\n", encoding="utf-8")
        with pytest.raises(CatalogError):
            load_catalog(path)

    def test_malformed_json(self, tmp_path):
        path = tmp_path / "modules.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(CatalogError):
            load_catalog(path)

    def test_warns_on_dangling_prerequisite(self, tmp_path, caplog):
        path = tmp_path / "modules.json"
        path.write_text(json.dumps([{"id": "x", "unit": 1, "prerequisites": ["ghost"]}]), encoding="utf-8")
        with caplog.at_level("WARNING", logger="fluentflow.progression.catalog"):
            load_catalog(path)
        assert "ghost" in caplog.text


class TestParseModules:
    """Test record validation."""

    def test_parse(self):
        modules = parse_modules(MODULES)
        assert [m.unit for m in modules] == [1, 1, 2]

    def test_reports_index(self):
        with pytest.raises(CatalogError, match="index 1"):
            parse_modules([MODULES[0], {"unit": 1}])
