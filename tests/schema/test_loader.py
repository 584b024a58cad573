"""Tests for the workflow document loader."""

import pytest

from statusflow.schema.errors import DocumentLoadError, DocumentValidationError
from statusflow.schema.loader import (
    load_document,
    load_yaml,
    parse_document_from_string,
)


class TestLoadYaml:
    def test_load_valid_yaml(self, tmp_path):
        yaml_file = tmp_path / "test.yaml"
        yaml_file.write_text("key: value\nlist:\n  - item1\n  - item2")

        data = load_yaml(yaml_file)
        assert data["key"] == "value"
        assert data["list"] == ["item1", "item2"]

    def test_file_not_found(self):
        with pytest.raises(DocumentLoadError) as exc_info:
            load_yaml("/nonexistent/path.yaml")
        assert "not found" in str(exc_info.value).lower()
        assert exc_info.value.path == "/nonexistent/path.yaml"

    def test_directory_is_rejected(self, tmp_path):
        with pytest.raises(DocumentLoadError, match="Not a file"):
            load_yaml(tmp_path)

    def test_invalid_yaml(self, tmp_path):
        yaml_file = tmp_path / "invalid.yaml"
        yaml_file.write_text("key: [unclosed bracket")

        with pytest.raises(DocumentLoadError) as exc_info:
            load_yaml(yaml_file)
        assert "Invalid YAML" in str(exc_info.value)

    def test_non_utf8_file(self, tmp_path):
        yaml_file = tmp_path / "latin1.yaml"
        yaml_file.write_bytes(b"name: Caf\xe9\n")

        with pytest.raises(DocumentLoadError, match="not valid UTF-8") as exc_info:
            load_yaml(yaml_file)
        assert exc_info.value.path == str(yaml_file)

    def test_empty_file_returns_empty_dict(self, tmp_path):
        yaml_file = tmp_path / "empty.yaml"
        yaml_file.write_text("")

        assert load_yaml(yaml_file) == {}

    def test_non_mapping_root(self, tmp_path):
        yaml_file = tmp_path / "list.yaml"
        yaml_file.write_text("- a\n- b")

        with pytest.raises(DocumentLoadError, match="Expected YAML mapping"):
            load_yaml(yaml_file)


class TestLoadDocument:
    def test_load_example(self, examples_dir):
        document = load_document(examples_dir / "bug_workflow.yaml")

        assert document.categories == ["TODO", "PROGRESS", "COMPLETED"]
        assert len(document.statuses) == 5
        assert document.workflow.name == "Bugs"
        assert len(document.workflow.workflow_edges) == 4

    def test_schema_error(self, examples_dir):
        with pytest.raises(DocumentValidationError) as exc_info:
            load_document(examples_dir / "invalid" / "bad_schema.yaml")

        assert exc_info.value.errors
        assert exc_info.value.errors[0]["loc"].startswith("workflow.workflowEdges.0")


class TestParseDocumentFromString:
    def test_empty_string(self):
        document = parse_document_from_string("")

        assert document.categories == []
        assert document.workflow.statuses == []

    def test_invalid_yaml(self):
        with pytest.raises(DocumentLoadError):
            parse_document_from_string("categories: [oops")

    def test_non_mapping_root(self):
        with pytest.raises(DocumentLoadError):
            parse_document_from_string("just a string")

    def test_validation_error_lists_every_problem(self):
        with pytest.raises(DocumentValidationError) as exc_info:
            parse_document_from_string(
                """
statuses:
  - {name: No id}
workflow:
  statuses:
    - {statusCategory: TODO}
"""
            )

        assert len(exc_info.value.errors) == 2
