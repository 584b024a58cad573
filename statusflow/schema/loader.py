"""Reading workflow documents from YAML."""

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from .errors import DocumentLoadError, DocumentValidationError
from .models import WorkflowDocument


def load_yaml(path: str | Path) -> dict[str, Any]:
    """Read a YAML file whose root is a mapping.

    An empty file reads as an empty mapping.

    Raises:
        DocumentLoadError: If the file is missing, unreadable, not UTF-8,
            not YAML, or its root is not a mapping.
    """
    path = Path(path)
    if not path.exists():
        raise DocumentLoadError(f"File not found: {path}", str(path))
    if not path.is_file():
        raise DocumentLoadError(f"Not a file: {path}", str(path))

    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise DocumentLoadError(f"File is not valid UTF-8: {e}", str(path)) from e
    except OSError as e:
        raise DocumentLoadError(f"Cannot read file: {e}", str(path)) from e

    return _parse_yaml(text, str(path))


def load_document(path: str | Path) -> WorkflowDocument:
    """Load a workflow document from a YAML file.

    Raises:
        DocumentLoadError: If the file cannot be read or parsed.
        DocumentValidationError: If the content does not describe a workflow.
    """
    return _to_document(load_yaml(path))


def parse_document_from_string(yaml_string: str) -> WorkflowDocument:
    """Load a workflow document from YAML text.

    Raises:
        DocumentLoadError: If the text is not YAML or not a mapping.
        DocumentValidationError: If the content does not describe a workflow.
    """
    return _to_document(_parse_yaml(yaml_string))


def _parse_yaml(text: str, source: str | None = None) -> dict[str, Any]:
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise DocumentLoadError(f"Invalid YAML: {e}", source) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise DocumentLoadError(
            f"Expected YAML mapping at root, got {type(data).__name__}", source
        )
    return data


def _to_document(data: dict[str, Any]) -> WorkflowDocument:
    try:
        return WorkflowDocument.model_validate(data)
    except ValidationError as e:
        # Flatten pydantic's locations into dotted paths such as
        # "workflow.workflowEdges.0.sourceId".
        errors = [
            {
                "loc": ".".join(str(part) for part in err["loc"]),
                "msg": err["msg"],
                "type": err["type"],
            }
            for err in e.errors()
        ]
        raise DocumentValidationError(
            f"Document validation failed with {len(errors)} error(s)", errors
        ) from e
