import json
import yaml
from pathlib import Path
from typing import Any, Literal, Optional, Union

from pydantic import BaseModel

DefinitionFormat = Literal["json", "yaml"]

SUFFIX_FORMATS = {
    ".json": "json",
    ".yaml": "yaml",
    ".yml": "yaml",
}


class DefinitionLoadError(ValueError):
    pass


class ParseOutcome(BaseModel):
    """Result of one parse attempt: the decoded document or the parser's message."""
    document: Any = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def detect_format(file_path: Union[str, Path]) -> DefinitionFormat:
    suffix = Path(file_path).suffix.lower()
    if suffix not in SUFFIX_FORMATS:
        raise DefinitionLoadError(f"Unsupported file type: {suffix or '<none>'}")
    return SUFFIX_FORMATS[suffix]


def read_dsl_file(file_path: Union[str, Path]) -> str:
    path = Path(file_path)
    try:
        return path.read_text(encoding='utf-8')
    except (OSError, UnicodeDecodeError) as e:
        raise DefinitionLoadError(f"Cannot read {path}: {e}") from e


def parse_definition_text(text: str, fmt: DefinitionFormat = "json") -> ParseOutcome:
    """Decode definition text; malformed text is reported, never raised."""
    if fmt == "yaml":
        try:
            return ParseOutcome(document=yaml.safe_load(text))
        except (yaml.YAMLError, RecursionError) as e:
            return ParseOutcome(error=f"Invalid YAML: {e}")
    try:
        return ParseOutcome(document=json.loads(text))
    except (json.JSONDecodeError, RecursionError) as e:
        return ParseOutcome(error=f"Invalid JSON: {e}")


def load_dsl_file(file_path: Union[str, Path]) -> ParseOutcome:
    fmt = detect_format(file_path)
    return parse_definition_text(read_dsl_file(file_path), fmt)
