# stepcheck/dsl/path_utils.py
# Issue paths: "<root>.States.Fan.Branches[0].States.Work.Next"
import re
from typing import Any, List, Union

ROOT_PATH = "<root>"

PathToken = Union[str, int]

_SEGMENT_RE = re.compile(r"^([^\[\]]+)((?:\[\d+\])*)$")
_INDEX_RE = re.compile(r"\[(\d+)\]")


def join_path(base: str, segment: Any) -> str:
    return f"{base}.{segment}" if base else str(segment)


def index_path(base: str, index: int) -> str:
    return f"{base}[{index}]"


def tokenize_path(path: str) -> List[PathToken]:
    """
    Split an issue path into key / index steps.

    The leading root marker is dropped, ``Choices[0]`` becomes
    ``["Choices", 0]``; a segment that does not look like ``key[i]`` is kept
    as a literal key.
    """
    normalized = re.sub(r"^<root>\.?", "", path or "")
    tokens: List[PathToken] = []
    for part in normalized.split("."):
        if not part:
            continue
        match = _SEGMENT_RE.match(part)
        if not match:
            tokens.append(part)
            continue
        tokens.append(match.group(1))
        tokens.extend(int(i) for i in _INDEX_RE.findall(match.group(2)))
    return tokens
