"""
Map an issue path onto a range of the current definition text.

Strategies are tried in order, each answering a range or None:

    exact_location        node at the path in the tolerant syntax tree
    state_name_heuristic  first quoted occurrence of the state name
    document_start        one character at the start; always answers

so every lookup ends with exactly one non-empty range.
"""

import logging
from typing import Callable, List, Optional

import yaml
from pydantic import BaseModel, ConfigDict

from stepcheck.diagnostics.syntax_tree import find_node_at_location, node_offsets, parse_tree
from stepcheck.dsl.path_utils import tokenize_path

logger = logging.getLogger(__name__)


class SourceRange(BaseModel):
    """1-based positions; the end column is exclusive."""
    start_line: int
    start_column: int
    end_line: int
    end_column: int


class Position(BaseModel):
    line: int
    column: int


def offset_to_position(text: str, offset: int) -> Position:
    """Forward scan: lines are counted by ``\\n``, columns restart after each."""
    offset = max(0, min(offset, len(text)))
    line_start = text.rfind("\n", 0, offset) + 1
    return Position(line=text.count("\n", 0, offset) + 1, column=offset - line_start + 1)


def range_from_offsets(text: str, start: int, end: int) -> SourceRange:
    start = max(0, start)
    first = offset_to_position(text, start)
    last = offset_to_position(text, max(start, end))
    return SourceRange(
        start_line=first.line,
        start_column=first.column,
        end_line=last.line,
        end_column=last.column,
    )


# ------------------------------------------------------------------ #
#                     Strategies
# ------------------------------------------------------------------ #

class LocateRequest(BaseModel):
    """What a strategy gets to look at: the text, its tree and the issue reference."""
    model_config = ConfigDict(arbitrary_types_allowed=True)

    text: str
    tree: Optional[yaml.Node] = None
    path: Optional[str] = None
    state_name: Optional[str] = None


Strategy = Callable[[LocateRequest], Optional[SourceRange]]


def exact_location(request: LocateRequest) -> Optional[SourceRange]:
    tokens = tokenize_path(request.path or "")
    if not tokens or request.tree is None:
        return None
    node = find_node_at_location(request.tree, tokens)
    if node is None:
        return None
    start, end = node_offsets(node, request.text)
    if end <= start:
        return None
    return range_from_offsets(request.text, start, end)


def state_name_heuristic(request: LocateRequest) -> Optional[SourceRange]:
    if not request.state_name:
        return None
    needle = f'"{request.state_name}"'
    idx = request.text.find(needle)
    if idx < 0:
        return None
    return range_from_offsets(request.text, idx + 1, idx + len(needle) - 1)


def document_start(request: LocateRequest) -> SourceRange:
    found = range_from_offsets(request.text, 0, min(len(request.text), 1))
    if found.end_line == found.start_line and found.end_column <= found.start_column:
        # empty text: keep the marker one column wide
        found = found.model_copy(update={"end_column": found.start_column + 1})
    return found


DEFAULT_STRATEGIES: List[Strategy] = [exact_location, state_name_heuristic, document_start]


# ------------------------------------------------------------------ #
#                     Locator
# ------------------------------------------------------------------ #

class SourceLocator:
    """Resolves many issue paths against one text; the tree is built once, on first use."""

    def __init__(self, text: str, strategies: Optional[List[Strategy]] = None):
        self.text = text
        self.strategies = list(strategies or DEFAULT_STRATEGIES)
        self._tree: Optional[yaml.Node] = None
        self._parsed = False

    @property
    def tree(self) -> Optional[yaml.Node]:
        if not self._parsed:
            self._tree = parse_tree(self.text)
            self._parsed = True
        return self._tree

    def locate(self, path: Optional[str], state_name: Optional[str] = None) -> SourceRange:
        request = LocateRequest(text=self.text, tree=self.tree, path=path, state_name=state_name)
        for strategy in self.strategies:
            found = strategy(request)
            if found is not None:
                if strategy is not self.strategies[0]:
                    logger.debug("located %s via %s", path, strategy.__name__)
                return found
        return document_start(request)

    def document_start(self) -> SourceRange:
        return document_start(LocateRequest(text=self.text))


def locate(text: str, path: Optional[str], state_name: Optional[str] = None) -> SourceRange:
    return SourceLocator(text).locate(path, state_name)
