"""Error-tolerant syntax tree for definition text.

JSON is YAML flow syntax, so ``yaml.compose`` gives a node tree with
character offsets for both ``.json`` and ``.yaml`` definitions. The composer
is lenient about the usual mid-edit noise (trailing commas, unquoted keys).
Tabs are swapped for spaces one-for-one before composing; offsets do not
move.
"""

import logging
from typing import Optional, Sequence, Tuple

import yaml

from stepcheck.dsl.path_utils import PathToken

logger = logging.getLogger(__name__)


def parse_tree(text: str) -> Optional[yaml.Node]:
    """Return the root node of *text*, or None when nothing usable parses."""
    if not text or not text.strip():
        return None
    try:
        return yaml.compose(text.replace("\t", " "))
    except (yaml.YAMLError, RecursionError) as exc:
        logger.debug("syntax tree unavailable: %s", exc)
        return None


def find_node_at_location(root: Optional[yaml.Node], tokens: Sequence[PathToken]) -> Optional[yaml.Node]:
    """Follow key / index steps from *root*; the first matching key wins."""
    node = root
    for token in tokens:
        if node is None:
            return None
        if isinstance(token, int):
            if not isinstance(node, yaml.SequenceNode) or not 0 <= token < len(node.value):
                return None
            node = node.value[token]
        else:
            if not isinstance(node, yaml.MappingNode):
                return None
            node = next(
                (value for key, value in node.value
                 if isinstance(key, yaml.ScalarNode) and key.value == token),
                None,
            )
    return node


def node_offsets(node: yaml.Node, text: Optional[str] = None) -> Tuple[int, int]:
    """``[start, end)`` character offsets of *node* in the composed text.

    Block collections end where the next token starts; with *text* given,
    the whitespace and line breaks before that token are left out.
    """
    start, end = node.start_mark.index, node.end_mark.index
    if text is not None:
        end = min(end, len(text))
        while end > start and text[end - 1].isspace():
            end -= 1
    return start, end
