"""Hierarchical document flattening.

Responsibilities:
- Compose a YAML document into a node tree without constructing Python objects.
- Flatten nested mappings and sequences into upper-cased, underscore-joined keys.

Scalars keep the exact text they were written with, so `1.50` stays `1.50`
and `yes` stays `yes`. Null scalars become empty strings.
"""

from __future__ import annotations

import yaml
from yaml.nodes import MappingNode, Node, ScalarNode, SequenceNode

from ..errors import DocumentError


_NULL_TAG = "tag:yaml.org,2002:null"


def flatten_document(text: str, target: dict[str, str] | None = None) -> dict[str, str]:
    """Flatten the first YAML document of `text` into `target`.

    Later documents in the same stream are ignored.

    Args:
        text: YAML source text.
        target: Mapping to merge into; existing keys are overwritten.

    Returns:
        The target mapping (a new one when none was passed).

    Raises:
        DocumentError: If the YAML is invalid, the root is a scalar, or a
            mapping key is not a scalar.
    """

    values = target if target is not None else {}
    loader = yaml.SafeLoader(text)
    try:
        if not loader.check_node():
            return values
        root = loader.get_node()
        if root is None or (isinstance(root, ScalarNode) and root.tag == _NULL_TAG):
            return values
        if isinstance(root, ScalarNode):
            raise DocumentError(
                "Document root must be a mapping or a sequence, not a scalar.",
                hint="Remove the `---` marker to parse the file as KEY=VALUE lines.",
            )
        _flatten_node(loader, None, root, values, set())
    except yaml.YAMLError as exc:
        raise DocumentError(f"Invalid YAML document: {exc}") from exc
    finally:
        loader.dispose()
    return values


def _flatten_node(
    loader: yaml.SafeLoader,
    prefix: str | None,
    node: Node,
    target: dict[str, str],
    active: set[int],
) -> None:
    """Recursively emit leaf scalars of `node` under `prefix`."""

    if isinstance(node, ScalarNode):
        if not prefix:
            raise DocumentError("Document contains a value without a key path.")
        target[prefix.upper()] = _scalar_text(node)
        return

    if id(node) in active:
        raise DocumentError(f"Document contains a recursive alias under `{prefix}`.")
    active.add(id(node))

    if isinstance(node, MappingNode):
        loader.flatten_mapping(node)
        children = [(_key_segment(key_node), value_node) for key_node, value_node in node.value]
    elif isinstance(node, SequenceNode):
        children = [(str(index), child) for index, child in enumerate(node.value)]
    else:
        raise DocumentError(f"Unsupported document node `{type(node).__name__}`.")

    for segment, child in children:
        _flatten_node(loader, _join_path(prefix, segment), child, target, active)
    active.discard(id(node))


def _key_segment(key_node: Node) -> str | None:
    """Return the path segment for one mapping key, `None` for a null key."""

    if not isinstance(key_node, ScalarNode):
        line = key_node.start_mark.line + 1
        raise DocumentError(f"Mapping key on line {line} must be a scalar.")
    if key_node.tag == _NULL_TAG:
        return None
    return key_node.value


def _join_path(prefix: str | None, segment: str | None) -> str | None:
    parts = [part for part in (prefix, segment) if part is not None]
    if not parts:
        return None
    return "_".join(parts)


def _scalar_text(node: ScalarNode) -> str:
    if node.tag == _NULL_TAG:
        return ""
    return node.value
