"""Human-friendly console inspection for compiled node graphs."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Hashable, List, Optional, Tuple

import numpy as np

from .dyno.nodes import DynoBlock, DynoConst, DynoLiteral, DynoOutput, DynoUniform, DynoValue

ASCII_BRANCH_LAST = "+-- "
ASCII_BRANCH_MID = "|-- "
ASCII_PIPE_LAST = "    "
ASCII_PIPE_MID = "|   "


@dataclass
class TreeNode:
    label: str
    port: Optional[str] = None
    children: List["TreeNode"] = field(default_factory=list)


def _format_payload(value: Any) -> str:
    if isinstance(value, np.ndarray):
        return "(" + ", ".join(f"{item:g}" for item in value.tolist()) + ")"
    if isinstance(value, float):
        return f"{value:g}"
    return repr(value)


def _label(node: DynoValue) -> str:
    if isinstance(node, DynoUniform):
        name = f" {node.name}" if node.name else ""
        return f"uniform{name} {node.type} = {_format_payload(node.value)}"
    if isinstance(node, DynoConst):
        return f"const {node.type} = {_format_payload(node.value)}"
    if isinstance(node, DynoLiteral):
        return f"literal {node.type} {node.value}"
    if isinstance(node, DynoOutput):
        return f"{node.block.op}.{node.key} -> {node.type}"
    if isinstance(node, DynoBlock):
        channels = ", ".join(f"{key}: {tag}" for key, tag in node.out_types.items())
        return f"{node.op} -> {{{channels}}}"
    return type(node).__name__


def _build_tree(node: DynoValue, port: Optional[str] = None) -> TreeNode:
    tree = TreeNode(label=_label(node), port=port)
    block = node.block if isinstance(node, DynoOutput) else node
    if isinstance(block, DynoBlock):
        for input_port, source in block.inputs.items():
            tree.children.append(_build_tree(source, input_port))
    return tree


def _render_subtree(tree: TreeNode, lines: List[str], prefix: str, is_last: bool) -> None:
    branch = ASCII_BRANCH_LAST if is_last else ASCII_BRANCH_MID
    port = f"{tree.port}: " if tree.port else ""
    lines.append(f"{prefix}{branch}{port}{tree.label}")
    child_prefix = prefix + (ASCII_PIPE_LAST if is_last else ASCII_PIPE_MID)
    for idx, child in enumerate(tree.children):
        _render_subtree(child, lines, child_prefix, idx == len(tree.children) - 1)


def render_tree(node: DynoValue) -> str:
    """Render ``node`` and its inputs as an ASCII tree.

    Shared sub-graphs are repeated under each consumer.
    """
    root = _build_tree(node)
    lines: List[str] = [root.label]
    for idx, child in enumerate(root.children):
        _render_subtree(child, lines, "", idx == len(root.children) - 1)
    return "\n".join(lines)


def print_tree(node: DynoValue) -> None:
    print(render_tree(node))


def node_signature(node: DynoValue) -> Tuple[Hashable, ...]:
    """Hashable structural description of ``node``.

    Two graphs with equal signatures perform the same operations on equal
    leaves in the same arrangement; node identities are ignored.
    """
    cache: Dict[int, Tuple[Hashable, ...]] = {}
    return _signature(node, cache)


def _signature(node: DynoValue, cache: Dict[int, Tuple[Hashable, ...]]) -> Tuple[Hashable, ...]:
    if node.id in cache:
        return cache[node.id]
    if isinstance(node, DynoOutput):
        result: Tuple[Hashable, ...] = ("output", node.key, _signature(node.block, cache))
    elif isinstance(node, DynoBlock):
        inputs = tuple(
            (port, _signature(source, cache)) for port, source in node.inputs.items()
        )
        params = tuple(sorted((key, repr(value)) for key, value in node.params.items()))
        result = ("block", node.op, inputs, params)
    elif isinstance(node, DynoUniform):
        # Uniforms compare by identity.
        result = ("uniform", node.type, node.id)
    elif isinstance(node, DynoConst):
        value = node.value
        payload = tuple(value.tolist()) if isinstance(value, np.ndarray) else value
        result = ("const", node.type, payload)
    elif isinstance(node, DynoLiteral):
        result = ("literal", node.type, node.value)
    else:
        result = ("unknown", type(node).__name__, node.id)
    cache[node.id] = result
    return result


__all__ = ["TreeNode", "render_tree", "print_tree", "node_signature"]
