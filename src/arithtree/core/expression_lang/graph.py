"""
Graphviz DOT rendering of expression trees.

Nodes are named ``n0``, ``n1``, ... in depth-first pre-order, so the same
tree always renders to the same text. Each edge line follows the child's
whole subtree.
"""

from __future__ import annotations

import io
from itertools import count
from typing import TextIO

from arithtree.core.ir.expressions import Expr

GRAPH_NAME = "g"


def write_dot(expr: Expr, sink: TextIO) -> None:
    """Write ``expr`` as a DOT digraph to ``sink``."""
    sink.write(f"digraph {GRAPH_NAME} {{\n")
    _write_nodes(expr, sink)
    sink.write("}\n")


def _write_nodes(expr: Expr, sink: TextIO) -> None:
    ids = count()
    # (node, parent id) still to visit, or an edge line due once a subtree is done
    pending: list[tuple[Expr, int | None] | str] = [(expr, None)]

    while pending:
        item = pending.pop()
        if isinstance(item, str):
            sink.write(item)
            continue

        node, parent_id = item
        node_id = next(ids)
        sink.write(f'n{node_id} [label="{_escape(node.label)}"];\n')
        if parent_id is not None:
            pending.append(f"n{parent_id} -> n{node_id};\n")
        pending.extend((child, node_id) for child in reversed(node.children))


def _escape(label: str) -> str:
    return label.replace("\\", "\\\\").replace('"', '\\"')


def to_dot(expr: Expr) -> str:
    """Render ``expr`` as a DOT digraph string."""
    buf = io.StringIO()
    write_dot(expr, buf)
    return buf.getvalue()
