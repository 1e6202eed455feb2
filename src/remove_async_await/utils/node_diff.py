"""
Source rendering of detached LibCST nodes.

The remover records each rewrite as source text. Nodes handed to a ``leave_*``
hook are not attached to a module, so they are rendered against an empty one
(default indentation and newline).
"""

from typing import NamedTuple

import libcst as cst

_RENDER_CTX = cst.parse_module("")


class NodeDiff(NamedTuple):
  before: str
  after: str
  changed: bool


def capture_node_source(node: cst.CSTNode) -> str:
  """Renders ``node`` as source, e.g. ``await fetch()``."""
  return _RENDER_CTX.code_for_node(node)


def diff_nodes(original: cst.CSTNode, modified: cst.CSTNode) -> NodeDiff:
  """
  Renders both nodes and reports whether the rewrite changed the source.

  Surrounding whitespace is ignored when comparing.

  Args:
      original: The node before transformation.
      modified: The node after transformation.

  Returns:
      NodeDiff: ``(before, after, changed)``.
  """
  before = capture_node_source(original)
  after = capture_node_source(modified)
  return NodeDiff(before, after, before.strip() != after.strip())
