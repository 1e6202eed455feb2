"""
Tests for Node Diff Utility.
"""

import libcst as cst

from remove_async_await.utils.node_diff import capture_node_source, diff_nodes


def test_capture_await_expression():
  node = cst.Await(expression=cst.Call(func=cst.Name("fetch")))
  assert capture_node_source(node) == "await fetch()"


def test_capture_parsed_statement():
  node = cst.parse_statement("x = await y\n")
  assert capture_node_source(node) == "x = await y\n"


def test_diff_nodes_detection():
  """Verify diff logic returns correct boolean."""
  node_a = cst.parse_expression("await foo()")
  node_b = cst.parse_expression("foo()")

  before, after, changed = diff_nodes(node_a, node_b)

  assert changed is True
  assert before == "await foo()"
  assert after == "foo()"


def test_diff_nodes_no_change():
  """Verify no change is detected for identical structures."""
  node_a = cst.Call(func=cst.Name("foo"))
  node_b = cst.Call(func=cst.Name("foo"))

  _, _, changed = diff_nodes(node_a, node_b)
  assert changed is False


def test_diff_fields_are_named():
  diff = diff_nodes(cst.parse_expression("await x"), cst.Name("x"))
  assert diff.before == "await x"
  assert diff.after == "x"
  assert diff.changed
