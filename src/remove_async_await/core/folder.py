"""
Async/Await Removal Transformer.

This module provides `AsyncAwaitRemover`, the LibCST transformer that folds an
asynchronous declaration into its synchronous twin. LibCST calls the ``leave_*``
hooks after the children of a node have been transformed, so every rule below
sees an already-folded subtree:

1.  **Signatures**: ``async def`` loses its ``async`` qualifier. This covers
    module-level functions, methods, and ``async def`` statements nested in a body.
2.  **Suspension points**: ``await <expr>`` is replaced by ``<expr>``. Parentheses
    owned by the ``Await`` node move onto the operand.
3.  **Asynchronous blocks**: ``async with``, ``async for`` and ``async for``
    comprehension clauses become their ordinary forms. Leading lines, items and
    bodies are kept as-is.

Every other node is rebuilt by LibCST with its folded children and its type unchanged.
Code inside string literals (``exec("await x")``, docstrings) is opaque and is never rewritten.
"""

from typing import Optional, cast

import libcst as cst

from remove_async_await.core.tracer import TraceLogger
from remove_async_await.utils.node_diff import diff_nodes


class AsyncAwaitRemover(cst.CSTTransformer):
  """
  Strips ``async`` qualifiers, ``await`` markers and asynchronous block forms.

  Attributes:
      tracer (Optional[TraceLogger]): Receives one ``ast_mutation`` event per rewrite.
  """

  def __init__(self, tracer: Optional[TraceLogger] = None) -> None:
    super().__init__()
    self.tracer = tracer

  def _record(self, node_type: str, original: cst.CSTNode, updated: cst.CSTNode) -> None:
    if self.tracer is None:
      return
    before, after, changed = diff_nodes(original, updated)
    if changed:
      self.tracer.log_mutation(node_type, before, after)

  def leave_FunctionDef(self, original_node: cst.FunctionDef, updated_node: cst.FunctionDef) -> cst.FunctionDef:
    """
    Clears the ``async`` qualifier of a function or method signature.

    The body has already been folded by the time this hook runs, so a
    declaration without the qualifier still has its nested markers removed.

    Args:
        original_node (cst.FunctionDef): The node before transformation.
        updated_node (cst.FunctionDef): The node with a folded body.

    Returns:
        cst.FunctionDef: The synchronous declaration.
    """
    if updated_node.asynchronous is None:
      return updated_node

    if self.tracer is not None:
      name = updated_node.name.value
      self.tracer.log_mutation("FunctionDef", f"async def {name}", f"def {name}")
    return updated_node.with_changes(asynchronous=None)

  def leave_Await(self, original_node: cst.Await, updated_node: cst.Await) -> cst.BaseExpression:
    """
    Unwraps one suspension point.

    ``await`` only accepts a primary, so the operand can take the place of the
    ``Await`` node without changing precedence.

    Args:
        original_node (cst.Await): The node before transformation.
        updated_node (cst.Await): The node with a folded operand.

    Returns:
        cst.BaseExpression: The folded operand.
    """
    operand = updated_node.expression
    if updated_node.lpar or updated_node.rpar:
      operand = operand.with_changes(
        lpar=[*updated_node.lpar, *operand.lpar],
        rpar=[*operand.rpar, *updated_node.rpar],
      )
    self._record("Await", original_node, operand)
    return operand

  def leave_With(self, original_node: cst.With, updated_node: cst.With) -> cst.With:
    if updated_node.asynchronous is None:
      return updated_node
    result = updated_node.with_changes(asynchronous=None)
    self._record("With", original_node, result)
    return result

  def leave_For(self, original_node: cst.For, updated_node: cst.For) -> cst.For:
    if updated_node.asynchronous is None:
      return updated_node
    result = updated_node.with_changes(asynchronous=None)
    self._record("For", original_node, result)
    return result

  def leave_CompFor(self, original_node: cst.CompFor, updated_node: cst.CompFor) -> cst.CompFor:
    if updated_node.asynchronous is None:
      return updated_node
    result = updated_node.with_changes(asynchronous=None)
    self._record("CompFor", original_node, result)
    return result


def fold_function(node: cst.FunctionDef, tracer: Optional[TraceLogger] = None) -> cst.FunctionDef:
  """
  Folds one function or method declaration.

  Args:
      node (cst.FunctionDef): The declaration to fold.
      tracer (Optional[TraceLogger]): Optional mutation recorder.

  Returns:
      cst.FunctionDef: The synchronous declaration.
  """
  return cast(cst.FunctionDef, node.visit(AsyncAwaitRemover(tracer)))


def fold_module(module: cst.Module, tracer: Optional[TraceLogger] = None) -> cst.Module:
  """
  Folds every function declaration of a module and every method of its classes.

  Statements that are not declarations (imports, assignments, ``if`` blocks at
  module level) are returned untouched.

  Args:
      module (cst.Module): The parsed module.
      tracer (Optional[TraceLogger]): Optional mutation recorder.

  Returns:
      cst.Module: The module with synchronous declarations.
  """
  remover = AsyncAwaitRemover(tracer)
  return module.with_changes(body=[_fold_statement(stmt, remover) for stmt in module.body])


def _fold_statement(stmt: cst.BaseStatement, remover: AsyncAwaitRemover) -> cst.BaseStatement:
  if isinstance(stmt, cst.FunctionDef):
    return cast(cst.FunctionDef, stmt.visit(remover))

  if isinstance(stmt, cst.ClassDef) and isinstance(stmt.body, cst.IndentedBlock):
    members = [_fold_statement(member, remover) for member in stmt.body.body]
    return stmt.with_changes(body=stmt.body.with_changes(body=members))

  return stmt
