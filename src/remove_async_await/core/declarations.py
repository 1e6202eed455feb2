"""
Declaration Model.

The two declaration shapes the fold accepts, parsed with LibCST:

- `FunctionDeclaration`: a single ``def`` / ``async def`` statement at column 0,
  with its decorators and any surrounding comments.
- `TraitMethodDeclaration`: a single method as it appears inside a class body
  (a ``Protocol``, an ABC, or a plain class), indented at class-body level. A body
  made only of ``...``, ``pass`` and docstrings marks a signature-only method.

Each parser raises `DeclarationParseError` when the input has another shape, so a
caller can try the next shape. Serialization is lossless: only the folded
``FunctionDef`` differs from the input text.
"""

import dataclasses
from dataclasses import dataclass
from typing import ClassVar, Sequence

import libcst as cst

from remove_async_await.enums import DeclarationKind

# Synthetic class header used to parse an indented method as a class-body member.
_HOST_HEADER = "class _RemoveAsyncAwaitHost:\n"


class DeclarationParseError(ValueError):
  """Raised when source text is not the expected declaration shape."""


@dataclass(frozen=True)
class FunctionDeclaration:
  """
  A module-level function declaration.

  Attributes:
      module (cst.Module): The parsed input; carries header comments and blank lines.
      node (cst.FunctionDef): The declaration itself.
  """

  kind: ClassVar[DeclarationKind] = DeclarationKind.FUNCTION

  module: cst.Module
  node: cst.FunctionDef

  @property
  def is_async(self) -> bool:
    return self.node.asynchronous is not None

  def with_node(self, node: cst.FunctionDef) -> "FunctionDeclaration":
    return dataclasses.replace(self, node=node)

  def to_code(self) -> str:
    return self.module.with_changes(body=[self.node]).code


@dataclass(frozen=True)
class TraitMethodDeclaration:
  """
  A method declared inside a class body.

  Attributes:
      host (cst.Module): The input wrapped in a synthetic class.
      node (cst.FunctionDef): The method itself.
  """

  kind: ClassVar[DeclarationKind] = DeclarationKind.TRAIT_METHOD

  host: cst.Module
  node: cst.FunctionDef

  @property
  def is_async(self) -> bool:
    return self.node.asynchronous is not None

  @property
  def has_default_body(self) -> bool:
    """
    True if the method carries an implementation.

    A required method is spelled ``async def f(self) -> T: ...`` in Python;
    docstrings, ``pass`` and ``...`` do not count as an implementation.
    """
    body = self.node.body
    if isinstance(body, cst.SimpleStatementSuite):
      return not _all_placeholders(body.body)

    for stmt in body.body:
      if not isinstance(stmt, cst.SimpleStatementLine) or not _all_placeholders(stmt.body):
        return True
    return False

  def with_node(self, node: cst.FunctionDef) -> "TraitMethodDeclaration":
    return dataclasses.replace(self, node=node)

  def to_code(self) -> str:
    class_def = self.host.body[0]
    class_body = class_def.body.with_changes(body=[self.node])
    code = self.host.with_changes(body=[class_def.with_changes(body=class_body)]).code
    return code[len(_HOST_HEADER) :]


def _all_placeholders(statements: Sequence[cst.BaseSmallStatement]) -> bool:
  for small in statements:
    if isinstance(small, cst.Pass):
      continue
    if isinstance(small, cst.Expr) and isinstance(small.value, (cst.Ellipsis, cst.SimpleString, cst.ConcatenatedString)):
      continue
    return False
  return True


def parse_function_declaration(code: str) -> FunctionDeclaration:
  """
  Parses source text as exactly one module-level function declaration.

  Args:
      code (str): Python source.

  Returns:
      FunctionDeclaration: The parsed declaration.

  Raises:
      DeclarationParseError: If the text is not valid Python or holds anything
          other than a single ``def`` statement.
  """
  try:
    module = cst.parse_module(code)
  except cst.ParserSyntaxError as e:
    raise DeclarationParseError(f"Not a valid function declaration: {e.message}") from e

  if len(module.body) != 1 or not isinstance(module.body[0], cst.FunctionDef):
    raise DeclarationParseError("Expected exactly one function declaration.")

  return FunctionDeclaration(module=module, node=module.body[0])


def parse_trait_method_declaration(code: str) -> TraitMethodDeclaration:
  """
  Parses source text as exactly one method, indented as it sits in a class body.

  Args:
      code (str): Python source, e.g. ``inspect.getsource`` of a method.

  Returns:
      TraitMethodDeclaration: The parsed declaration.

  Raises:
      DeclarationParseError: If the text is not a single indented ``def`` statement.
  """
  try:
    host = cst.parse_module(_HOST_HEADER + code)
  except cst.ParserSyntaxError as e:
    raise DeclarationParseError(f"Not a valid method declaration: {e.message}") from e

  class_def = host.body[0]
  if len(host.body) != 1 or not isinstance(class_def, cst.ClassDef) or not isinstance(class_def.body, cst.IndentedBlock):
    raise DeclarationParseError("Expected exactly one method declaration.")

  members = class_def.body.body
  if len(members) != 1 or not isinstance(members[0], cst.FunctionDef):
    raise DeclarationParseError("Expected exactly one method declaration.")

  return TraitMethodDeclaration(host=host, node=members[0])
