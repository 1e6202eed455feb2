"""
Utility to extract source code from live Python functions.

Used by the `synchronize` decorator: the source of the decorated function is
read with `inspect`, dedented so methods parse as module-level functions, and
stripped of the decorators that have already been applied by the time the
decorator runs.
"""

import inspect
import textwrap
from typing import Any, Callable

import libcst as cst


class CodeExtractor:
  """
  Extracts self-contained source code for Python functions.
  """

  @staticmethod
  def extract_function(func_obj: Callable[..., Any]) -> str:
    """
    Reads the source code of a function and dedents it.

    Args:
        func_obj (Callable): The function or method to extract.

    Returns:
        str: The source code string of the definition, decorators included.

    Raises:
        OSError: If source code cannot be retrieved (e.g. defined in a REPL).
        TypeError: If input is not a Python function.
    """
    if not inspect.isfunction(func_obj):
      raise TypeError(f"Expected a function, got {type(func_obj)}")

    try:
      source = inspect.getsource(func_obj)
    except OSError as e:
      raise OSError(f"Could not get source for {func_obj.__qualname__}: {e}")

    return textwrap.dedent(source)

  @staticmethod
  def strip_decorators_through(source: str, decorator_name: str) -> str:
    """
    Removes decorators from the top down to, and including, the named one.

    Decorators listed above ``decorator_name`` are applied by Python after it
    returns, and the named one must not run twice. Decorators below it are kept
    so they wrap the regenerated function too. If no decorator matches, the
    source is returned unchanged.

    Args:
        source (str): Dedented source of one function definition.
        decorator_name (str): Bare name, matched against ``@name``,
            ``@pkg.name`` and ``@name(...)``.

    Returns:
        str: The source without the stripped decorators.
    """
    module = cst.parse_module(source)
    func_def = module.body[0]
    if not isinstance(func_def, cst.FunctionDef):
      return source

    for idx, decorator in enumerate(func_def.decorators):
      if _decorator_name(decorator.decorator) == decorator_name:
        func_def = func_def.with_changes(decorators=func_def.decorators[idx + 1 :])
        return module.with_changes(body=[func_def, *module.body[1:]]).code

    return source


def _decorator_name(expr: cst.BaseExpression) -> str:
  if isinstance(expr, cst.Call):
    expr = expr.func
  if isinstance(expr, cst.Attribute):
    return expr.attr.value
  if isinstance(expr, cst.Name):
    return expr.value
  return ""
