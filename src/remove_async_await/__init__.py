"""
remove-async-await Package.

Generates the blocking version of an asynchronous function or method by removing
``async`` and ``await``. Useful for libraries whose blocking and async APIs are
identical apart from the ``await`` on some calls: keep one source body, fold the
other mechanically.

Usage
-----

Structural Fold
^^^^^^^^^^^^^^^

.. code-block:: python

    import remove_async_await as raa

    code = '''async def print_string():
        string = await get_string()
        print(string)
    '''
    print(raa.remove_async_await(code))
    # def print_string():
    #     string = get_string()
    #     print(string)

Input that is neither a function nor an indented method yields the source
``raise SyntaxError("remove_async_await currently only supports ...")`` instead.

Literal Substitution
^^^^^^^^^^^^^^^^^^^^

``remove_async_await_string`` only deletes every ``async`` and ``await``
spelling (keyword plus following whitespace) from the text. It accepts any input shape, but corrupts any identifier, string or
comment containing those substrings. Use it only when the tree fold does not fit.

Decorator
^^^^^^^^^

.. code-block:: python

    from remove_async_await import synchronize

    @synchronize
    async def get_string() -> str:
      return "hello world"

    get_string()  # "hello world"
"""

from typing import Optional

from remove_async_await.config import RuntimeConfig
from remove_async_await.core.conversion_result import ConversionResult
from remove_async_await.core.engine import DIAGNOSTIC_MESSAGE, FoldEngine
from remove_async_await.core.literal import LiteralSubstitutionError
from remove_async_await.decorator import synchronize
from remove_async_await.enums import DeclarationKind, Strategy

__version__ = "1.0.0"


def remove_async_await(code: str, config: Optional[RuntimeConfig] = None) -> str:
  """
  Folds one function or method declaration into its synchronous version.

  Args:
      code (str): Source of a single ``def``/``async def`` at column 0, or of a
          single method indented as it sits in a class body.
      config (RuntimeConfig, optional): Only the debug flag is used; the
          strategy is always structural.

  Returns:
      str: The folded source, or the diagnostic source for unsupported input.
  """
  return FoldEngine(config or RuntimeConfig.load(strategy=Strategy.STRUCTURAL)).run_structural(code).code


def remove_async_await_string(code: str, config: Optional[RuntimeConfig] = None) -> str:
  """
  Removes every ``async`` and ``await`` marker from the source text.

  Args:
      code (str): Python source of any shape.
      config (RuntimeConfig, optional): Only the debug flag is used.

  Returns:
      str: The substituted source.

  Raises:
      LiteralSubstitutionError: If the result is not a valid token sequence.
  """
  return FoldEngine(config or RuntimeConfig.load(strategy=Strategy.LITERAL)).run_string(code).code


__all__ = [
  "ConversionResult",
  "DIAGNOSTIC_MESSAGE",
  "DeclarationKind",
  "FoldEngine",
  "LiteralSubstitutionError",
  "RuntimeConfig",
  "Strategy",
  "remove_async_await",
  "remove_async_await_string",
  "synchronize",
  "__version__",
]
