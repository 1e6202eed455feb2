"""
Registration Decorator.

`synchronize` turns an ``async def`` into a blocking function at import time,
so a library can keep one async source body and expose the blocking twin
without a code-generation step:

.. code-block:: python

    from remove_async_await import synchronize

    @synchronize
    async def get_string() -> str:
      return "hello world"

    @synchronize
    async def print_string() -> None:
      print(await get_string())

The regenerated function is compiled from the folded source and executed in the
original function's globals, so the names it calls resolve to whatever the module
binds at call time (here, the blocking ``get_string``).

Limitations:
    Closures cannot be rebuilt because ``exec`` has no way to rebind free
    variables; this includes methods that use zero-argument ``super()``.
    The decorator must be applied under the name ``synchronize``.
"""

import functools
import inspect
from typing import Any, Callable, Optional, Union

from remove_async_await.config import RuntimeConfig
from remove_async_await.core.engine import FoldEngine
from remove_async_await.enums import Strategy
from remove_async_await.utils.code_extractor import CodeExtractor

DECORATOR_NAME = "synchronize"


def synchronize(
  func: Optional[Callable[..., Any]] = None,
  *,
  strategy: Optional[Union[Strategy, str]] = None,
) -> Any:
  """
  Replaces an async function with its folded, blocking version.

  Usable bare (``@synchronize``) or with options
  (``@synchronize(strategy="literal")``).

  Args:
      func: The function being decorated.
      strategy: Folding strategy; defaults to the configured one (structural).

  Returns:
      The synchronous function, or a decorator when called with options only.

  Raises:
      TypeError: If ``func`` is not a plain Python function or is a closure.
      SyntaxError: If the declaration is not supported (the diagnostic source
          raises it when executed).
  """
  if func is None:
    return functools.partial(synchronize, strategy=strategy)

  if not callable(func):
    raise TypeError(f"synchronize expects a Python function, got {type(func)}")

  # Decorators applied below this one have wrapped the declaration already.
  target = inspect.unwrap(func)
  if not inspect.isfunction(target):
    raise TypeError(f"synchronize expects a Python function, got {type(target)}")

  if target.__code__.co_freevars:
    names = ", ".join(target.__code__.co_freevars)
    raise TypeError(f"Cannot synchronize closure {target.__qualname__} (free variables: {names})")

  source = CodeExtractor.extract_function(target)
  source = CodeExtractor.strip_decorators_through(source, DECORATOR_NAME)

  config = RuntimeConfig.load(strategy=strategy)
  result = FoldEngine(config).run(source)

  code = compile(result.code, filename=f"<remove_async_await {target.__qualname__}>", mode="exec")
  namespace: dict = {}
  exec(code, target.__globals__, namespace)

  sync_func = namespace[target.__name__]
  return functools.update_wrapper(sync_func, func)
