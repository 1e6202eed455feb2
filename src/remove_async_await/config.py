"""
Runtime Configuration Store.

Resolves the folding strategy and the debug trace flag from, in priority order:
explicit arguments, environment variables, the nearest ``pyproject.toml``
(``[tool.remove_async_await]``), and defaults.
"""

import os
import sys
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union
from pydantic import BaseModel, Field, field_validator

from remove_async_await.enums import Strategy

if sys.version_info >= (3, 11):
  import tomllib
else:
  import tomli as tomllib

ENV_DEBUG = "REMOVE_ASYNC_AWAIT_DEBUG"
ENV_STRATEGY = "REMOVE_ASYNC_AWAIT_STRATEGY"

_TRUTHY = {"1", "true", "yes", "on"}


class RuntimeConfig(BaseModel):
  """
  Global configuration container for the fold engine.
  """

  strategy: Strategy = Field(Strategy.STRUCTURAL, description="Folding strategy (structural or literal).")
  debug: bool = Field(
    False,
    description="If True, dump the input, parsed tree and output to the console. Never changes the output.",
  )

  @field_validator("strategy", mode="before")
  @classmethod
  def normalize_strategy(cls, v: Any) -> Any:
    """
    Accepts strategy names in any case and with surrounding whitespace.

    Args:
        v: The raw value (a `Strategy` or a string from env/TOML).

    Returns:
        The lower-cased name for strings, anything else unchanged.
    """
    if isinstance(v, str):
      return v.strip().lower()
    return v

  @classmethod
  def load(
    cls,
    strategy: Optional[Union[Strategy, str]] = None,
    debug: Optional[bool] = None,
    search_path: Optional[Path] = None,
  ) -> "RuntimeConfig":
    """
    Loads configuration from pyproject.toml and the environment, then applies overrides.

    Args:
        strategy (Optional[Union[Strategy, str]]): Override for the folding strategy.
        debug (Optional[bool]): Override for the debug trace flag.
        search_path (Optional[Path]): Directory to start searching for TOML config.

    Returns:
        RuntimeConfig: The fully resolved configuration object.
    """
    start_dir = search_path or Path.cwd()
    toml_config, _ = _load_toml_settings(start_dir)

    # 1. Strategy
    final_strategy = strategy or os.environ.get(ENV_STRATEGY) or toml_config.get("strategy", Strategy.STRUCTURAL)

    # 2. Debug
    if debug is not None:
      final_debug = debug
    elif ENV_DEBUG in os.environ:
      final_debug = _parse_flag(os.environ[ENV_DEBUG])
    else:
      final_debug = _parse_flag(toml_config.get("debug", False))

    return cls(strategy=final_strategy, debug=final_debug)


def _parse_flag(value: Any) -> bool:
  """Reads a boolean from TOML or the environment; strings must be one of `_TRUTHY` to be true."""
  if isinstance(value, str):
    return value.strip().lower() in _TRUTHY
  return bool(value)


def _load_toml_settings(start_path: Path) -> Tuple[Dict[str, Any], Optional[Path]]:
  """
  Recursively searches parents for 'pyproject.toml' and extracts config.

  Args:
      start_path (Path): Directory to start search from.

  Returns:
      Tuple[Dict, Optional[Path]]: The config dict and the directory definition was found in.
  """
  current = start_path.resolve()

  for parent in [current, *current.parents]:
    toml_path = parent / "pyproject.toml"
    if toml_path.exists() and toml_path.is_file():
      try:
        with open(toml_path, "rb") as f:
          data = tomllib.load(f)
      except (OSError, tomllib.TOMLDecodeError):
        return {}, None

      tool_section = data.get("tool", {})
      return tool_section.get("remove_async_await", {}), parent

  return {}, None
