"""
Pytest Configuration and Fixtures.

Includes:
- Syspath patching for local imports.
- Environment isolation so a developer's REMOVE_ASYNC_AWAIT_* variables do not leak into tests.
- A recording console fixture for inspecting debug dumps.
"""

import sys
import pytest
from pathlib import Path

from rich.console import Console

# Add src to path so we can import 'remove_async_await' without installing it
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))

from remove_async_await.config import ENV_DEBUG, ENV_STRATEGY  # noqa: E402
from remove_async_await.utils.console import reset_console, set_console  # noqa: E402


@pytest.fixture(autouse=True)
def isolate_environment(monkeypatch):
  """
  Clears configuration environment variables for the duration of each test.
  """
  monkeypatch.delenv(ENV_DEBUG, raising=False)
  monkeypatch.delenv(ENV_STRATEGY, raising=False)
  yield


@pytest.fixture
def recording_console():
  """Injects a recording console and restores the stderr console afterwards."""
  capture = Console(record=True, width=400, stderr=True)
  set_console(capture)
  yield capture
  reset_console()
