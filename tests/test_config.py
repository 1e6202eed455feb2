"""
Tests for RuntimeConfig resolution.

Priority: explicit arguments > environment > pyproject.toml > defaults.
"""

import pytest
from pydantic import ValidationError

from remove_async_await.config import ENV_DEBUG, ENV_STRATEGY, RuntimeConfig
from remove_async_await.enums import Strategy


@pytest.fixture
def project_dir(tmp_path):
  """A directory with a pyproject.toml enabling debug and the literal strategy."""
  (tmp_path / "pyproject.toml").write_text(
    '[tool.remove_async_await]\nstrategy = "literal"\ndebug = true\n',
    encoding="utf-8",
  )
  return tmp_path


def test_defaults(tmp_path):
  config = RuntimeConfig.load(search_path=tmp_path)

  assert config.strategy == Strategy.STRUCTURAL
  assert config.debug is False


def test_toml_settings_found_from_nested_directory(project_dir):
  nested = project_dir / "src" / "pkg"
  nested.mkdir(parents=True)

  config = RuntimeConfig.load(search_path=nested)

  assert config.strategy == Strategy.LITERAL
  assert config.debug is True


def test_environment_overrides_toml(project_dir, monkeypatch):
  monkeypatch.setenv(ENV_DEBUG, "0")
  monkeypatch.setenv(ENV_STRATEGY, "structural")

  config = RuntimeConfig.load(search_path=project_dir)

  assert config.strategy == Strategy.STRUCTURAL
  assert config.debug is False


@pytest.mark.parametrize("value", ["1", "true", "YES", " on "])
def test_environment_debug_truthy_values(tmp_path, monkeypatch, value):
  monkeypatch.setenv(ENV_DEBUG, value)
  assert RuntimeConfig.load(search_path=tmp_path).debug is True


def test_explicit_arguments_override_everything(project_dir, monkeypatch):
  monkeypatch.setenv(ENV_DEBUG, "1")

  config = RuntimeConfig.load(strategy=Strategy.STRUCTURAL, debug=False, search_path=project_dir)

  assert config.strategy == Strategy.STRUCTURAL
  assert config.debug is False


def test_strategy_accepts_plain_strings(tmp_path):
  assert RuntimeConfig.load(strategy="literal", search_path=tmp_path).strategy == Strategy.LITERAL


def test_invalid_strategy_rejected(tmp_path):
  with pytest.raises(ValidationError):
    RuntimeConfig.load(strategy="regex", search_path=tmp_path)


def test_malformed_toml_is_ignored(tmp_path):
  (tmp_path / "pyproject.toml").write_text("[tool.remove_async_await\n", encoding="utf-8")
  assert RuntimeConfig.load(search_path=tmp_path) == RuntimeConfig()


def test_strategy_name_is_case_insensitive(tmp_path, monkeypatch):
  monkeypatch.setenv(ENV_STRATEGY, " LITERAL ")
  assert RuntimeConfig.load(search_path=tmp_path).strategy == Strategy.LITERAL


@pytest.mark.parametrize(("value", "expected"), [('"false"', False), ('"no"', False), ('"yes"', True), ("0", False)])
def test_toml_debug_values_are_parsed(tmp_path, value, expected):
  (tmp_path / "pyproject.toml").write_text(f"[tool.remove_async_await]\ndebug = {value}\n", encoding="utf-8")
  assert RuntimeConfig.load(search_path=tmp_path).debug is expected
