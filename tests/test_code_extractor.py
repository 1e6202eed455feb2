"""
Tests for the Code Extractor Utility.

Verifies that the extractor can retrieve function source code and remove the
decorators that have already run.
"""

import pytest

from remove_async_await.utils.code_extractor import CodeExtractor


async def sample(x):
  return await x


class Holder:
  """A sample class whose method is extracted."""

  async def method(self):
    return 1


def test_extract_module_function():
  extracted = CodeExtractor.extract_function(sample)
  assert extracted.startswith("async def sample(x):")
  assert "return await x" in extracted


def test_indentation_dedent():
  """
  Verify that methods are extracted with proper dedent.
  """
  lines = CodeExtractor.extract_function(Holder.method).splitlines()
  assert lines[0] == "async def method(self):"


def test_not_a_function_raises_error():
  with pytest.raises(TypeError):
    CodeExtractor.extract_function(Holder)

  with pytest.raises(TypeError):
    CodeExtractor.extract_function(len)


@pytest.mark.parametrize(
  "decorator",
  ["@synchronize", "@pkg.synchronize", "@synchronize(strategy='literal')"],
)
def test_strip_matching_decorator(decorator):
  source = f"{decorator}\nasync def f():\n  pass\n"
  assert CodeExtractor.strip_decorators_through(source, "synchronize") == "async def f():\n  pass\n"


def test_strip_keeps_inner_decorators():
  source = "@outer\n@synchronize\n@inner\nasync def f():\n  pass\n"
  stripped = CodeExtractor.strip_decorators_through(source, "synchronize")
  assert stripped == "@inner\nasync def f():\n  pass\n"


def test_strip_without_match_is_identity():
  source = "@other\nasync def f():\n  pass\n"
  assert CodeExtractor.strip_decorators_through(source, "synchronize") == source
