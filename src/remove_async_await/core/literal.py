"""
Literal Substitution Fallback.

The "dumb" strategy: every ``async`` and every ``await`` keyword spelling is
removed from the raw text, and the result is re-lexed to make sure it is still a
token sequence. Nothing is parsed, so this works on any input shape (whole
classes, several declarations) that the structural fold rejects.

A marker is the keyword together with the whitespace (spaces, tabs, backslash
continuations) that follows it; ``await`` directly followed by ``(`` or ``[`` is a
marker too. Removing the trailing whitespace keeps ``    async def`` indented as
``    def``.

Usage contract:
    The removal is unconditional. Any identifier, string literal or comment that
    contains a marker is corrupted, e.g. ``is_async = True`` becomes
    ``is_= True`` and ``"await the result"`` becomes ``"the result"``. Only opt in
    to this strategy for input known to be free of such text.
"""

import io
import re
import tokenize

_GAP = r"(?:[ \t]|\\\r?\n)"

ASYNC_MARKER = re.compile(rf"async{_GAP}+")
AWAIT_MARKER = re.compile(rf"await{_GAP}+|await(?=[(\[])")


class LiteralSubstitutionError(RuntimeError):
  """Raised when the substituted text is no longer a valid token sequence."""


def substitute_markers(code: str) -> str:
  """
  Removes the asynchronous markers from source text.

  Args:
      code (str): Python source text.

  Returns:
      str: The text with every marker removed.

  Raises:
      LiteralSubstitutionError: If the result cannot be tokenized. This is fatal;
          callers are not expected to recover from it.
  """
  output = AWAIT_MARKER.sub("", ASYNC_MARKER.sub("", code))

  try:
    for _ in tokenize.generate_tokens(io.StringIO(output).readline):
      pass
  except (tokenize.TokenError, SyntaxError) as e:
    raise LiteralSubstitutionError(f"Substituted source is not a valid token sequence: {e}") from e

  return output
