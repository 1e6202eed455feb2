"""
Orchestration Engine for the Fold.

This module provides the `FoldEngine`, the driver that turns one asynchronous
declaration into its synchronous version. The strategy comes from `RuntimeConfig`:

1.  **Structural** (default):
    - Attempts to parse the input as a module-level function declaration.
    - On failure, attempts a method declared inside a class body.
    - On failure of both, returns a fixed diagnostic (``raise SyntaxError(...)``)
      instead of folded code. This path never raises.
    - Otherwise folds the tree with `AsyncAwaitRemover` and serializes it.

2.  **Literal**: removes the markers from the raw text. A re-lex failure
    raises `LiteralSubstitutionError`, which is deliberately not caught here.

When ``config.debug`` is set the raw input, the parsed tree, the output and a
count of rewritten nodes are dumped to the console. The returned code does not depend on the flag.
"""

from typing import Callable, Dict, Optional, Sequence, Tuple, Union

import libcst as cst

from remove_async_await.config import RuntimeConfig
from remove_async_await.core.conversion_result import ConversionResult
from remove_async_await.core.declarations import (
  DeclarationParseError,
  FunctionDeclaration,
  TraitMethodDeclaration,
  parse_function_declaration,
  parse_trait_method_declaration,
)
from remove_async_await.core.folder import fold_function, fold_module
from remove_async_await.core.literal import substitute_markers
from remove_async_await.core.tracer import TraceLogger, get_tracer, reset_tracer
from remove_async_await.enums import DeclarationKind, Strategy
from remove_async_await.utils.console import print_stage

Declaration = Union[FunctionDeclaration, TraitMethodDeclaration]

DIAGNOSTIC_MESSAGE = (
  "remove_async_await currently only supports functions and trait methods. "
  "if you are using it on a supported type, parsing probably failed; "
  "please ensure the input is valid Python."
)

# Attempted in order; the first parser that accepts the input wins.
_DECLARATION_PARSERS: Sequence[Tuple[DeclarationKind, Callable[[str], Declaration]]] = (
  (DeclarationKind.FUNCTION, parse_function_declaration),
  (DeclarationKind.TRAIT_METHOD, parse_trait_method_declaration),
)


def diagnostic_code(message: str = DIAGNOSTIC_MESSAGE) -> str:
  """
  Builds the source emitted in place of an unsupported declaration.

  Args:
      message (str): Human-readable reason.

  Returns:
      str: ``raise SyntaxError("<message>")`` followed by a newline.
  """
  stmt = cst.SimpleStatementLine(
    body=[
      cst.Raise(
        exc=cst.Call(
          func=cst.Name("SyntaxError"),
          args=[cst.Arg(value=cst.SimpleString(f'"{message}"'))],
        )
      )
    ]
  )
  return cst.Module(body=[stmt]).code


class FoldEngine:
  """
  The main fold unit.

  Holds the configuration for a series of independent invocations. Each call to
  `run` builds its own tree and shares no state with other calls.
  """

  def __init__(self, config: Optional[RuntimeConfig] = None) -> None:
    """
    Initializes the Engine.

    Args:
        config (RuntimeConfig, optional): The runtime configuration object.
            Loaded from the environment and pyproject.toml if None.
    """
    self.config = config or RuntimeConfig.load()

  def run(self, code: str) -> ConversionResult:
    """
    Folds one declaration with the configured strategy.

    Args:
        code (str): Source of one function or method declaration.

    Returns:
        ConversionResult: Folded code, or the diagnostic with ``success=False``.

    Raises:
        LiteralSubstitutionError: Only with the literal strategy.
    """
    if self.config.strategy == Strategy.LITERAL:
      return self.run_string(code)
    return self.run_structural(code)

  def run_structural(self, code: str) -> ConversionResult:
    """
    Folds one declaration by tree rewriting.

    Args:
        code (str): Source of one function or method declaration.

    Returns:
        ConversionResult: Object containing the folded code and trace events.
    """
    reset_tracer()
    tracer = get_tracer()
    self._dump("Input", code)

    tracer.start_phase("Fold Pipeline", Strategy.STRUCTURAL.value)
    declaration = self._parse_declaration(code, tracer)

    if declaration is None:
      tracer.log_diagnostic(DIAGNOSTIC_MESSAGE)
      tracer.end_phase()
      output = diagnostic_code()
      self._dump("Output", output)
      return ConversionResult(
        code=output,
        errors=[DIAGNOSTIC_MESSAGE],
        success=False,
        trace_events=tracer.export(),
      )

    self._dump("Parsed input", repr(declaration.node))

    tracer.start_phase("Fold", f"{declaration.kind.value} {declaration.node.name.value}")
    folded = declaration.with_node(fold_function(declaration.node, tracer=tracer))
    tracer.end_phase()

    output = folded.to_code()
    tracer.end_phase()
    self._dump("Output", output)
    self._dump("Mutations", _format_counts(tracer.mutation_counts()))

    return ConversionResult(code=output, kind=declaration.kind, trace_events=tracer.export())

  def run_string(self, code: str) -> ConversionResult:
    """
    Folds arbitrary source by literal substitution.

    Args:
        code (str): Python source text of any shape.

    Returns:
        ConversionResult: Object containing the substituted code.

    Raises:
        LiteralSubstitutionError: If the substituted text no longer tokenizes.
    """
    reset_tracer()
    tracer = get_tracer()
    self._dump("Input", code)

    tracer.start_phase("Literal Substitution", Strategy.LITERAL.value)
    output = substitute_markers(code)
    tracer.log_mutation("Source", code, output)
    tracer.end_phase()

    self._dump("Output", output)
    return ConversionResult(code=output, trace_events=tracer.export())

  def run_module(self, code: str) -> ConversionResult:
    """
    Folds every declaration of a whole module.

    Args:
        code (str): Module source.

    Returns:
        ConversionResult: Folded module, or the original code with a parse error.
    """
    reset_tracer()
    tracer = get_tracer()
    self._dump("Input", code)

    tracer.start_phase("Preprocessing", "Parsing")
    try:
      module = cst.parse_module(code)
    except cst.ParserSyntaxError as e:
      tracer.log_diagnostic(f"Parse Error: {e.message}")
      tracer.end_phase()
      return ConversionResult(
        code=code,
        errors=[f"Parse Error: {e.message}"],
        success=False,
        kind=DeclarationKind.MODULE,
        trace_events=tracer.export(),
      )
    tracer.end_phase()

    tracer.start_phase("Fold", DeclarationKind.MODULE.value)
    output = fold_module(module, tracer=tracer).code
    tracer.end_phase()

    self._dump("Output", output)
    return ConversionResult(code=output, kind=DeclarationKind.MODULE, trace_events=tracer.export())

  def _parse_declaration(self, code: str, tracer: TraceLogger) -> Optional[Declaration]:
    for kind, parser in _DECLARATION_PARSERS:
      try:
        declaration = parser(code)
      except DeclarationParseError as e:
        tracer.log_inspection(kind.value, "rejected", str(e))
        continue
      tracer.log_inspection(kind.value, "accepted", _describe(declaration))
      return declaration
    return None

  def _dump(self, label: str, text: str) -> None:
    if not self.config.debug:
      return
    print_stage(label, text)


def _describe(declaration: Declaration) -> str:
  parts = ["async" if declaration.is_async else "already synchronous"]
  if isinstance(declaration, TraitMethodDeclaration) and not declaration.has_default_body:
    parts.append("signature only")
  return ", ".join(parts)

def _format_counts(counts: Dict[str, int]) -> str:
  if not counts:
    return "none"
  return ", ".join(f"{node_type} x{count}" for node_type, count in counts.items())
