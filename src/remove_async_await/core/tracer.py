"""
Fold Trace Logger.

Records what a single fold did, in order:

- phases of the engine (parse attempts, the fold itself, module parsing),
- every node the remover rewrote, with its source before and after,
- which declaration parser accepted or rejected the input,
- the diagnostic, when one was emitted.

Events are numbered from 1 within a logger. `export` returns plain dicts, which is
what `ConversionResult.trace_events` stores.
"""

import time
from collections import Counter
from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class TraceEventType(str, Enum):
  PHASE_START = "phase_start"
  PHASE_END = "phase_end"
  AST_MUTATION = "ast_mutation"
  INSPECTION = "inspection"
  DIAGNOSTIC = "diagnostic"


@dataclass
class TraceEvent:
  id: int
  type: TraceEventType
  timestamp: float
  description: str
  parent_id: Optional[int] = None
  metadata: Dict[str, Any] = field(default_factory=dict)


class TraceLogger:
  """
  Collects the events of one fold. The engine replaces the global logger
  before every run, so events never leak between inputs.
  """

  def __init__(self) -> None:
    self._events: List[TraceEvent] = []
    self._open_phases: List[int] = []

  def _emit(
    self,
    evt_type: TraceEventType,
    description: str,
    metadata: Optional[Dict[str, Any]] = None,
    parent_id: Optional[int] = None,
  ) -> int:
    if parent_id is None and self._open_phases:
      parent_id = self._open_phases[-1]
    event = TraceEvent(
      id=len(self._events) + 1,
      type=evt_type,
      timestamp=time.time(),
      description=description,
      parent_id=parent_id,
      metadata=metadata or {},
    )
    self._events.append(event)
    return event.id

  def start_phase(self, name: str, description: str = "") -> int:
    """Opens a phase nested in the current one and returns its id."""
    phase_id = self._emit(TraceEventType.PHASE_START, name, {"detail": description})
    self._open_phases.append(phase_id)
    return phase_id

  def end_phase(self) -> None:
    """Closes the innermost open phase. Does nothing when none is open."""
    if not self._open_phases:
      return
    phase_id = self._open_phases.pop()
    self._emit(TraceEventType.PHASE_END, "End Phase", parent_id=phase_id)

  def log_mutation(self, node_type: str, before: str, after: str) -> None:
    self._emit(TraceEventType.AST_MUTATION, f"Transformed {node_type}", {"before": before, "after": after})

  def log_inspection(self, node_str: str, outcome: str, detail: str = "") -> None:
    """Records a decision that did not change the tree (e.g. a parse attempt)."""
    self._emit(TraceEventType.INSPECTION, f"Inspecting '{node_str}'", {"outcome": outcome, "detail": detail})

  def log_diagnostic(self, message: str) -> None:
    self._emit(TraceEventType.DIAGNOSTIC, message, {"level": "error"})

  def mutation_counts(self) -> Dict[str, int]:
    """
    Counts rewrites per node type.

    Returns:
        Dict[str, int]: e.g. ``{"Await": 2, "FunctionDef": 1}``, in first-seen order.
    """
    prefix = "Transformed "
    counts = Counter(e.description[len(prefix) :] for e in self._events if e.type == TraceEventType.AST_MUTATION)
    return dict(counts)

  def export(self) -> List[Dict[str, Any]]:
    return [asdict(e) for e in self._events]


_GLOBAL_TRACER = TraceLogger()


def get_tracer() -> TraceLogger:
  return _GLOBAL_TRACER


def reset_tracer() -> None:
  global _GLOBAL_TRACER
  _GLOBAL_TRACER = TraceLogger()
