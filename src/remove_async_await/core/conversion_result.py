"""
Data structures representing the output of the fold pipeline.

This module defines the `ConversionResult` Pydantic model, which encapsulates
the generated code, any errors encountered, and the execution trace logs.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from remove_async_await.enums import DeclarationKind


class ConversionResult(BaseModel):
  """
  Container for the results of a fold job.
  """

  code: str = Field(default="", description="The generated source code, or the diagnostic source.")
  errors: List[str] = Field(default_factory=list, description="List of error messages encountered.")
  success: bool = Field(
    default=True,
    description="False when the input was not a supported declaration and the diagnostic was emitted.",
  )
  kind: Optional[DeclarationKind] = Field(default=None, description="Shape the input was folded as.")
  trace_events: List[Dict[str, Any]] = Field(default_factory=list, description="Execution trace log data.")

  @property
  def has_errors(self) -> bool:
    """
    Check if the result contains any error messages.

    Returns:
        True if one or more errors are present.
    """
    return len(self.errors) > 0
