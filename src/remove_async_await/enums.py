"""
Enumerations for remove-async-await.

This module defines the enumerations used across the codebase for strategy
selection and declaration identification.
"""

from enum import Enum


class Strategy(str, Enum):
  """
  Folding strategy chosen explicitly by the caller.
  """

  STRUCTURAL = "structural"  # LibCST tree fold
  LITERAL = "literal"  # raw substring removal, unsafe by contract


class DeclarationKind(str, Enum):
  """
  Shape of the input that was folded.
  """

  FUNCTION = "function"
  TRAIT_METHOD = "trait_method"
  MODULE = "module"
