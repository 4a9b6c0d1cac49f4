"""
ARITH runtime environment
One flat, mutable namespace of variable bindings with a capacity limit
"""

from typing import Dict, Optional

from error_handling import ArithRuntimeError


DEFAULT_MAX_VARIABLES = 64


class Environment:
  """Mapping from variable name to its current value"""

  def __init__(self, max_variables: int = DEFAULT_MAX_VARIABLES):
    if max_variables < 1:
      raise ValueError(f"max_variables must be at least 1, got {max_variables}")
    self.max_variables = max_variables
    self.bindings: Dict[str, float] = {}

  def get(self, name: str) -> Optional[float]:
    """Look up a value; None when the name was never assigned"""
    return self.bindings.get(name)

  def set(self, name: str, value: float) -> None:
    """Bind name to value, creating the binding if it is new"""
    if name not in self.bindings and len(self.bindings) >= self.max_variables:
      raise ArithRuntimeError(
          f"Too many variables (limit {self.max_variables}).",
          env_snapshot=self.snapshot())
    self.bindings[name] = value

  def snapshot(self) -> Dict[str, float]:
    return dict(self.bindings)

  def __contains__(self, name: str) -> bool:
    return name in self.bindings

  def __len__(self) -> int:
    return len(self.bindings)
