"""
ARITH Interpreter
Tree-walking evaluation of parsed statements against a mutable environment
"""

from typing import Callable, List, Tuple
import math
import operator

from environment import DEFAULT_MAX_VARIABLES, Environment
from error_handling import ArithError, ArithRuntimeError
from parsing import parse_program
from syntax import (
    AssignStatement, Binary, Expression, ExpressionStatement, NumberLiteral,
    PrintStatement, Program, Statement, Variable,
)


# ============================================================================
# ARITHMETIC
# ============================================================================

def ieee_truediv(x: float, y: float) -> float:
  """Floating-point division returning inf/nan instead of raising on zero"""
  try:
    return x / y
  except ZeroDivisionError:
    if x == 0 or math.isnan(x):
      return math.nan
    return math.copysign(math.inf, x) * math.copysign(1.0, y)


BUILTIN_OPERATORS = {
    '+': operator.add,
    '-': operator.sub,
    '*': operator.mul,
    '/': ieee_truediv,
}


def format_number(value: float) -> str:
  """Format a value the way print shows it: integers without a fraction, others shortest round-trip"""
  if math.isnan(value):
    return "nan"
  if math.isinf(value):
    return "inf" if value > 0 else "-inf"
  if value.is_integer() and abs(value) < 1e16:
    if value == 0 and math.copysign(1.0, value) < 0:
      return "-0"
    return str(int(value))
  return repr(value)


# ============================================================================
# EXPRESSION EVALUATION
# ============================================================================

def eval_expression(expr: Expression, env: Environment, debug: bool = False) -> float:
  """Evaluate an expression tree to a float"""
  if debug:
    print(f"Evaluating: {type(expr).__name__}")

  if isinstance(expr, NumberLiteral):
    return eval_number(expr, env, debug)
  elif isinstance(expr, Variable):
    return eval_variable(expr, env, debug)
  elif isinstance(expr, Binary):
    return eval_binary(expr, env, debug)
  raise TypeError(f"Unknown expression node: {expr!r}")


def eval_number(expr: NumberLiteral, env: Environment, debug: bool = False) -> float:
  return expr.value


def eval_variable(expr: Variable, env: Environment, debug: bool = False) -> float:
  """Evaluate variable by looking up in environment"""
  value = env.get(expr.name)

  if value is None:
    raise ArithRuntimeError(
        f"Undefined variable '{expr.name}'.", expr.span, env.snapshot())

  return value


def eval_binary(expr: Binary, env: Environment, debug: bool = False) -> float:
  """
  Evaluate binary operation, left operand first.

  Walks the tree with an explicit stack so that long operator chains
  do not consume one Python frame per operator.
  """
  values: List[float] = []
  pending: List[Tuple[Expression, bool]] = [(expr, False)]

  while pending:
    node, operands_done = pending.pop()
    if not isinstance(node, Binary):
      values.append(eval_expression(node, env, debug))
    elif operands_done:
      right = values.pop()
      left = values.pop()
      values.append(BUILTIN_OPERATORS[node.operator](left, right))
    else:
      if debug and node is not expr:
        print("Evaluating: Binary")
      pending.append((node, True))
      pending.append((node.right, False))
      pending.append((node.left, False))

  return values.pop()


# ============================================================================
# STATEMENT EXECUTION
# ============================================================================

def exec_statement(stmt: Statement, env: Environment, emit: Callable[[str], None], debug: bool = False) -> None:
  if debug:
    print(f"Executing: {type(stmt).__name__}")

  if isinstance(stmt, PrintStatement):
    emit(format_number(eval_expression(stmt.expr, env, debug)))
  elif isinstance(stmt, AssignStatement):
    value = eval_expression(stmt.expr, env, debug)
    try:
      env.set(stmt.name, value)
    except ArithRuntimeError as e:
      raise ArithRuntimeError(e.message, stmt.span, e.env_snapshot) from e
  elif isinstance(stmt, ExpressionStatement):
    eval_expression(stmt.expr, env, debug)
  else:
    raise TypeError(f"Unknown statement node: {stmt!r}")


def execute(program: Program, env: Environment, emit: Callable[[str], None] = print, debug: bool = False) -> None:
  """Run statements in program order; the first error stops the run"""
  for stmt in program:
    exec_statement(stmt, env, emit, debug)


# ============================================================================
# INTERPRETER
# ============================================================================

class Interpreter:
  """One program run: owns the environment the program executes against"""

  def __init__(self, debug: bool = False, max_variables: int = DEFAULT_MAX_VARIABLES):
    self.debug = debug
    self.environment = Environment(max_variables)

  def evaluate(self, expr: Expression) -> float:
    return eval_expression(expr, self.environment, self.debug)

  def execute(self, program: Program, emit: Callable[[str], None] = print) -> None:
    execute(program, self.environment, emit, self.debug)

  def run(self, source_text: str, filename: str = "<input>") -> List[str]:
    """Parse and execute source_text, returning the printed lines"""
    output: List[str] = []
    try:
      program = parse_program(source_text, filename, self.debug)
      if self.debug:
        print(f"Running {len(program)} statements")
      self.execute(program, output.append)
    except ArithError as e:
      e.output = output
      raise
    return output


def run(source_text: str, filename: str = "<input>", debug: bool = False,
        max_variables: int = DEFAULT_MAX_VARIABLES) -> List[str]:
  """Run a source buffer to completion; raises ArithError on the first failure"""
  return create_interpreter(debug, max_variables).run(source_text, filename)


# ============================================================================
# FACTORY FUNCTIONS
# ============================================================================

def create_interpreter(debug: bool = False, max_variables: int = DEFAULT_MAX_VARIABLES) -> Interpreter:
  """Factory function returning an interpreter"""
  return Interpreter(debug=debug, max_variables=max_variables)


def create_debug_interpreter(max_variables: int = DEFAULT_MAX_VARIABLES) -> Interpreter:
  """Factory function returning a debug interpreter"""
  return create_interpreter(debug=True, max_variables=max_variables)
