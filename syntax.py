"""
ARITH syntax tree
Immutable expression and statement nodes produced by the parser
"""

from typing import List, Optional, Union
from dataclasses import dataclass, field

from scanner import SourceSpan


# ============================================================================
# EXPRESSIONS
# ============================================================================

@dataclass(frozen=True)
class NumberLiteral:
    value: float
    span: Optional[SourceSpan] = field(default=None, compare=False, repr=False)


@dataclass(frozen=True)
class Variable:
    name: str
    span: Optional[SourceSpan] = field(default=None, compare=False, repr=False)


@dataclass(frozen=True)
class Binary:
    left: 'Expression'
    operator: str
    right: 'Expression'
    span: Optional[SourceSpan] = field(default=None, compare=False, repr=False)


Expression = Union[NumberLiteral, Variable, Binary]


# ============================================================================
# STATEMENTS
# ============================================================================

@dataclass(frozen=True)
class ExpressionStatement:
    """Evaluated for side effects only; the value is discarded"""
    expr: Expression
    span: Optional[SourceSpan] = field(default=None, compare=False, repr=False)


@dataclass(frozen=True)
class PrintStatement:
    expr: Expression
    span: Optional[SourceSpan] = field(default=None, compare=False, repr=False)


@dataclass(frozen=True)
class AssignStatement:
    name: str
    expr: Expression
    span: Optional[SourceSpan] = field(default=None, compare=False, repr=False)


Statement = Union[ExpressionStatement, PrintStatement, AssignStatement]
Program = List[Statement]


def pretty_print_ast(node, indent: int = 0) -> str:
    """Pretty print an AST node for debugging"""
    lines = []
    pending = [(node, indent)]

    while pending:
        node, indent = pending.pop()
        pad = "  " * indent
        node_type = type(node).__name__

        if isinstance(node, NumberLiteral):
            lines.append(f"{pad}{node_type}({node.value!r})\n")
        elif isinstance(node, Variable):
            lines.append(f"{pad}{node_type}({node.name!r})\n")
        elif isinstance(node, Binary):
            lines.append(f"{pad}{node_type}({node.operator!r})\n")
            # Right pushed first so the left operand prints first
            pending.append((node.right, indent + 1))
            pending.append((node.left, indent + 1))
        elif isinstance(node, AssignStatement):
            lines.append(f"{pad}{node_type}({node.name!r})\n")
            pending.append((node.expr, indent + 1))
        else:
            lines.append(f"{pad}{node_type}\n")
            pending.append((node.expr, indent + 1))

    return "".join(lines)
