"""
Error handling for the ARITH interpreter
Typed errors raised by every stage plus readable error reports
"""

from typing import List, Optional, Dict
from pyparsing import col, line, lineno


# ============================================================================
# EXCEPTIONS
# ============================================================================

class ArithError(Exception):
    """Base class for every error an ARITH run can report"""
    kind = "Error"

    def __init__(self, message: str, span=None):
        self.message = message
        self.span = span
        self.output: List[str] = []  # lines printed before the failure
        super().__init__(self._format_error())

    def _format_error(self) -> str:
        if self.span:
            return f"{self.kind} error at {self.span}: {self.message}"
        return f"{self.kind} error: {self.message}"


class ArithLexError(ArithError):
    """A character that cannot start any token"""
    kind = "Lex"


class ArithParseError(ArithError):
    """Unexpected token or missing terminator"""
    kind = "Parse"


class ArithRuntimeError(ArithError):
    """Failure while evaluating a program"""
    kind = "Runtime"

    def __init__(self, message: str, span=None, env_snapshot: Optional[Dict[str, float]] = None):
        self.env_snapshot = env_snapshot or {}
        super().__init__(message, span)


# ============================================================================
# ERROR REPORTS (Immutable Dictionaries)
# ============================================================================

def get_context_line(source_text: str, location: int) -> str:
    """Return the source line containing location with a caret under it"""
    if not source_text:
        return ""
    location = min(location, len(source_text))
    column = col(location, source_text)
    return f"  {line(location, source_text)}\n  {' ' * (column - 1)}^"


def make_error_report(error: ArithError, source_text: str) -> Dict:
    """Create an immutable error report for an ARITH error"""
    span = error.span
    if span is not None:
        location = span.offset
        line_num = lineno(location, source_text)
        column = col(location, source_text)
        context = get_context_line(source_text, location)
    else:
        location, line_num, column, context = None, None, None, None

    return {
        'kind': error.kind,
        'message': error.message,
        'filename': span.filename if span is not None else None,
        'location': location,
        'line': line_num,
        'column': column,
        'context': context,
    }


def format_error_report(report: Dict) -> str:
    """Format an error report as a string"""
    if report['line'] is not None:
        error_msg = f"{report['kind']} error at {report['filename']}:{report['line']}:{report['column']}:\n"
    else:
        error_msg = f"{report['kind']} error:\n"
    error_msg += f"  {report['message']}"

    if report['context']:
        error_msg += f"\n{report['context']}"

    return error_msg


def describe_error(error: ArithError, source_text: str) -> str:
    """Format an ARITH error against the source it came from"""
    return format_error_report(make_error_report(error, source_text))
