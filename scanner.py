"""
ARITH Scanner
Converts a source buffer into a lazy stream of classified tokens
"""

from typing import Iterator
from dataclasses import dataclass

from pyparsing import Word, alphanums, alphas, col, lineno, nums


# Token kinds
NUMBER = "NUMBER"
IDENTIFIER = "IDENTIFIER"
PLUS = "PLUS"
MINUS = "MINUS"
STAR = "STAR"
SLASH = "SLASH"
EQUAL = "EQUAL"
SEMICOLON = "SEMICOLON"
LPAREN = "LPAREN"
RPAREN = "RPAREN"
PRINT = "PRINT"
EOF = "EOF"
ERROR = "ERROR"

PUNCTUATION = {
    '+': PLUS,
    '-': MINUS,
    '*': STAR,
    '/': SLASH,
    '=': EQUAL,
    ';': SEMICOLON,
    '(': LPAREN,
    ')': RPAREN,
}

KEYWORDS = {'print': PRINT}

WHITESPACE = " \t\r\n"
IDENTIFIER_START = alphas + "_"
UNEXPECTED_CHARACTER = "Unexpected character."

# Maximal runs; whitespace is skipped by the scanner itself
NUMBER_WORD = Word(nums).leave_whitespace()
IDENTIFIER_WORD = Word(IDENTIFIER_START, alphanums + "_").leave_whitespace()


@dataclass(frozen=True)
class SourceSpan:
    """Location of a lexeme in the source buffer"""
    filename: str
    offset: int
    length: int
    line: int
    column: int

    def __str__(self) -> str:
        return f"{self.filename}:{self.line}:{self.column}"


@dataclass(frozen=True)
class Token:
    """ARITH token with source information"""
    kind: str
    text: str  # lexeme, or the diagnostic message for ERROR tokens
    span: SourceSpan

    @property
    def start(self) -> int:
        return self.span.offset

    @property
    def length(self) -> int:
        return self.span.length

    def __str__(self) -> str:
        return f"{self.kind}({self.text})"


class Scanner:
    """Single-pass scanner producing tokens on demand"""

    def __init__(self, source: str, filename: str = "<input>"):
        self.source = source
        self.filename = filename
        self.start = 0
        self.current = 0

    def next_token(self) -> Token:
        """Scan and return the next token; EOF is returned once input is exhausted"""
        self._skip_whitespace()
        self.start = self.current

        if self._is_at_end():
            return self._make_token(EOF)

        char = self.source[self.current]

        if char in nums:
            self.current = NUMBER_WORD.try_parse(self.source, self.current)
            return self._make_token(NUMBER)

        if char in IDENTIFIER_START:
            self.current = IDENTIFIER_WORD.try_parse(self.source, self.current)
            lexeme = self.source[self.start:self.current]
            return self._make_token(KEYWORDS.get(lexeme, IDENTIFIER))

        self.current += 1
        if char in PUNCTUATION:
            return self._make_token(PUNCTUATION[char])

        return self._error_token(UNEXPECTED_CHARACTER)

    def _is_at_end(self) -> bool:
        return self.current >= len(self.source)

    def _skip_whitespace(self):
        while not self._is_at_end() and self.source[self.current] in WHITESPACE:
            self.current += 1

    def _span(self) -> SourceSpan:
        return SourceSpan(
            self.filename,
            self.start,
            self.current - self.start,
            lineno(self.start, self.source),
            col(self.start, self.source),
        )

    def _make_token(self, kind: str) -> Token:
        return Token(kind, self.source[self.start:self.current], self._span())

    def _error_token(self, message: str) -> Token:
        return Token(ERROR, message, self._span())


def tokenize(source: str, filename: str = "<input>") -> Iterator[Token]:
    """Lazily yield tokens up to and including the first EOF or ERROR"""
    scanner = Scanner(source, filename)
    while True:
        token = scanner.next_token()
        yield token
        if token.kind in (EOF, ERROR):
            return


def format_token(token: Token) -> str:
    """Format a token as KIND: 'lexeme'"""
    return f"{token.kind}: '{token.text}'"
