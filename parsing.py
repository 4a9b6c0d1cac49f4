"""
ARITH Parser
Recursive descent parser pulling tokens from the scanner with one token of lookahead
"""

from typing import List, Optional

from error_handling import ArithLexError, ArithParseError
from scanner import (
    Scanner, Token, tokenize,
    NUMBER, IDENTIFIER, PLUS, MINUS, STAR, SLASH, EQUAL, SEMICOLON,
    LPAREN, RPAREN, PRINT, EOF, ERROR,
)
from syntax import (
    AssignStatement, Binary, Expression, ExpressionStatement, NumberLiteral,
    PrintStatement, Program, Statement, Variable,
)


OPERATOR_TEXT = {
    PLUS: '+',
    MINUS: '-',
    STAR: '*',
    SLASH: '/',
}

# Parenthesized groups one expression may open before parsing gives up
DEFAULT_MAX_NESTING = 200


class Parser:
    """Parser state: the scanner being pulled from plus the current lookahead token"""

    def __init__(self, scanner: Scanner, debug: bool = False, max_nesting: int = DEFAULT_MAX_NESTING):
        self.scanner = scanner
        self.debug = debug
        self.max_nesting = max_nesting
        self.depth = 0
        self.previous: Optional[Token] = None
        self.current: Token = self._pull()

    # === Token handling ===

    def _pull(self) -> Token:
        token = self.scanner.next_token()
        if token.kind == ERROR:
            raise ArithLexError(token.text, token.span)
        return token

    def advance(self) -> Token:
        """Consume the current token and pull the next one"""
        self.previous = self.current
        if self.current.kind != EOF:
            self.current = self._pull()
        return self.previous

    def check(self, kind: str) -> bool:
        return self.current.kind == kind

    def match(self, kind: str) -> bool:
        if self.check(kind):
            self.advance()
            return True
        return False

    def expect(self, kind: str, message: str) -> Token:
        if self.check(kind):
            return self.advance()
        raise ArithParseError(message, self.current.span)

    # === Statements ===

    def parse_program(self) -> Program:
        """program := statement* EOF"""
        statements: List[Statement] = []
        while not self.check(EOF):
            statements.append(self.parse_statement())

        if self.debug:
            print(f"Parsed {len(statements)} statements")
        return statements

    def parse_statement(self) -> Statement:
        if self.debug:
            print(f"Parsing statement at {self.current.span}: {self.current}")

        if self.check(PRINT):
            return self.parse_print_statement()
        # Identifier-initial statements are always assignments
        if self.check(IDENTIFIER):
            return self.parse_assignment()
        return self.parse_expression_statement()

    def parse_print_statement(self) -> PrintStatement:
        keyword = self.advance()
        expr = self.parse_expression()
        self.expect(SEMICOLON, "Expect ';' after value.")
        return PrintStatement(expr, span=keyword.span)

    def parse_assignment(self) -> AssignStatement:
        name = self.advance()
        self.expect(EQUAL, "Expect '=' after variable name.")
        expr = self.parse_expression()
        self.expect(SEMICOLON, "Expect ';' after assignment.")
        return AssignStatement(name.text, expr, span=name.span)

    def parse_expression_statement(self) -> ExpressionStatement:
        start = self.current.span
        expr = self.parse_expression()
        self.expect(SEMICOLON, "Expect ';' after expression.")
        return ExpressionStatement(expr, span=start)

    # === Expressions ===

    def parse_expression(self) -> Expression:
        """expression := term (("+" | "-") term)*"""
        expr = self.parse_term()
        while self.check(PLUS) or self.check(MINUS):
            operator = self.advance()
            right = self.parse_term()
            expr = Binary(expr, OPERATOR_TEXT[operator.kind], right, span=operator.span)
        return expr

    def parse_term(self) -> Expression:
        """term := factor (("*" | "/") factor)*"""
        expr = self.parse_factor()
        while self.check(STAR) or self.check(SLASH):
            operator = self.advance()
            right = self.parse_factor()
            expr = Binary(expr, OPERATOR_TEXT[operator.kind], right, span=operator.span)
        return expr

    def parse_factor(self) -> Expression:
        """factor := NUMBER | IDENTIFIER | "(" expression ")" """
        if self.check(NUMBER):
            token = self.advance()
            return NumberLiteral(float(token.text), span=token.span)

        if self.check(IDENTIFIER):
            token = self.advance()
            return Variable(token.text, span=token.span)

        if self.match(LPAREN):
            if self.depth >= self.max_nesting:
                raise ArithParseError("Too much nesting.", self.previous.span)
            self.depth += 1
            try:
                expr = self.parse_expression()
                self.expect(RPAREN, "Expect ')' after expression.")
            finally:
                self.depth -= 1
            return expr

        raise ArithParseError("Expect expression.", self.current.span)


class ArithParser:
    """Main ARITH parser combining scanner and grammar"""

    def __init__(self, debug: bool = False, max_nesting: int = DEFAULT_MAX_NESTING):
        self.debug = debug
        self.max_nesting = max_nesting

    def parse_string(self, text: str, filename: str = "<input>") -> Program:
        """Parse ARITH source code from string"""
        return Parser(Scanner(text, filename), self.debug, self.max_nesting).parse_program()

    def tokenize(self, text: str, filename: str = "<input>") -> List[Token]:
        """Tokenize ARITH source code"""
        return list(tokenize(text, filename))


def parse_program(source: str, filename: str = "<input>", debug: bool = False,
                  max_nesting: int = DEFAULT_MAX_NESTING) -> Program:
    """Parse a whole source buffer into its statement list"""
    return Parser(Scanner(source, filename), debug, max_nesting).parse_program()


# Factory functions for creating parsers
def create_parser(debug: bool = False, max_nesting: int = DEFAULT_MAX_NESTING) -> ArithParser:
    """Create an ARITH parser"""
    return ArithParser(debug=debug, max_nesting=max_nesting)


def create_debug_parser() -> ArithParser:
    """Create an ARITH parser with debug enabled"""
    return ArithParser(debug=True)
