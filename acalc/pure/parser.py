"""Recursive-descent parser for acalc expressions. Precedence is encoded by layering the grammar rules, loosest
first:

```
<expression>     ::= <assignment>
<assignment>     ::= <identifier> "=" <expression>       ; right-associative: a = b = 1
                   | <additive>
<additive>       ::= <multiplicative> (("+" | "-") <multiplicative>)*
<multiplicative> ::= <unary> (("*" | "/") <unary>)*
<unary>          ::= ("+" | "-") <unary>                 ; nests: --5 = 5
                   | <atom>
<atom>           ::= <integer> | <identifier> | "(" <expression> ")"
```

Additive and multiplicative chains are folded left-to-right, so 10 - 2 - 3 = (10 - 2) - 3. An identifier only
starts an assignment when the token right after it is "=", which is why the parser buffers one token beyond the
current one.
"""

from acalc.lang.error import InvalidSyntaxError
from acalc.pure.lexical import Lexer, TokenKind
from acalc.pure.syntax import Assignment, BinaryOp, NumberLiteral, UnaryOp, Variable


ADDITIVE = (TokenKind.PLUS, TokenKind.MINUS)
MULTIPLICATIVE = (TokenKind.STAR, TokenKind.SLASH)
UNARY = (TokenKind.PLUS, TokenKind.MINUS)


class Parser:
    """Builds one syntax tree from a Lexer's token stream."""

    def __init__(self, lexer):
        self.lexer = lexer
        self.current_token = self.lexer.next_token()
        self._peeked = None

    def error(self, token=None):
        """Raises an InvalidSyntaxError pointing at token (defaults to the current token)."""
        if token is None:
            token = self.current_token

        text = self.lexer.text
        if token.kind is TokenKind.EOF:
            start, end = len(text), len(text) + 1
            text += " "  # gives the caret something to point at
        else:
            start, end = token.pos, token.end

        raise InvalidSyntaxError("invalid syntax", text, start=start, end=end)

    def peek(self):
        """Returns the token after the current one without consuming anything."""
        if self._peeked is None:
            self._peeked = self.lexer.next_token()
        return self._peeked

    def advance(self):
        if self._peeked is not None:
            self.current_token, self._peeked = self._peeked, None
        else:
            self.current_token = self.lexer.next_token()

    def expect(self, kind):
        """Consumes and returns the current token if it is of the given kind, otherwise raises InvalidSyntaxError."""
        token = self.current_token
        if token.kind is not kind:
            self.error()
        self.advance()
        return token

    def parse(self):
        """Parses the entire token stream into a single syntax tree."""
        node = self.expression()
        if self.current_token.kind is not TokenKind.EOF:
            self.error()
        return node

    def expression(self):
        return self.assignment()

    def assignment(self):
        if self.current_token.kind is TokenKind.IDENTIFIER and self.peek().kind is TokenKind.ASSIGN:
            target = Variable(self.expect(TokenKind.IDENTIFIER).value)
            self.expect(TokenKind.ASSIGN)
            return Assignment(target, self.expression())
        return self.additive()

    def additive(self):
        node = self.multiplicative()
        while self.current_token.kind in ADDITIVE:
            operator = self.current_token.kind
            self.advance()
            node = BinaryOp(operator, node, self.multiplicative())
        return node

    def multiplicative(self):
        node = self.unary()
        while self.current_token.kind in MULTIPLICATIVE:
            operator = self.current_token.kind
            self.advance()
            node = BinaryOp(operator, node, self.unary())
        return node

    def unary(self):
        if self.current_token.kind in UNARY:
            operator = self.current_token.kind
            self.advance()
            return UnaryOp(operator, self.unary())
        return self.atom()

    def atom(self):
        token = self.current_token
        if token.kind is TokenKind.INTEGER:
            self.advance()
            return NumberLiteral(token.value)
        elif token.kind is TokenKind.IDENTIFIER:
            self.advance()
            return Variable(token.value)
        elif token.kind is TokenKind.LPAREN:
            self.advance()
            node = self.expression()
            self.expect(TokenKind.RPAREN)
            return node
        self.error()


def parse(text):
    """Tokenizes and parses text, returning the root of its syntax tree."""
    return Parser(Lexer(text)).parse()
