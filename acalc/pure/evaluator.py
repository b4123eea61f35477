"""Tree-walking evaluator for acalc syntax trees.

Evaluation reads and writes an environment, a plain dict of variable name: number. Operands of a BinaryOp are
evaluated left first, which matters because a nested Assignment is a side effect: (x = 2) * x = 4.
"""

import operator

from acalc.lang.error import DivisionByZeroError, UndefinedVariableError
from acalc.pure.lexical import Lexer, TokenKind
from acalc.pure.parser import Parser
from acalc.pure.syntax import Assignment, BinaryOp, NumberLiteral, UnaryOp, Variable


def divide(left, right):
    """Real division. Exact quotients of two ints stay ints, so 10 / 2 = 5 but 7 / 2 = 3.5."""
    if right == 0:
        raise DivisionByZeroError(left)
    if isinstance(left, int) and isinstance(right, int) and left % right == 0:
        return left // right
    return left / right


OPERATIONS = {
    TokenKind.PLUS: operator.add,
    TokenKind.MINUS: operator.sub,
    TokenKind.STAR: operator.mul,
    TokenKind.SLASH: divide,
}


class Evaluator:
    """Computes the value of syntax trees. Owns a default environment so that one Evaluator can serve a whole
    interactive session.
    """

    def __init__(self, env=None):
        self.env = env if env is not None else {}

    def evaluate(self, node, env=None):
        """Returns the numeric value of node, evaluated against env (defaults to self.env)."""
        if env is None:
            env = self.env

        if isinstance(node, NumberLiteral):
            return node.value

        elif isinstance(node, Variable):
            try:
                return env[node.name]
            except KeyError:
                raise UndefinedVariableError(node.name) from None

        elif isinstance(node, UnaryOp):
            value = self.evaluate(node.operand, env)
            return -value if node.operator is TokenKind.MINUS else value

        elif isinstance(node, BinaryOp):
            left = self.evaluate(node.left, env)
            right = self.evaluate(node.right, env)
            return OPERATIONS[node.operator](left, right)

        elif isinstance(node, Assignment):
            value = self.evaluate(node.value, env)
            env[node.target.name] = value
            return value

        raise TypeError(f"cannot evaluate {type(node).__name__}: not an acalc syntax node")

    def interpret(self, text):
        """Tokenizes, parses and evaluates text against self.env."""
        return self.evaluate(Parser(Lexer(text)).parse())
