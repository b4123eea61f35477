"""Abstract syntax tree for acalc expressions.

The node set is closed: NumberLiteral, Variable, UnaryOp, BinaryOp and Assignment. Nodes are frozen dataclasses,
built bottom-up by the parser and only ever read afterwards. Operators are stored as TokenKinds; which kinds are
valid in which node is enforced by the parser.
"""

from dataclasses import dataclass

from acalc.pure.lexical import TokenKind


SYMBOLS = {
    TokenKind.PLUS: "+",
    TokenKind.MINUS: "-",
    TokenKind.STAR: "*",
    TokenKind.SLASH: "/",
}


@dataclass(frozen=True)
class NumberLiteral:
    value: int


@dataclass(frozen=True)
class Variable:
    name: str


@dataclass(frozen=True)
class UnaryOp:
    operator: TokenKind
    operand: object


@dataclass(frozen=True)
class BinaryOp:
    operator: TokenKind
    left: object
    right: object


@dataclass(frozen=True)
class Assignment:
    target: Variable
    value: object


def children(node):
    """Returns the child nodes of node, left to right."""
    if isinstance(node, UnaryOp):
        return [node.operand]
    elif isinstance(node, BinaryOp):
        return [node.left, node.right]
    elif isinstance(node, Assignment):
        return [node.target, node.value]
    return []


def detail(node):
    """The part of node that is not a child node: its value, name or operator symbol."""
    if isinstance(node, NumberLiteral):
        return str(node.value)
    elif isinstance(node, Variable):
        return node.name
    elif isinstance(node, (UnaryOp, BinaryOp)):
        return f"'{SYMBOLS[node.operator]}'"
    elif isinstance(node, Assignment):
        return ""
    raise TypeError(f"not an acalc syntax node: {node!r}")


def display(node, indents=0):
    """Recursively displays a syntax tree with readable format.

    Format:
    <Node>(<detail>, nodes=[
        <Node>(<detail>, nodes=[
            ...
            <Node>(<detail>)  # <-- if node has no children
        ])
    ])
    """
    result = f"{'    ' * indents}{type(node).__name__}({detail(node)}"
    nodes = children(node)
    if nodes:
        result += ", nodes=[" if detail(node) else "nodes=["
        for sub_node in nodes:
            result += "\n" + display(sub_node, indents + 1) + ","
        result = result[:-1] + f"\n{'    ' * indents}]"
    return result + ")"


def unparse(node):
    """Returns fully parenthesized source text equivalent to node."""
    if isinstance(node, NumberLiteral):
        return str(node.value)
    elif isinstance(node, Variable):
        return node.name
    elif isinstance(node, UnaryOp):
        return f"{SYMBOLS[node.operator]}{unparse(node.operand)}"
    elif isinstance(node, BinaryOp):
        return f"({unparse(node.left)} {SYMBOLS[node.operator]} {unparse(node.right)})"
    elif isinstance(node, Assignment):
        return f"{node.target.name} = {unparse(node.value)}"
    raise TypeError(f"not an acalc syntax node: {node!r}")
