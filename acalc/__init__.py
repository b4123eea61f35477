"""Arithmetic expression interpreter.

For reference:
- "pure": the lexer, parser and evaluator, which know nothing about files, terminals or error reporting
- "lang": sessions, the interactive shell and error reporting built on top of them

Basic program flow:
    1. Lexer: turns a line of text into tokens on demand (see acalc/pure/lexical.py)
    2. Parser: recursive descent over the tokens, producing a syntax tree (see acalc/pure/parser.py)
    3. Evaluator: walks the syntax tree to compute a number, reading and assigning variables in the session's
       environment (see acalc/pure/evaluator.py)

"""
