"""Session control for acalc. Feeds lines from a file or the command line to the lexer/parser/evaluator, and keeps
the variable environment alive between them.
"""

import logging

from acalc.lang.error import GenericException
from acalc.pure.evaluator import Evaluator
from acalc.pure.lexical import Lexer
from acalc.pure.parser import Parser
from acalc.pure.syntax import display

logger = logging.getLogger(__name__)


class Session:
    """Governs an acalc session, with control over the scope of variables."""
    SH_FILE = "<in>"  # command-line interpreter filename
    COMMENT = "#"     # rest of a line after this is ignored

    def __init__(self, error_handler, path, cmd_line, echo=False):
        self.error_handler = error_handler
        self.error_handler.register_file(path)

        self.path = path          # used for error messages
        self.cmd_line = cmd_line  # whether or not in command-line mode
        self.echo = echo          # whether or not run prints each result as soon as it is evaluated

        self.evaluator = Evaluator()
        self.to_exec = {}  # dict of line num: (expr, syntax tree) to evaluate
        self.results = []

        if self.cmd_line:
            self.error_handler.fatal = False

        if path != Session.SH_FILE:
            exprs = []
            add_to_prev = False

            try:
                with open(path, "r") as file:
                    for line_num, line in enumerate(file):
                        __, add_to_prev = self.preprocess_line(line, line_num + 1, add_to_prev, exprs)
            except OSError:
                raise GenericException(f"'{path}' could not be opened", diagnosis=False)

            for expr, line_num in exprs:
                self.add(expr, line_num)

        elif not cmd_line:
            raise GenericException(f"'{Session.SH_FILE}' is a reserved filename", diagnosis=False)

    @property
    def namespace(self):
        """The session's environment: variable name: last assigned value."""
        return self.evaluator.env

    @staticmethod
    def preprocess_line(line, line_num, add_to_prev, exprs=None):
        """Preprocesses a line from a file or command-line. In command-line mode, exprs can be ignored (used to keep
        track of file's exprs), but add_to_prev will indicate whether a line continuation is necessary. Returns
        updated value of line and add_to_prev. Must be called before calling add.
        """
        if Session.COMMENT in line:
            line = line[:line.index(Session.COMMENT)]  # get rid of comments

        line = line.rstrip()
        if exprs is not None:
            if add_to_prev and exprs:
                prev, __ = exprs.pop()
                line = f"{prev} {line.strip()}"
                exprs.append((line, line_num))
            elif line.strip():
                exprs.append((line, line_num))
            else:
                return line, False  # blank lines never open a continuation

        return line, line.count("(") > line.count(")")

    def add(self, expr, line_num):
        """Parses expr and queues it for evaluation. Evaluation is delayed until run is called."""
        self.error_handler.register_line(self.path, expr, line_num)  # in case error is raised

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("line %s tokens: %s", line_num, " ".join(str(token) for token in Lexer(expr)))

        tree = Parser(Lexer(expr)).parse()
        logger.debug("line %s tree:\n%s", line_num, display(tree))

        self.to_exec[line_num] = (expr, tree)
        self.error_handler.remove_line(self.path)  # error was not raised

    def run(self):
        """Evaluates this session's queued expressions in order, appending their values to self.results (and printing
        them if self.echo). Will raise any errors that are encountered; results of earlier expressions are kept.
        """
        for line_num, (expr, tree) in list(self.to_exec.items()):
            self.error_handler.register_line(self.path, expr, line_num)

            try:
                result = self.evaluator.evaluate(tree)
            finally:
                del self.to_exec[line_num]

            logger.debug("line %s result: %r", line_num, result)
            self.results.append(result)
            if self.echo:
                print(result)

            self.error_handler.remove_line(self.path)

    def pop(self):
        """Removes and returns the most recent result."""
        return self.results.pop()

    def reset(self):
        """Forgets every variable assigned so far."""
        self.namespace.clear()
