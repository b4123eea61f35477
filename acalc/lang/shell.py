"""Handles interactive/command-line mode for acalc. Uses cmd as backend."""

import cmd

from acalc.pure.lexical import Lexer
from acalc.pure.parser import parse
from acalc.pure.syntax import display


class Shell(cmd.Cmd):
    """Arithmetic interpreter shell."""
    intro = "Arithmetic expression interpreter :: Python backend\nType '?' or 'help' for more information."
    prompt = "> "
    secondary_prompt = ". "  # used for line continutations
    _tmp_prompt = "> "       # also used for prompt swapping in line continuations
    no_arg_commands = ("vars", "reset", "exit", "EOF")

    def __init__(self, sess, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.sess = sess

        self._tmp_line = ""
        self.line_num = 0

    def onecmd(self, line):
        """Lines that start with a command name but read as an expression (e.g. 'exit = 3') are evaluated."""
        command, arg, __ = self.parseline(line)
        if arg and (arg.startswith("=") or command in self.no_arg_commands):
            return self.default(line)
        return super().onecmd(line)

    def default(self, line):
        """Evaluates an arbitrary expression and prints its value."""
        with self.sess.error_handler:  # needed because cmd.Cmd automatically exits on Exception
            self.line_num += 1
            joined = f"{self._tmp_line} {line}" if self._tmp_line else line
            line, add_to_prev = self.sess.preprocess_line(joined, self.line_num, self._tmp_line)

            if add_to_prev:
                self._tmp_line = line
                self.prompt = self.secondary_prompt
                return

            self._tmp_line = ""
            self.prompt = self._tmp_prompt

            if not line.strip():
                return  # only a comment

            self.sess.add(line, self.line_num)
            self.sess.run()

            if self.sess.results:
                print(self.sess.pop())

    def do_vars(self, arg):
        """Lists every variable assigned in this session."""
        for name, value in self.sess.namespace.items():
            print(f"{name} = {value}")

    def do_reset(self, arg):
        """Forgets every variable assigned in this session."""
        self.sess.reset()

    def do_tokens(self, arg):
        """Shows the tokens of an expression, without evaluating it."""
        with self.sess.error_handler:
            print(" ".join(str(token) for token in Lexer(arg)))

    def do_ast(self, arg):
        """Shows the syntax tree of an expression, without evaluating it."""
        with self.sess.error_handler:
            print(display(parse(arg)))

    def do_help(self, arg):
        """Doesnt return docs, but rather a short intro."""
        print("Welcome to the acalc interpreter!\n\n"
              "Type an arithmetic expression using integers, + - * / and parentheses to \n"
              "evaluate it. Assign a value to a name with 'x = 5', then use it later on: \n"
              "'x * 2' gives 10.\n\n"
              "Commands: vars, reset, tokens EXPR, ast EXPR, exit.")

    def emptyline(self):
        """Do not repeat previous command on empty line."""
        return ""

    def do_EOF(self, arg):
        """Exits interpreter."""
        print()
        return self.do_exit(arg)

    def do_exit(self, arg):
        """Exits interpreter."""
        return True
