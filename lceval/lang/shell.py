"""Handles interactive/command-line mode for lceval. Uses cmd as backend."""

import cmd


class Shell(cmd.Cmd):
    """Lambda calculus evaluator shell."""
    intro = "Lambda calculus evaluator :: Python backend\nType '?' or 'help' for more information."
    prompt = "> "
    secondary_prompt = ". "  # used for line continuations
    _tmp_prompt = "> "       # also used for prompt swapping in line continuations

    def __init__(self, sess, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.sess = sess

        self._tmp_line = ""
        self.line_num = 0

    def default(self, line):
        """Evaluates an arbitrary λ-term."""
        with self.sess.error_handler:  # needed because cmd.Cmd automatically exits on Exception
            self.line_num += 1
            line, add_to_prev = self.sess.preprocess_line(self._tmp_line + line)

            if add_to_prev:
                self._tmp_line = line
                self.prompt = self.secondary_prompt
                return

            self._tmp_line = ""
            self.prompt = self._tmp_prompt
            if not line:
                return

            self.sess.add(line, self.line_num)
            self.sess.run()

            while self.sess.results:
                print(self.sess.pop())

    def do_help(self, arg):
        """Doesnt return docs, but rather a short intro."""
        print("Welcome to the lceval evaluator!\n\n"
              "Type a λ-term to reduce it to beta-normal form. Terms are written without\n"
              "whitespace: a variable is one lowercase letter, an abstraction is 'λx.M' and\n"
              "an application is always parenthesized, '(M N)' written as '(MN)'.\n\n"
              "Try it out by typing '(λx.xy)'. This will apply 'λx.x' to 'y', giving 'y' as\n"
              "the result.")

    def emptyline(self):
        """Do not repeat previous command on empty line."""
        return ""

    def do_EOF(self, arg):
        """Exits evaluator."""
        print()
        return self.do_exit(arg)

    def do_exit(self, arg):
        """Exits evaluator."""
        return True
