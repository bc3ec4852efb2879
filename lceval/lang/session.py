"""Session control for lceval. Reads programs either from a file (one per line) or from the command line, reduces them
and collects the results.
"""

from lceval.grammar.pure import parse, tokenize, unparse, untokenize
from lceval.lang.error import GenericException
from lceval.pure.lexical import NormalOrderReducer


class Session:
    """Governs a lceval session: a queue of parsed programs waiting to be reduced and the results of those that were."""
    SH_FILE = "<in>"  # command-line interpreter filename
    COMMENT = ";;"

    def __init__(self, error_handler, path, cmd_line, max_steps=NormalOrderReducer.MAX_STEPS):
        self.error_handler = error_handler
        self.error_handler.register_file(path)

        self.path = path            # used for error messages
        self.cmd_line = cmd_line    # whether or not in command-line mode
        self.max_steps = max_steps

        self.to_exec = {}  # dict of line num: (program, NormalOrderReducer) to execute
        self.results = []  # normal forms of executed programs, as text

        if self.cmd_line:
            self.error_handler.fatal = False

        if path != Session.SH_FILE:
            try:
                with open(path, "r", encoding="utf-8") as file:
                    lines = file.readlines()
            except OSError:
                raise GenericException("'{}' could not be opened", path, diagnosis=False)

            add_to_prev = False
            program = ""
            for line_num, line in enumerate(lines):
                line, add_to_prev = Session.preprocess_line(program + line if add_to_prev else line)
                if line and not add_to_prev:
                    self.add(line, line_num + 1)
                program = line

            if add_to_prev:
                self.add(program, len(lines))  # let the parser report the unclosed parenthesis

        elif not cmd_line:
            raise GenericException("'<in>' is a reserved filename")

    @staticmethod
    def preprocess_line(line):
        """Strips comments and surrounding whitespace from line. Returns the updated line and whether or not the next line
        should be appended to it (a line continues while it has unclosed parentheses).
        """
        if Session.COMMENT in line:
            line = line[:line.index(Session.COMMENT)]

        line = line.strip()
        return line, line.count("(") > line.count(")")

    def add(self, program, line_num):
        """Parses program and queues it for execution. Reduction is delayed until run is called."""
        self.error_handler.register_line(self.path, program, line_num)  # in case error is raised

        tree = parse(tokenize(program))
        self.to_exec[line_num] = (program, NormalOrderReducer(tree, self.max_steps))

        self.error_handler.remove_line(self.path)  # error was not raised

    def run(self):
        """Runs this session's queued programs by beta-reducing them. Warns about programs that were cut off by the step
        bound before reaching a normal form.
        """
        for line_num, (program, reducer) in list(self.to_exec.items()):
            self.error_handler.register_line(self.path, program, line_num)

            try:
                reducer.beta_reduce(self.error_handler)
            finally:
                del self.to_exec[line_num]

            if not reducer.reduced:
                msg = "'{}' did not reach beta-normal form within " + f"{reducer.max_steps} steps"
                self.error_handler.warn(msg, program)

            self.results.append(untokenize(unparse(reducer.tree)))
            self.error_handler.remove_line(self.path)

    def pop(self):
        """Removes and returns the oldest result."""
        return self.results.pop(0)
