import logging
import os
from typing import List, Optional

from .assembler import parse_ast
from .exceptions import ConfigurationError, assert_config
from .functions import FunctionTable
from .interpreter import Interpreter
from .transpiler import Transpiler
from .turtle import Turtle, TurtleSink
from .utils import logger


class LogoOptions:
    """Specifies the options for Logo

    """
    OPTIONS_DOC = """
    debug
            Log every declaration and function call, and extra warnings. Use only when debugging (default: False)
    width
            Width of the canvas handed to the default ``Turtle`` and to the transpiled ``main()`` (default: 400)
    height
            Height of the canvas (default: 400)
    call_frames
            When True, each function call gets its own variables, holding only its parameters,
            and calls must pass every parameter.

            When False (default), all calls share one flat set of variables. Binding a parameter
            overwrites the variable with the same name, and missing arguments are left as they were.
    source_path
            Override the name of the program's source, used in messages (default: taken from the file, or "<string>")
    """
    if __doc__:
        __doc__ += OPTIONS_DOC

    _defaults = {
        'debug': False,
        'width': 400,
        'height': 400,
        'call_frames': False,
        'source_path': None,
    }

    def __init__(self, options_dict):
        o = dict(options_dict)

        options = {}
        for name, default in self._defaults.items():
            if name in o:
                value = o.pop(name)
                if isinstance(default, bool):
                    value = bool(value)
            else:
                value = default

            options[name] = value

        self.__dict__['options'] = options

        for name in ('width', 'height'):
            value = options[name]
            if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
                raise ConfigurationError("%s must be a positive number, got %r" % (name, value))

        if o:
            raise ConfigurationError("Unknown options: %s" % o.keys())

    def __getattr__(self, name):
        try:
            return self.options[name]
        except KeyError as e:
            raise AttributeError(e)

    def __setattr__(self, name, value):
        assert_config(name, self.options.keys(), "%r isn't a valid option. Expected one of: %s")
        self.options[name] = value


class Logo:
    """Main interface for the library.

    Parses the program as soon as it's created, and raises ``ParseError`` if it's malformed.

    Parameters:
        program: a string, a list of lines, or a file-like object
        options: a dictionary controlling how the program is run (see ``LogoOptions``)

    Example:
        >>> Logo('PENDOWN\\nFORWARD "50').run().segments
        [Segment(x1=200.0, y1=200.0, x2=200.0, y2=150.0, color=7)]
    """

    source_path: str
    lines: List[str]
    options: LogoOptions
    functions: FunctionTable

    def __init__(self, program, **options):
        self.options = LogoOptions(options)

        if self.options.debug:
            logger.setLevel(logging.DEBUG)

        # Some, but not all file-like objects have a 'name' attribute
        if self.options.source_path is None:
            try:
                self.source_path = program.name
            except AttributeError:
                self.source_path = '<string>'
        else:
            self.source_path = self.options.source_path

        # Drain file-like objects to get their contents
        try:
            read = program.read
        except AttributeError:
            pass
        else:
            program = read()

        if isinstance(program, str):
            self.lines = program.splitlines()
        else:
            self.lines = [line.rstrip("\r\n") for line in program]

        self.functions = parse_ast(self.lines)
        logger.debug("Parsed %s: %d functions", self.source_path, len(self.functions) - 1)

    __doc__ += "\n\n" + LogoOptions.OPTIONS_DOC

    def __repr__(self):
        return 'Logo(open(%r), call_frames=%r)' % (self.source_path, self.options.call_frames)

    def run(self, turtle: Optional[TurtleSink] = None) -> TurtleSink:
        """Runs the program, and returns the turtle it drew with.

        If no turtle is given, a new ``Turtle`` of the configured size is used.
        Raises ``EvaluationError`` if the program fails.
        """
        if turtle is None:
            turtle = Turtle(self.options.width, self.options.height)
        interpreter = Interpreter(self.functions, self.lines, turtle, call_frames=self.options.call_frames)
        return interpreter.run()

    def transpile(self) -> str:
        """Returns the program as the source of a standalone Python module.

        Raises ``TranspileError`` if it can't be translated.
        """
        return Transpiler(self.functions, self.lines).transpile(self.options.width, self.options.height)

    @classmethod
    def open(cls, program_filename: str, rel_to: Optional[str] = None, **options) -> 'Logo':
        """Create an instance of Logo with the program given by its filename

        If ``rel_to`` is provided, the function will find the program filename in relation to it.

        Example:

            >>> Logo.open("square.lg", rel_to=__file__, call_frames=True)
            Logo(...)

        """
        if rel_to:
            basepath = os.path.dirname(rel_to)
            program_filename = os.path.join(basepath, program_filename)
        with open(program_filename, encoding='utf8') as f:
            return cls(f, **options)
