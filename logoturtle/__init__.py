from .utils import logger
from .enums import ErrorKind, ErrorCategory
from .exceptions import (LogoError, ConfigurationError, LogoDiagnostic,
                         ParseError, EvaluationError, TranspileError)
from .functions import FunctionTable, FunctionType
from .turtle import Turtle, TurtleSink, Segment
from .interpreter import Interpreter
from .transpiler import Transpiler
from .assembler import parse_ast
from .logo import Logo

__version__: str = "1.0.0"
