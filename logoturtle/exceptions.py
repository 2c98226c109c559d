from typing import Dict, Optional, Tuple, Type

from .enums import ErrorCategory, ErrorKind


class LogoError(Exception):
    pass


class ConfigurationError(LogoError, ValueError):
    pass


def assert_config(value, options, msg='Got %r, expected one of %s'):
    if value not in options:
        raise ConfigurationError(msg % (value, options))


# kind -> (message, label, help)
_TEXTS: Dict[ErrorKind, Tuple[str, str, str]] = {
    ErrorKind.UnexpectedExtraOperand: (
        "Unexpected extra operands",
        "An unexpected extra operand appears that is not needed in the expression",
        "Check the format of each command and remove redundant operand"),
    ErrorKind.InvalidNumber: (
        "Invalid number",
        "Could not convert to float",
        "Try using a valid number"),
    ErrorKind.UnexpectedExpr: (
        "Unexpected Expression",
        "Could not convert to number, variable or system variable.",
        "If it is a variable, the format is `:{ variable_name }`.\n"
        "If it is a number, the format is `\"{ number }`.\n"
        "If it is a system variable, only `XCOR`, `YCOR`, `COLOR`, `HEADING` are allowed."),
    ErrorKind.MissingLeftBracket: (
        "Missing left bracket",
        "Expected `[`, found `...`",
        "Add a left bracket `[` to end of the `IF` or `WHILE` statement."),
    ErrorKind.MissingRightBracket: (
        "Missing right bracket",
        "Expected `]`, found `...`",
        "Add a right bracket `]` in a new line to end the `IF` or `WHILE` statement."),
    ErrorKind.MissingOperand: (
        "Missing Operand",
        "Expected Operand, found `...`",
        "Check the format of each command and add the missing operand."),
    ErrorKind.UnexpectedAssign: (
        "Unexpected Assignment format",
        "Unsatisfied the requirements of the assignment format",
        "Check the format of the variable name, the format is `\"{ variable_name }`."),
    ErrorKind.MissingEnd: (
        "Missing END",
        "Expected `END`, found `...`",
        "Add `END` to end the function declaration."),
    ErrorKind.MissingName: (
        "Missing Function Name",
        "Missing the name of the function",
        "Add a valid function name to the function declaration."),
    ErrorKind.InvalidName: (
        "Invalid Name",
        "Invalid format of the function or variable name",
        "Names start with a letter or `_`, followed by letters, digits or `_`."),
    ErrorKind.MissingTo: (
        "Missing Function declaration",
        "Missing the `TO` Declaration above the `END`",
        "Add `TO` to start the function declaration."),
    ErrorKind.MissingWhileOrIf: (
        "Missing `IF` or `WHILE`",
        "Missing the `WHILE` or `IF` Condition Declaration above the `]`",
        "Add `IF` or `WHILE` to start the condition declaration."),
    ErrorKind.DeclWrongPosition: (
        "Wrong Position of Function Declaration",
        "Function declaration cannot be placed inside the `IF` or `WHILE` statement",
        "Move the function declaration outside the `IF` or `WHILE` statement."),
    ErrorKind.RepeatFunctionName: (
        "Repeat Function Name",
        "Function name already exists",
        "Change the function name to a unique name."),
    ErrorKind.UnexpectedNumberType: (
        "Unexpected `number` type in expression",
        "Expected a `boolean` expression, found a `numeric` expression.",
        "Replace with an expression that returns a boolean, choosing from "
        "`EQ`, `NE`, `GT`, `LT`, `AND`, or `OR`."),
    ErrorKind.UnexpectedBooleanType: (
        "Unexpected `boolean` type in expression",
        "Expected a `numeric` expression, found a `boolean` expression.",
        "Replace with an expression that returns a number, choosing from "
        "a number, a variable, `+`, `-`, `*`, `/`, `XCOR`, `YCOR`, `HEADING`, or `COLOR`."),
    ErrorKind.DivideByZero: (
        "Divide by zero error",
        "Cannot divide by zero.",
        "Change the divisor to a non-zero value or check the variable value."),
    ErrorKind.UnmatchedExprType: (
        "Unmatched expression type",
        "Cannot compare type `boolean` with type `number`",
        "Change the expression to match the other expression type."),
    ErrorKind.NonIntegerValueError: (
        "Non-integer value error",
        "Expected an integer value, found a value with a fractional part.",
        "Change the value to an integer value or check the variable value."),
    ErrorKind.UnDefinedColor: (
        "Undefined color error",
        "Color range only pick integer value from 0 to 15",
        "Change the color value to an integer value from 0 to 15."),
    ErrorKind.UnDefinedVariable: (
        "Undefined variable error",
        "Variable is not defined.",
        "Use `MAKE` to define the variable before using it."),
    ErrorKind.UnDefinedVariableValue: (
        "Undefined variable value error",
        "Variable value is not defined.",
        "This value may be defined in the arguments of `TO`, but its specific value "
        "has not been defined yet and cannot be used."),
    ErrorKind.UnDefinedFunction: (
        "Undefined function error",
        "Function is not defined.",
        "Define the `TO` function before using it."),
    ErrorKind.TooManyArguments: (
        "Too many arguments error",
        "Too many arguments.",
        "Remove the extra arguments from the function call."),
    ErrorKind.MissingArguments: (
        "Missing arguments error",
        "Missing arguments in function call.",
        "Add the missing arguments to the function call."),
}


class LogoDiagnostic(LogoError):
    """A single positioned failure, reported to the user.

    Used as a base class for the following exceptions:

    - ``ParseError``: the program text is malformed
    - ``EvaluationError``: the program failed while running against a turtle
    - ``TranspileError``: the program could not be translated to Python

    Attributes:
        kind (ErrorKind): What went wrong
        src (str): The offending line, or a two-line context for structural errors
        line (int): 1-based line number (0 when the error is at the end of input)
        span (Tuple[int, int]): ``(start, length)`` inside ``src``
        label, help (str): Fixed descriptions for ``kind``
    """
    code = "Error"

    def __init__(self, kind: ErrorKind, src: str, line: int, start: int, length: int) -> None:
        self.kind = kind
        self.src = src
        self.line = line
        self.span = (start, length)
        self.column = start + 1
        self.message, self.label, self.help = _TEXTS[kind]
        super(LogoDiagnostic, self).__init__(kind, src, line, start, length)

    def get_context(self) -> str:
        """Returns the source with the reported span underlined.

        Only the source line holding the start of the span is marked.
        """
        start, length = self.span
        out = []
        offset = 0
        marked = False
        for text in self.src.split('\n'):
            out.append(text)
            if not marked and offset <= start <= offset + len(text):
                out.append(' ' * len(text[:start - offset].expandtabs()) + '^' * max(length, 1))
                marked = True
            offset += len(text) + 1
        return '\n'.join(out) + '\n'

    def __str__(self):
        message = "%s: %s (Ln %d, Col %d)\n\n" % (self.code, self.message, self.line, self.column)
        message += self.get_context()
        message += '\n%s\nhelp: %s\n' % (self.label, self.help)
        return message


class ParseError(LogoDiagnostic):
    code = "Compile Error"


class EvaluationError(LogoDiagnostic):
    code = "Code Generation Error"


class TranspileError(LogoDiagnostic):
    code = "Transpiler Error"


_STAGES = {
    ErrorCategory.structural: ParseError,
    ErrorCategory.name: ParseError,
    ErrorCategory.syntax: ParseError,
    ErrorCategory.type: EvaluationError,
    ErrorCategory.binding: EvaluationError,
}


def make_error(kind: ErrorKind, src: str, line: int, start: int, length: int,
               cls: 'Optional[Type[LogoDiagnostic]]' = None) -> LogoDiagnostic:
    """Maps an internal ``(kind, start, length)`` triple to the exception the user sees.

    ``start`` is clamped into ``src``, so a span computed against a synthesized
    context never points outside of it.
    """
    if cls is None:
        cls = _STAGES[kind.category]
    start = min(max(start, 0), len(src))
    return cls(kind, src, line, start, length)
