import sys
from typing import Dict, Iterator, List, Sequence, Union

from .enums import ErrorKind
from .exceptions import EvaluationError, make_error
from .functions import FunctionTable
from .tree import Node, Expr, Stmt, Span, Var, Name
from .turtle import TurtleSink, PALETTE
from .utils import logger, to_f32, is_integral

Value = Union[float, bool]

RECURSION_LIMIT = 20000


class _Unbound:
    def __repr__(self):
        return 'UNBOUND'

UNBOUND = _Unbound()


class Environment:
    """Variables of a running program.

    A name is either missing (never declared), declared with no value yet
    (``UNBOUND``, e.g. a function parameter before the call that binds it),
    or bound to a float or a bool.
    """

    def __init__(self, names=()) -> None:
        self._map: Dict[str, Union[Value, _Unbound]] = {}
        for name in names:
            self.declare(name)

    def __repr__(self):
        return 'Environment(%r)' % self._map

    def __contains__(self, name: str) -> bool:
        return name in self._map

    def __getitem__(self, name: str) -> Union[Value, _Unbound]:
        return self._map[name]

    def __setitem__(self, name: str, value: Value) -> None:
        self._map[name] = value

    def __iter__(self) -> Iterator[str]:
        return iter(self._map)

    def declare(self, name: str) -> None:
        "Declares `name` without a value, unless it already has one"
        self._map.setdefault(name, UNBOUND)


def _is_number(value: Value) -> bool:
    return not isinstance(value, bool)


class Interpreter:
    """Runs a parsed program against a turtle.

    Statements and expressions are dispatched by their ``data`` attribute, to the
    method of the same name.

    By default every function call shares a single, flat environment: binding a
    parameter overwrites any variable with the same name. With
    ``call_frames=True``, each call gets a private environment holding only its
    parameters.

    Parameters:
        functions: The function table produced by the parser
        lines: The source lines, used for error reports
        turtle: The sink that receives drawing commands
    """

    def __init__(self, functions: FunctionTable, lines: Sequence[str], turtle: TurtleSink,
                 call_frames: bool = False) -> None:
        self.functions = functions
        self.lines = lines
        self.turtle = turtle
        self.call_frames = call_frames
        self.env = Environment()
        self._line = 0

    def run(self) -> TurtleSink:
        for name in self.functions.get_args():
            self.env.declare(name)
        # Each Logo call nests a handful of Python frames
        limit = sys.getrecursionlimit()
        sys.setrecursionlimit(max(limit, RECURSION_LIMIT))
        try:
            self.execute(self.functions.get_main())
        finally:
            sys.setrecursionlimit(limit)
        return self.turtle

    def _error(self, kind: ErrorKind, span: Span) -> EvaluationError:
        return make_error(kind, self.lines[self._line], self._line + 1, span.start, span.length,
                          cls=EvaluationError)

    def visit(self, node: Node):
        return getattr(self, node.data)(node)

    def execute(self, stmt_list: List[Stmt]) -> None:
        for stmt in stmt_list:
            self.visit(stmt)

    def evaluate(self, expr: Expr, line: int) -> Value:
        self._line = line
        return self.visit(expr)

    def _number(self, expr: Expr, line: int) -> float:
        value = self.evaluate(expr, line)
        if not _is_number(value):
            raise self._error(ErrorKind.UnexpectedBooleanType, expr.span)
        return value

    def _condition(self, expr: Expr, line: int) -> bool:
        value = self.evaluate(expr, line)
        if _is_number(value):
            raise self._error(ErrorKind.UnexpectedNumberType, expr.span)
        return value

    def _integer(self, expr: Expr, line: int) -> int:
        value = self._number(expr, line)
        if not is_integral(value):
            raise self._error(ErrorKind.NonIntegerValueError, expr.span)
        return int(value)

    # Statements

    def if_block(self, stmt):
        if self._condition(stmt.cond, stmt.line):
            self.execute(stmt.body)

    def while_block(self, stmt):
        while self._condition(stmt.cond, stmt.line):
            self.execute(stmt.body)

    def make(self, stmt):
        self.env[stmt.target.name] = self.evaluate(stmt.value, stmt.line)

    def add_assign(self, stmt):
        target = stmt.target
        self._line = stmt.line
        if target.name not in self.env:
            raise self._error(ErrorKind.UnDefinedVariable, target.span)
        current = self.env[target.name]
        if current is UNBOUND:
            raise self._error(ErrorKind.UnDefinedVariableValue, target.span)
        if not _is_number(current):
            raise self._error(ErrorKind.UnexpectedBooleanType, target.span)

        self.env[target.name] = to_f32(current + self._number(stmt.value, stmt.line))

    def pen_up(self, stmt):
        self.turtle.pen_up()

    def pen_down(self, stmt):
        self.turtle.pen_down()

    def motion(self, stmt):
        self.turtle.pen_move(stmt.angle, self._number(stmt.value, stmt.line))

    def set_pen_color(self, stmt):
        index = self._integer(stmt.value, stmt.line)
        if not 0 <= index < len(PALETTE):
            raise self._error(ErrorKind.UnDefinedColor, stmt.value.span)
        self.turtle.set_pen_color(index)

    def turn(self, stmt):
        self.turtle.turn(self._integer(stmt.value, stmt.line))

    def set_heading(self, stmt):
        self.turtle.set_heading(self._integer(stmt.value, stmt.line))

    def set_x(self, stmt):
        self.turtle.set_x(self._number(stmt.value, stmt.line))

    def set_y(self, stmt):
        self.turtle.set_y(self._number(stmt.value, stmt.line))

    def comment(self, stmt):
        pass

    def func(self, stmt):
        self._line = stmt.line
        name: Name = stmt.name
        func = self.functions.get(name.name)
        if func is None:
            raise self._error(ErrorKind.UnDefinedFunction, name.span)
        params = func.param_names
        if len(stmt.args) > len(params):
            raise self._error(ErrorKind.TooManyArguments, name.span)
        if self.call_frames and len(stmt.args) < len(params):
            raise self._error(ErrorKind.MissingArguments, name.span)

        values = [self.evaluate(arg, stmt.line) for arg in stmt.args]
        logger.debug("Line %d: calling %s%r", stmt.line + 1, name.name, tuple(values))

        if not self.call_frames:
            for param in self.functions.get_args_by_name(name.name):
                self.env.declare(param)
            for param, value in zip(params, values):
                self.env[param] = value
            self.execute(func.body)
            return

        caller_env = self.env
        self.env = Environment()
        for param, value in zip(params, values):
            self.env[param] = value
        try:
            self.execute(func.body)
        finally:
            self.env = caller_env

    # Expressions

    def boolean(self, expr):
        return expr.value

    def float(self, expr):
        return expr.value

    def var(self, expr: Var):
        if expr.name not in self.env:
            raise self._error(ErrorKind.UnDefinedVariable, expr.span)
        value = self.env[expr.name]
        if value is UNBOUND:
            raise self._error(ErrorKind.UnDefinedVariableValue, expr.span)
        return value

    def _arithmetic(self, expr, op):
        left = self.visit(expr.left)
        if not _is_number(left):
            raise self._error(ErrorKind.UnexpectedBooleanType, expr.span)
        right = self.visit(expr.right)
        if not _is_number(right):
            raise self._error(ErrorKind.UnexpectedBooleanType, expr.span)
        return op(left, right)

    def add(self, expr):
        return self._arithmetic(expr, lambda a, b: to_f32(a + b))

    def sub(self, expr):
        return self._arithmetic(expr, lambda a, b: to_f32(a - b))

    def mul(self, expr):
        return self._arithmetic(expr, lambda a, b: to_f32(a * b))

    def div(self, expr):
        def divide(a, b):
            if b == 0:
                raise self._error(ErrorKind.DivideByZero, expr.span)
            return to_f32(a / b)
        return self._arithmetic(expr, divide)

    def _equality(self, expr):
        left, right = self.visit(expr.left), self.visit(expr.right)
        if _is_number(left) != _is_number(right):
            raise self._error(ErrorKind.UnmatchedExprType, expr.span)
        return left == right

    def eq(self, expr):
        return self._equality(expr)

    def ne(self, expr):
        return not self._equality(expr)

    def _compare(self, expr, op):
        left, right = self.visit(expr.left), self.visit(expr.right)
        if not _is_number(left):
            raise self._error(ErrorKind.UnexpectedBooleanType, expr.left.span)
        if not _is_number(right):
            raise self._error(ErrorKind.UnexpectedBooleanType, expr.right.span)
        return op(left, right)

    def lt(self, expr):
        return self._compare(expr, lambda a, b: a < b)

    def gt(self, expr):
        return self._compare(expr, lambda a, b: a > b)

    def _logical(self, expr, op):
        left, right = self.visit(expr.left), self.visit(expr.right)
        if _is_number(left):
            raise self._error(ErrorKind.UnexpectedNumberType, expr.left.span)
        if _is_number(right):
            raise self._error(ErrorKind.UnexpectedNumberType, expr.right.span)
        return op(left, right)

    def and_(self, expr):
        return self._logical(expr, lambda a, b: a and b)

    def or_(self, expr):
        return self._logical(expr, lambda a, b: a or b)

    def xcor(self, expr):
        return to_f32(self.turtle.x())

    def ycor(self, expr):
        return to_f32(self.turtle.y())

    def heading(self, expr):
        return float(self.turtle.direction())

    def color(self, expr):
        return float(self.turtle.color())
