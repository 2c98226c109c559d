"""
    Translates a parsed program into a standalone Python module.

    The generated module contains one function per declaration, a ``process(draw)``
    function for the top-level program, a ``Draw`` class holding only the turtle
    methods the program uses, and a ``main(width, height)`` entry point.

    Types are checked statically: every function body starts with only its own
    (numeric) parameters in scope.

    Numbers are single precision, as in the interpreter. Literals that a double
    can't hold exactly, arithmetic results, ``ADDASSIGN`` results and
    ``XCOR``/``YCOR`` reads are rounded by the generated ``_f32`` helper.
"""
import math
from typing import Dict, List, Sequence, Set, Tuple

from .enums import ErrorKind
from .exceptions import TranspileError, make_error
from .functions import FunctionTable, FunctionType, MAIN
from .tree import Node, Expr, Stmt, Float, Span
from .utils import logger, format_float

_Code = Tuple[str, bool]    # (python source, is_boolean)

INDENT = '    '

HEADER = '''\
"""Generated by logoturtle. Do not edit."""
import math
import struct


def _f32(value):
    if math.isnan(value) or math.isinf(value):
        return value
    try:
        return struct.unpack('f', struct.pack('f', value))[0]
    except OverflowError:
        return math.copysign(math.inf, value)
'''

_DRAW_TEMPLATES = {
    '__init__': '''\
    def __init__(self, width, height):
        self.width = width
        self.height = height
        self._x = width / 2
        self._y = height / 2
        self._direction = 0
        self._pen_down = False
        self._color = 7
        self.segments = []
        self.history = []
''',
    'pen_up': '''\
    def pen_up(self):
        self._pen_down = False
        self.history.append((self._x, self._y, self._pen_down))
''',
    'pen_down': '''\
    def pen_down(self):
        self._pen_down = True
        self.history.append((self._x, self._y, self._pen_down))
''',
    'pen_move': '''\
    def pen_move(self, offset, distance):
        direction = self._direction + offset
        if distance < 0:
            direction += 180
            distance = -distance
        rad = math.radians(direction)
        x = self._x + distance * math.sin(rad)
        y = self._y - distance * math.cos(rad)
        if self._pen_down:
            self.segments.append((self._x, self._y, x, y, self._color))
        self._x, self._y = x, y
        self.history.append((self._x, self._y, self._pen_down))
        return x, y
''',
    'set_pen_color': '''\
    def set_pen_color(self, index):
        if index != int(index) or not 0 <= index <= 15:
            raise ValueError("Color index must be an integer from 0 to 15, got %r" % index)
        self._color = int(index)
''',
    'turn': '''\
    def turn(self, degrees):
        if degrees != int(degrees):
            raise ValueError("Expected an integer angle, got %r" % degrees)
        self._direction += int(degrees)
''',
    'set_heading': '''\
    def set_heading(self, degrees):
        if degrees != int(degrees):
            raise ValueError("Expected an integer angle, got %r" % degrees)
        self._direction = int(degrees)
''',
    'set_x': '''\
    def set_x(self, value):
        self._x = value
        self.history.append((self._x, self._y, self._pen_down))
''',
    'set_y': '''\
    def set_y(self, value):
        self._y = value
        self.history.append((self._x, self._y, self._pen_down))
''',
    'x': '''\
    def x(self):
        return self._x
''',
    'y': '''\
    def y(self):
        return self._y
''',
    'direction': '''\
    def direction(self):
        return self._direction
''',
    'color': '''\
    def color(self):
        return self._color
''',
}

FOOTER = '''\
def main(width=%(width)r, height=%(height)r):
    draw = Draw(width, height)
    process(draw)
    return draw


if __name__ == '__main__':
    main()
'''

_BINARY = {
    'add': ' + ',
    'sub': ' - ',
    'mul': ' * ',
    'div': ' / ',
    'eq': ' == ',
    'ne': ' != ',
    'lt': ' < ',
    'gt': ' > ',
    'and_': ' and ',
    'or_': ' or ',
}

_SYSTEM_READS = {
    'xcor': 'x',
    'ycor': 'y',
    'heading': 'direction',
    'color': 'color',
}


def function_name(name: str) -> str:
    return 'process' if name == MAIN else 'fn_' + name

def variable_name(name: str) -> str:
    return 'v_' + name


class Transpiler:
    """Emits Python source for a parsed program.

    ``methods`` records which ``Draw`` methods the program refers to, so only
    those are written into the generated module.
    """

    def __init__(self, functions: FunctionTable, lines: Sequence[str]) -> None:
        self.functions = functions
        self.lines = lines
        self.methods: Set[str] = set()
        self._line = 0
        self._scope: Dict[str, bool] = {}

    def _error(self, kind: ErrorKind, span: Span) -> TranspileError:
        return make_error(kind, self.lines[self._line], self._line + 1, span.start, span.length,
                          cls=TranspileError)

    def visit(self, node: Node, *args):
        return getattr(self, node.data)(node, *args)

    def transpile(self, width: float = 400, height: float = 400) -> str:
        self.methods = set()
        chunks = [HEADER]
        for name, func in self.functions.get_all().items():
            chunks.append(self.transpile_function(name, func))
        chunks.append(self._draw_class())
        chunks.append(FOOTER % {'width': width, 'height': height})
        return '\n\n'.join(chunks)

    def transpile_function(self, name: str, func: FunctionType) -> str:
        self._scope = dict.fromkeys(self.functions.get_args_by_name(name), False)
        signature = ', '.join(['draw'] + [variable_name(p) for p in func.param_names])
        body = self._block(func.body, 1)
        logger.debug("Transpiled function %r (%d lines)", name, len(body))
        return 'def %s(%s):\n%s' % (function_name(name), signature, ''.join(body))

    def _draw_class(self) -> str:
        methods = ['__init__'] + sorted(self.methods)
        return 'class Draw:\n' + '\n'.join(_DRAW_TEMPLATES[m] for m in methods)

    def _block(self, stmt_list: List[Stmt], depth: int) -> List[str]:
        out = []
        for stmt in stmt_list:
            out += self.visit(stmt, depth)
        if not any(not l.lstrip().startswith('#') for l in out):
            out.append(INDENT * depth + 'pass\n')
        return out

    def _call(self, method: str, *args: str) -> str:
        self.methods.add(method)
        return 'draw.%s(%s)' % (method, ', '.join(args))

    def _expr(self, expr: Expr, line: int) -> _Code:
        self._line = line
        return self.visit(expr)

    def _number(self, expr: Expr, line: int) -> str:
        code, is_bool = self._expr(expr, line)
        if is_bool:
            raise self._error(ErrorKind.UnexpectedBooleanType, expr.span)
        return code

    def _condition(self, expr: Expr, line: int) -> str:
        code, is_bool = self._expr(expr, line)
        if not is_bool:
            raise self._error(ErrorKind.UnexpectedNumberType, expr.span)
        return code

    # Statements

    def _statement(self, depth: int, code: str) -> List[str]:
        return [INDENT * depth + code + '\n']

    def if_block(self, stmt, depth):
        cond = self._condition(stmt.cond, stmt.line)
        return self._statement(depth, 'if %s:' % cond) + self._block(stmt.body, depth + 1)

    def while_block(self, stmt, depth):
        cond = self._condition(stmt.cond, stmt.line)
        return self._statement(depth, 'while %s:' % cond) + self._block(stmt.body, depth + 1)

    def make(self, stmt, depth):
        code, is_bool = self._expr(stmt.value, stmt.line)
        self._scope[stmt.target.name] = is_bool
        return self._statement(depth, '%s = %s' % (variable_name(stmt.target.name), code))

    def add_assign(self, stmt, depth):
        target = stmt.target
        self._line = stmt.line
        if target.name not in self._scope:
            raise self._error(ErrorKind.UnDefinedVariable, target.span)
        if self._scope[target.name]:
            raise self._error(ErrorKind.UnexpectedBooleanType, target.span)
        value = self._number(stmt.value, stmt.line)
        name = variable_name(target.name)
        return self._statement(depth, '%s = _f32(%s + %s)' % (name, name, value))

    def pen_up(self, stmt, depth):
        return self._statement(depth, self._call('pen_up'))

    def pen_down(self, stmt, depth):
        return self._statement(depth, self._call('pen_down'))

    def motion(self, stmt, depth):
        value = self._number(stmt.value, stmt.line)
        return self._statement(depth, self._call('pen_move', str(stmt.angle), value))

    def _command(self, method, stmt, depth):
        value = self._number(stmt.value, stmt.line)
        return self._statement(depth, self._call(method, value))

    def set_pen_color(self, stmt, depth):
        return self._command('set_pen_color', stmt, depth)

    def turn(self, stmt, depth):
        return self._command('turn', stmt, depth)

    def set_heading(self, stmt, depth):
        return self._command('set_heading', stmt, depth)

    def set_x(self, stmt, depth):
        return self._command('set_x', stmt, depth)

    def set_y(self, stmt, depth):
        return self._command('set_y', stmt, depth)

    def comment(self, stmt, depth):
        return self._statement(depth, '# ' + stmt.text if stmt.text else '#')

    def func(self, stmt, depth):
        self._line = stmt.line
        name = stmt.name
        count = self.functions.get_args_value(name.name)
        if count is None:
            raise self._error(ErrorKind.UnDefinedFunction, name.span)
        if len(stmt.args) > count:
            raise self._error(ErrorKind.TooManyArguments, name.span)
        if len(stmt.args) < count:
            raise self._error(ErrorKind.MissingArguments, name.span)

        args = ['draw'] + [self._number(arg, stmt.line) for arg in stmt.args]
        return self._statement(depth, '%s(%s)' % (function_name(name.name), ', '.join(args)))

    # Expressions

    def boolean(self, expr):
        return repr(expr.value), True

    def float(self, expr):
        code = format_float(expr.value)
        if not math.isfinite(expr.value) or float(code) == expr.value:
            return code, False
        return '_f32(%s)' % code, False

    def var(self, expr):
        if expr.name not in self._scope:
            raise self._error(ErrorKind.UnDefinedVariable, expr.span)
        return variable_name(expr.name), self._scope[expr.name]

    def _arithmetic(self, expr):
        left, left_bool = self.visit(expr.left)
        right, right_bool = self.visit(expr.right)
        if left_bool:
            raise self._error(ErrorKind.UnexpectedBooleanType, expr.left.span)
        if right_bool:
            raise self._error(ErrorKind.UnexpectedBooleanType, expr.right.span)
        if expr.data == 'div' and isinstance(expr.right, Float) and expr.right.value == 0:
            raise self._error(ErrorKind.DivideByZero, expr.span)
        return '_f32(%s%s%s)' % (left, _BINARY[expr.data], right), False

    add = sub = mul = div = _arithmetic

    def _equality(self, expr):
        left, left_bool = self.visit(expr.left)
        right, right_bool = self.visit(expr.right)
        if left_bool != right_bool:
            raise self._error(ErrorKind.UnmatchedExprType, expr.span)
        return '(%s%s%s)' % (left, _BINARY[expr.data], right), True

    eq = ne = _equality

    def _compare(self, expr):
        left, left_bool = self.visit(expr.left)
        right, right_bool = self.visit(expr.right)
        if left_bool:
            raise self._error(ErrorKind.UnexpectedBooleanType, expr.left.span)
        if right_bool:
            raise self._error(ErrorKind.UnexpectedBooleanType, expr.right.span)
        return '(%s%s%s)' % (left, _BINARY[expr.data], right), True

    lt = gt = _compare

    def _logical(self, expr):
        left, left_bool = self.visit(expr.left)
        right, right_bool = self.visit(expr.right)
        if not left_bool:
            raise self._error(ErrorKind.UnexpectedNumberType, expr.left.span)
        if not right_bool:
            raise self._error(ErrorKind.UnexpectedNumberType, expr.right.span)
        return '(%s%s%s)' % (left, _BINARY[expr.data], right), True

    and_ = or_ = _logical

    def _system_read(self, expr):
        return self._call(_SYSTEM_READS[expr.data]), False

    heading = color = _system_read

    def _position_read(self, expr):
        return '_f32(%s)' % self._call(_SYSTEM_READS[expr.data]), False

    xcor = ycor = _position_read
