import math
import sys
from unittest import TestCase, main

from logoturtle import Logo, Turtle, EvaluationError, ErrorKind
from logoturtle.assembler import parse_ast
from logoturtle.interpreter import Interpreter, Environment, UNBOUND
from logoturtle.utils import to_f32


def run(program, **options):
    return Logo(program, **options).run()

def run_env(lines):
    interpreter = Interpreter(parse_ast(lines), lines, Turtle())
    interpreter.run()
    return interpreter.env


SQUARE = '''\
PENDOWN
MAKE "i "0
WHILE LT :i "4 [
  FORWARD "10
  TURN "90
  ADDASSIGN "i "1
]
'''

SPIRAL = '''\
TO spiral "n
  IF GT :n "0 [
    FORWARD :n
    spiral - :n "10
  ]
END
PENDOWN
spiral "30
'''


class TestEnvironment(TestCase):

    def test_declare(self):
        env = Environment(['a'])
        self.assertIn('a', env)
        self.assertIs(env['a'], UNBOUND)
        env['a'] = 1.0
        env.declare('a')
        self.assertEqual(env['a'], 1.0)
        self.assertNotIn('b', env)


class TestInterpreter(TestCase):

    def assertEvaluationError(self, program, kind, line=None, span=None, **options):
        with self.assertRaises(EvaluationError) as cm:
            run(program, **options)
        self.assertEqual(cm.exception.kind, kind)
        if line is not None:
            self.assertEqual(cm.exception.line, line)
        if span is not None:
            self.assertEqual(cm.exception.span, span)
        return cm.exception

    def test_move_with_pen_up(self):
        turtle = run('FORWARD "50')
        self.assertEqual((turtle.x(), turtle.y()), (200.0, 150.0))
        self.assertEqual(turtle.segments, [])

    def test_move_with_pen_down(self):
        turtle = run('PENDOWN\nFORWARD "50')
        self.assertEqual(turtle.segments, [(200.0, 200.0, 200.0, 150.0, 7)])

    def test_negative_distance(self):
        turtle = run('BACK "-10')
        self.assertAlmostEqual(turtle.y(), 190.0)

    def test_boolean_variable_in_condition(self):
        turtle = run('MAKE "X "TRUE\nIF :X [\nFORWARD "10\n]')
        self.assertEqual(turtle.y(), 190.0)

    def test_number_in_condition(self):
        self.assertEvaluationError('MAKE "X "5\nIF :X [\n]', ErrorKind.UnexpectedNumberType, 2, (3, 2))

    def test_boolean_as_distance(self):
        self.assertEvaluationError('FORWARD "TRUE', ErrorKind.UnexpectedBooleanType, 1, (8, 5))

    def test_divide_by_zero(self):
        e = self.assertEvaluationError('FORWARD / "1 "0', ErrorKind.DivideByZero, 1, (8, 7))
        self.assertTrue(str(e).startswith('Code Generation Error: Divide by zero error'))

    def test_arithmetic_reports_operator(self):
        self.assertEvaluationError('FORWARD + "1 "TRUE', ErrorKind.UnexpectedBooleanType, 1, (8, 10))

    def test_comparison_reports_operand(self):
        self.assertEvaluationError('IF LT "1 "TRUE [\n]', ErrorKind.UnexpectedBooleanType, 1, (9, 5))
        self.assertEvaluationError('IF AND "TRUE "1 [\n]', ErrorKind.UnexpectedNumberType, 1, (13, 2))

    def test_unmatched_types(self):
        self.assertEvaluationError('IF EQ "1 "TRUE [\n]', ErrorKind.UnmatchedExprType, 1, (3, 11))

    def test_equality(self):
        turtle = run('IF AND EQ "TRUE "TRUE NE "1 "2 [\nFORWARD "5\n]')
        self.assertEqual(turtle.y(), 195.0)

    def test_square(self):
        turtle = run(SQUARE)
        self.assertEqual(len(turtle.segments), 4)
        self.assertAlmostEqual(turtle.x(), 200.0)
        self.assertAlmostEqual(turtle.y(), 200.0)
        self.assertEqual(turtle.direction(), 360)

    def test_pen_color(self):
        self.assertEqual(run('SETPENCOLOR "3').color(), 3)
        self.assertEvaluationError('SETPENCOLOR "16', ErrorKind.UnDefinedColor, 1, (12, 3))
        self.assertEvaluationError('SETPENCOLOR "1.5', ErrorKind.NonIntegerValueError, 1, (12, 4))
        self.assertEvaluationError('TURN / "1 "3', ErrorKind.NonIntegerValueError)

    def test_system_reads(self):
        env = run_env(['SETX "10', 'TURN "90', 'SETPENCOLOR "2',
                       'MAKE "x XCOR', 'MAKE "y YCOR', 'MAKE "h HEADING', 'MAKE "c COLOR'])
        self.assertEqual(env['x'], 10.0)
        self.assertEqual(env['y'], 200.0)
        self.assertEqual(env['h'], 90.0)
        self.assertEqual(env['c'], 2.0)

    def test_single_precision(self):
        env = run_env(['MAKE "x + "0.1 "0.2'])
        self.assertEqual(env['x'], to_f32(to_f32(0.1) + to_f32(0.2)))

        big = '"100000000000000000000'
        env = run_env(['MAKE "x * %s %s' % (big, big), 'MAKE "y - "0 :x'])
        self.assertEqual(env['x'], math.inf)
        self.assertEqual(env['y'], -math.inf)

    def test_undefined_names(self):
        self.assertEvaluationError('FORWARD :nope', ErrorKind.UnDefinedVariable, 1, (8, 5))
        self.assertEvaluationError('PENDOWN\nsquare "1', ErrorKind.UnDefinedFunction, 2, (0, 6))
        self.assertEvaluationError('ADDASSIGN "x "1', ErrorKind.UnDefinedVariable, 1, (10, 2))

    def test_declared_parameter_without_value(self):
        self.assertEvaluationError('TO f "a\nFORWARD :a\nEND\nFORWARD :a', ErrorKind.UnDefinedVariableValue, 4)

    def test_too_many_arguments(self):
        self.assertEvaluationError('TO f "a\nEND\nf "1 "2', ErrorKind.TooManyArguments, 3, (0, 1))
        self.assertEvaluationError('TO f\nEND\nf "1', ErrorKind.TooManyArguments, 3, (0, 1))
        self.assertEvaluationError('TO f\nEND\nf "1', ErrorKind.TooManyArguments, 3, (0, 1), call_frames=True)

    def test_recursion(self):
        turtle = run(SPIRAL)
        self.assertEqual([round(s.y1 - s.y2) for s in turtle.segments], [30, 20, 10])

    def test_deep_recursion(self):
        program = 'TO f "n\nIF GT :n "0 [\nFORWARD "1\nf - :n "1\n]\nEND\nf "600'
        limit = sys.getrecursionlimit()
        for call_frames in (False, True):
            turtle = run(program, call_frames=call_frames)
            self.assertEqual(len(turtle.history), 600)
            self.assertEqual(turtle.y(), -400.0)
        self.assertEqual(sys.getrecursionlimit(), limit)

    def test_flat_environment(self):
        program = 'MAKE "a "5\nTO f "a\nEND\nf "1\nFORWARD :a'
        self.assertEqual(run(program).y(), 199.0)
        self.assertEqual(run('TO f "a\nEND\nf').y(), 200.0)

        turtle = run('MAKE "n "3\nTO f\nFORWARD :n\nEND\nf')
        self.assertEqual(turtle.y(), 197.0)

    def test_call_frames(self):
        program = 'MAKE "a "5\nTO f "a\nEND\nf "1\nFORWARD :a'
        self.assertEqual(run(program, call_frames=True).y(), 195.0)

        self.assertEvaluationError('TO f "a\nEND\nf', ErrorKind.MissingArguments, 3, (0, 1), call_frames=True)
        self.assertEvaluationError('MAKE "n "3\nTO f\nFORWARD :n\nEND\nf', ErrorKind.UnDefinedVariable, 3,
                                   call_frames=True)

        turtle = run(SPIRAL, call_frames=True)
        self.assertEqual(len(turtle.segments), 3)

    def test_arguments_evaluated_before_binding(self):
        program = 'TO f "a "b\nFORWARD :b\nEND\nMAKE "a "1\nMAKE "b "2\nf "7 :a'
        # :a is read before "7 is bound to it
        self.assertEqual(run(program).y(), 199.0)

    def test_custom_turtle(self):
        turtle = Turtle(100, 100)
        self.assertIs(Logo('FORWARD "10').run(turtle), turtle)
        self.assertEqual(turtle.y(), 40.0)


if __name__ == '__main__':
    main()
