from unittest import TestCase, main

from logoturtle import Logo, TranspileError, ErrorKind
from logoturtle.assembler import parse_ast
from logoturtle.transpiler import Transpiler, function_name, variable_name


def load(source):
    namespace = {'__name__': 'logo_program'}
    exec(compile(source, '<transpiled>', 'exec'), namespace)
    return namespace


PROGRAMS = {
    'square': '''\
PENDOWN
SETPENCOLOR "4
MAKE "i "0
WHILE LT :i "4 [
  FORWARD "25
  TURN "90
  ADDASSIGN "i "1
]
''',
    'spiral': '''\
TO spiral "n "step
  IF GT :n "0 [
    FORWARD :n
    RIGHT "5
    TURN "-30
    spiral - :n :step :step
  ]
END
// start
PENDOWN
SETHEADING "45
spiral "40 "10
PENUP
SETX + XCOR "3
SETY / YCOR "2
''',
    'logic': '''\
MAKE "flag AND EQ "1 "1 OR "FALSE EQ HEADING "0
IF :flag [
  PENDOWN
  BACK * "2 "7
]
IF EQ :flag "FALSE [
  LEFT "100
]
MAKE "c COLOR
SETPENCOLOR - :c "1
LEFT "3
''',
    'fractions': '''\
PENDOWN
MAKE "x "0
WHILE LT :x "1 [
  FORWARD "1.5
  ADDASSIGN "x "0.1
]
MAKE "third / "1 "3
SETX * XCOR :third
FORWARD - :third "0.2
''',
}


class TestTranspiler(TestCase):

    def transpile(self, program, **options):
        return Logo(program, **options).transpile()

    def assertTranspileError(self, program, kind, line=None, span=None):
        with self.assertRaises(TranspileError) as cm:
            self.transpile(program)
        self.assertEqual(cm.exception.kind, kind)
        if line is not None:
            self.assertEqual(cm.exception.line, line)
        if span is not None:
            self.assertEqual(cm.exception.span, span)
        return cm.exception

    def test_names(self):
        self.assertEqual(function_name(''), 'process')
        self.assertEqual(function_name('square'), 'fn_square')
        self.assertEqual(variable_name('len'), 'v_len')

    def test_output(self):
        source = self.transpile('PENDOWN\nFORWARD "50')
        self.assertIn('def process(draw):\n    draw.pen_down()\n    draw.pen_move(0, 50.0)\n', source)
        self.assertIn('class Draw:', source)
        self.assertIn('def main(width=400, height=400):', source)

    def test_single_precision(self):
        source = self.transpile('MAKE "x "0.1\nADDASSIGN "x "0.5\nSETX + XCOR "2')
        self.assertIn('    v_x = _f32(0.1)\n', source)
        self.assertIn('    v_x = _f32(v_x + 0.5)\n', source)
        self.assertIn('    draw.set_x(_f32(_f32(draw.x()) + 2.0))\n', source)

        logo = Logo('PENDOWN\nFORWARD "0.1')
        draw = load(logo.transpile())['main']()
        self.assertEqual(draw.history, logo.run().history)

    def test_only_used_methods(self):
        lines = ['PENDOWN', 'FORWARD "50']
        transpiler = Transpiler(parse_ast(lines), lines)
        source = transpiler.transpile()
        self.assertEqual(transpiler.methods, {'pen_down', 'pen_move'})
        self.assertNotIn('def set_x', source)
        self.assertNotIn('def pen_up', source)

    def test_canvas_size(self):
        source = self.transpile('PENUP', width=100, height=80)
        self.assertIn('def main(width=100, height=80):', source)
        draw = load(source)['main']()
        self.assertEqual((draw.width, draw.height), (100, 80))

    def test_empty_bodies(self):
        source = self.transpile('TO noop\n// nothing\nEND\nnoop')
        self.assertIn('def fn_noop(draw):\n    # nothing\n    pass\n', source)
        self.assertIn('    fn_noop(draw)\n', source)
        load(source)['main']()

    def test_same_drawing_as_interpreter(self):
        for name, program in PROGRAMS.items():
            logo = Logo(program)
            turtle = logo.run()
            draw = load(logo.transpile())['main']()

            self.assertEqual(len(draw.history), len(turtle.history), name)
            for expected, got in zip(turtle.history, draw.history):
                self.assertAlmostEqual(expected[0], got[0], places=3, msg=name)
                self.assertAlmostEqual(expected[1], got[1], places=3, msg=name)
                self.assertEqual(expected[2], got[2], name)

            self.assertEqual(len(draw.segments), len(turtle.segments), name)
            for expected, got in zip(turtle.segments, draw.segments):
                self.assertEqual(expected.color, got[4], name)

    def test_divide_by_literal_zero(self):
        self.assertTranspileError('FORWARD / "1 "0', ErrorKind.DivideByZero, 1, (8, 7))

    def test_call_must_match_parameters(self):
        self.assertTranspileError('TO f "a\nEND\nf', ErrorKind.MissingArguments, 3, (0, 1))
        self.assertTranspileError('TO f "a\nEND\nf "1 "2', ErrorKind.TooManyArguments, 3, (0, 1))
        self.assertTranspileError('g', ErrorKind.UnDefinedFunction, 1, (0, 1))

    def test_static_types(self):
        self.assertTranspileError('IF "1 [\n]', ErrorKind.UnexpectedNumberType, 1, (3, 2))
        self.assertTranspileError('MAKE "b "TRUE\nFORWARD :b', ErrorKind.UnexpectedBooleanType, 2, (8, 2))
        self.assertTranspileError('IF EQ "1 "TRUE [\n]', ErrorKind.UnmatchedExprType, 1, (3, 11))
        self.assertTranspileError('MAKE "b "TRUE\nADDASSIGN "b "1', ErrorKind.UnexpectedBooleanType, 2)

    def test_functions_only_see_their_parameters(self):
        e = self.assertTranspileError('MAKE "n "3\nTO f\nFORWARD :n\nEND\nf', ErrorKind.UnDefinedVariable, 3)
        self.assertTrue(str(e).startswith('Transpiler Error: Undefined variable error'))

    def test_unreached_code_is_still_checked(self):
        # The interpreter never runs this body, but every line is translated
        program = 'IF "FALSE [\nFORWARD "TRUE\n]'
        Logo(program).run()
        self.assertTranspileError(program, ErrorKind.UnexpectedBooleanType, 2)


if __name__ == '__main__':
    main()
