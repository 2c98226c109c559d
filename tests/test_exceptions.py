from unittest import TestCase, main

from logoturtle.enums import ErrorKind, ErrorCategory
from logoturtle.exceptions import (LogoError, ConfigurationError, LogoDiagnostic, ParseError,
                                   EvaluationError, TranspileError, make_error, assert_config)


class TestDiagnostics(TestCase):

    def test_stage_from_category(self):
        self.assertIsInstance(make_error(ErrorKind.MissingEnd, 'TO f', 0, 0, 1), ParseError)
        self.assertIsInstance(make_error(ErrorKind.InvalidName, 'x', 1, 0, 1), ParseError)
        self.assertIsInstance(make_error(ErrorKind.MissingOperand, 'x', 1, 0, 1), ParseError)
        self.assertIsInstance(make_error(ErrorKind.DivideByZero, 'x', 1, 0, 1), EvaluationError)
        self.assertIsInstance(make_error(ErrorKind.UnDefinedVariable, 'x', 1, 0, 1), EvaluationError)
        e = make_error(ErrorKind.UnDefinedVariable, 'x', 1, 0, 1, cls=TranspileError)
        self.assertIsInstance(e, TranspileError)
        self.assertIsInstance(e, LogoError)

    def test_categories(self):
        self.assertEqual(ErrorKind.DeclWrongPosition.category, ErrorCategory.structural)
        self.assertEqual(ErrorKind.MissingName.category, ErrorCategory.name)
        self.assertEqual(ErrorKind.UnexpectedAssign.category, ErrorCategory.syntax)
        self.assertEqual(ErrorKind.DivideByZero.category, ErrorCategory.type)
        self.assertEqual(ErrorKind.MissingArguments.category, ErrorCategory.binding)

    def test_every_kind_is_described(self):
        for kind in ErrorKind:
            e = make_error(kind, 'x', 1, 0, 1)
            self.assertTrue(e.message and e.label and e.help, kind)

    def test_span_is_clamped(self):
        e = make_error(ErrorKind.MissingOperand, 'abc', 1, 10, 1)
        self.assertEqual(e.span, (3, 1))
        e = make_error(ErrorKind.MissingOperand, 'abc', 1, -2, 1)
        self.assertEqual(e.span, (0, 1))

    def test_context(self):
        e = make_error(ErrorKind.InvalidName, 'MAKE "1x "5', 1, 5, 3)
        self.assertEqual(e.get_context(), 'MAKE "1x "5\n     ^^^\n')
        self.assertEqual(e.column, 6)

    def test_context_on_second_line(self):
        e = make_error(ErrorKind.DeclWrongPosition, 'IF "TRUE [\nTO f', 2, 11, 4)
        self.assertEqual(e.get_context(), 'IF "TRUE [\nTO f\n^^^^\n')

    def test_empty_span_gets_a_caret(self):
        e = make_error(ErrorKind.MissingOperand, '+ "3', 1, 4, 0)
        self.assertEqual(e.get_context(), '+ "3\n    ^\n')

    def test_str(self):
        e = make_error(ErrorKind.UnDefinedColor, 'SETPENCOLOR "16', 4, 12, 3)
        s = str(e)
        self.assertTrue(s.startswith('Code Generation Error: Undefined color error (Ln 4, Col 13)\n\n'), s)
        self.assertIn('SETPENCOLOR "16\n            ^^^\n', s)
        self.assertIn('Color range only pick integer value from 0 to 15', s)
        self.assertTrue(s.endswith('help: Change the color value to an integer value from 0 to 15.\n'))

    def test_is_exception(self):
        e = make_error(ErrorKind.MissingTo, ' \nEND', 1, 0, 1)
        self.assertIsInstance(e, LogoDiagnostic)
        with self.assertRaises(ParseError):
            raise e

    def test_configuration_error(self):
        self.assertTrue(issubclass(ConfigurationError, ValueError))
        assert_config('a', ('a', 'b'))
        self.assertRaises(ConfigurationError, assert_config, 'c', ('a', 'b'))


if __name__ == '__main__':
    main()
