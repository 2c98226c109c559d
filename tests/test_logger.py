import logging
from contextlib import contextmanager
from logoturtle import Logo, logger
from unittest import TestCase, main

from io import StringIO

@contextmanager
def capture_log():
    stream = StringIO()
    orig_handler = logger.handlers[0]
    del logger.handlers[:]
    logger.addHandler(logging.StreamHandler(stream))
    yield stream
    del logger.handlers[:]
    logger.addHandler(orig_handler)

PROGRAM = '''\
TO square "len
  FORWARD :len
END
square "10
'''

class Testlogger(TestCase):

    def test_debug(self):
        logger.setLevel(logging.DEBUG)
        with capture_log() as log:
            Logo(PROGRAM, debug=True).run()

        log = log.getvalue()
        self.assertIn("declaring square(len)", log)
        self.assertIn("calling square(10.0,)", log)

    def test_non_debug(self):
        logger.setLevel(logging.WARNING)
        with capture_log() as log:
            Logo(PROGRAM, debug=False).run()
        log = log.getvalue()
        # no log message
        self.assertEqual(log, "")

    def test_empty_program_warning(self):
        logger.setLevel(logging.WARNING)
        with capture_log() as log:
            Logo('TO square\nEND\n')
        self.assertIn("no top-level statements", log.getvalue())

    def test_loglevel_higher(self):
        logger.setLevel(logging.ERROR)
        with capture_log() as log:
            Logo('TO square\nEND\n')
        log = log.getvalue()
        # no log message
        self.assertEqual(len(log), 0)


if __name__ == '__main__':
    main()
