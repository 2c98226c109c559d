import sys
from argparse import ArgumentParser, FileType
from logoturtle import Logo, LogoDiagnostic

base_argparser = ArgumentParser(add_help=False, epilog='Look at the logoturtle documentation for more info on the options')


flags = [
    ('d', 'debug'),
    'call_frames',
]

options = ['width', 'height']

base_argparser.add_argument('--width', type=float, default=400, help='canvas width (default=400)')
base_argparser.add_argument('--height', type=float, default=400, help='canvas height (default=400)')
base_argparser.add_argument('program_file', type=FileType('r', encoding='utf-8'), help='A Logo program')

for f in flags:
    if isinstance(f, tuple):
        options.append(f[1])
        base_argparser.add_argument('-' + f[0], '--' + f[1], action='store_true')
    else:
        options.append(f)
        base_argparser.add_argument('--' + f.replace('_', '-'), dest=f, action='store_true')


def build_logo(namespace):
    "Parses the program named on the command line. Prints the diagnostic and exits with status 1 on failure."
    kwargs = {n: getattr(namespace, n) for n in options}
    try:
        return Logo(namespace.program_file, **kwargs)
    except LogoDiagnostic as e:
        sys.stderr.write(str(e))
        sys.exit(1)


def write_output(text, path=None):
    "Writes the result to `path`, or to stdout. The file is only opened once there's something to write."
    if path is None:
        sys.stdout.write(text)
    else:
        with open(path, 'w', encoding='utf-8') as f:
            f.write(text)
