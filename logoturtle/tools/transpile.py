import sys

from logoturtle import LogoDiagnostic
from logoturtle.tools import base_argparser, build_logo, write_output

import argparse

argparser = argparse.ArgumentParser(prog='python -m logoturtle.tools.transpile', parents=[base_argparser])

argparser.add_argument('-o', '--out', default=None, help='python file path to create (default=stdout)')


def transpile(logo, out=None):
    try:
        source = logo.transpile()
    except LogoDiagnostic as e:
        sys.stderr.write(str(e))
        sys.exit(1)
    write_output(source, out)


def main():
    if len(sys.argv) == 1 or '-h' in sys.argv or '--help' in sys.argv:
        print("Logo Transpiler - Translates a Logo program into a standalone Python module")
        print("")
        argparser.print_help()
    else:
        args = argparser.parse_args()
        transpile(build_logo(args), args.out)

if __name__ == '__main__':
    main()
