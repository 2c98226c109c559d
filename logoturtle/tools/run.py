import sys

from logoturtle import LogoDiagnostic
from logoturtle.tools import base_argparser, build_logo, write_output

import argparse

argparser = argparse.ArgumentParser(prog='python -m logoturtle.tools.run', parents=[base_argparser])

argparser.add_argument('-o', '--out', default=None, help='svg file path to create (default=stdout)')


def render(logo, out=None):
    try:
        turtle = logo.run()
    except LogoDiagnostic as e:
        sys.stderr.write(str(e))
        sys.exit(1)
    except RecursionError:
        sys.stderr.write("Run Error: Function calls nested too deeply\n")
        sys.exit(1)
    write_output(turtle.to_svg(), out)


def main():
    if len(sys.argv) == 1 or '-h' in sys.argv or '--help' in sys.argv:
        print("Logo Runner - Draws a Logo program and writes the result as SVG")
        print("")
        argparser.print_help()
    else:
        args = argparser.parse_args()
        render(build_logo(args), args.out)

if __name__ == '__main__':
    main()
