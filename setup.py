import re
from setuptools import setup

__version__ ,= re.findall('__version__: str = "(.*)"', open('logoturtle/__init__.py').read())

setup(
    name = "logoturtle",
    version = __version__,
    packages = ['logoturtle', 'logoturtle.parsers', 'logoturtle.tools'],

    requires = [],
    install_requires = [],

    extras_require = {},

    test_suite = 'tests.__main__',

    description = "a parser, interpreter and Python transpiler for a Logo turtle-graphics dialect",
    license = "MIT",
    keywords = "Logo turtle graphics parser interpreter transpiler",
    long_description='''
logoturtle reads programs written in a small Logo dialect, and either draws them
with an in-memory turtle (rendered as SVG) or translates them into a standalone
Python module.

Main Features:
 - Prefix-notation expressions, with numbers, booleans, variables and turtle queries
 - IF / WHILE blocks and TO ... END procedures
 - Every error reported with its line, column and an underlined excerpt
 - Structural problems found before anything is evaluated
 - Command-line tools to render SVG and to transpile to Python
''',

    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Education",
        "Programming Language :: Python :: 3",
        "Topic :: Software Development :: Interpreters",
        "Topic :: Software Development :: Compilers",
        "License :: OSI Approved :: MIT License",
    ],
)
