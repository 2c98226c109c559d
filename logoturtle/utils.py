import math
import re
import struct

import logging
logger: logging.Logger = logging.getLogger("logoturtle")
logger.addHandler(logging.StreamHandler())
# Set to highest level, since we have some warnings amongst the code
# By default, we should not output any log messages
logger.setLevel(logging.CRITICAL)


_NAME_RE = re.compile(r'[a-zA-Z_][a-zA-Z0-9_]*\Z')

def is_valid_name(s: str) -> bool:
    """Checks that `s` is a valid function or variable name.

    Names follow the usual identifier rule: a letter or underscore, followed by
    any number of letters, digits or underscores (ASCII only).
    """
    return _NAME_RE.match(s) is not None


_F32_MAX = 3.4028234663852886e+38

def to_f32(value: float) -> float:
    "Rounds a Python float to the nearest IEEE-754 single precision value"
    if math.isnan(value) or math.isinf(value):
        return value
    try:
        return struct.unpack('f', struct.pack('f', value))[0]
    except OverflowError:
        return math.copysign(math.inf, value)


def is_integral(value: float) -> bool:
    return math.isfinite(value) and value == int(value)


def format_float(value: float) -> str:
    """Shortest repr of a single precision value that survives a round-trip,
    e.g. 0.1 instead of 0.10000000149011612"""
    if not math.isfinite(value):
        return "float('%r')" % value
    for digits in range(1, 18):
        candidate = float('%.*g' % (digits, value))
        if to_f32(candidate) == value:
            return repr(candidate)
    return repr(value)
