"""Parsing of numeric command-line values that may carry a trailing 'x'."""

import re

_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")
_FLOAT_PREFIX = re.compile(
    r"\s*([+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|inf(?:inity)?|nan))",
    re.IGNORECASE,
)


def _split_x(s: str) -> tuple[str, bool]:
    if not s:
        raise ValueError("empty argument")
    if s[-1] in "xX":
        return s[:-1], True
    return s, False


def parse_int_x(s: str) -> tuple[int, bool]:
    """Parse an integer with an optional trailing 'x'.

    Returns the integer and whether the 'x' was present.  Like a C
    ``atoi``, only the leading integer is used and 0 results when there
    is none.
    """
    body, has_x = _split_x(s)
    match = _INT_PREFIX.match(body)
    return (int(match.group(1)) if match else 0), has_x


def parse_float_x(s: str) -> tuple[float, bool]:
    """Parse a float with an optional trailing 'x'.

    Returns the number and whether the 'x' was present.  Only the leading
    number is used and 0.0 results when there is none.
    """
    body, has_x = _split_x(s)
    match = _FLOAT_PREFIX.match(body)
    return (float(match.group(1)) if match else 0.0), has_x