"""
URL and shell escaping helpers.

Every user supplied value that ends up in a deep link goes through
``encode_uri_component``; every string that ends up inside a single-quoted
shell word goes through ``escape_single_quotes``. Percent-encoding always
happens first.
"""

import math
from decimal import Decimal
from typing import Union
from urllib.parse import quote

# Characters that encodeURIComponent leaves untouched on top of the
# alphanumerics and "-_.~" that urllib.parse.quote never encodes.
URI_COMPONENT_SAFE = "!*'()"

SHELL_QUOTE_ESCAPE = "'\"'\"'"

JS_EXPONENT_THRESHOLD = 10 ** 21


def encode_uri_component(value: str) -> str:
    """
    Percent-encode a value for use as a single URL query component.

    Matches the browser ``encodeURIComponent`` rules: spaces become ``%20``
    (never ``+``), reserved characters such as ``&``, ``?``, ``+``, ``,`` and
    ``/`` are encoded, non-ASCII text is UTF-8 encoded.

    Args:
        value: Raw text to encode

    Returns:
        Encoded text

    Example:
        >>> encode_uri_component("San Francisco, CA")
        'San%20Francisco%2C%20CA'
    """
    return quote(str(value), safe=URI_COMPONENT_SAFE)


def escape_single_quotes(value: str) -> str:
    """
    Make a value safe to place between single quotes in a shell command.

    Each ``'`` closes the quoted word, adds a double-quoted ``'`` and
    reopens the quote, so ``O'Brien`` becomes ``O'"'"'Brien``.
    """
    return value.replace("'", SHELL_QUOTE_ESCAPE)


def format_number(value: Union[int, float]) -> str:
    """
    Render a number the way JavaScript prints it.

    Whole numbers lose the trailing ``.0`` and ``-0`` prints as ``0``.
    Exponent notation is used only below ``1e-6`` and from ``1e21`` upwards,
    written ``1e-7`` or ``1.5e+21``.

    Example:
        >>> format_number(-33.8688), format_number(0.0), format_number(1e-7)
        ('-33.8688', '0', '1e-7')
    """
    if isinstance(value, int) and abs(value) < JS_EXPONENT_THRESHOLD:
        return str(value)

    value = float(value)
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value == 0:
        return "0"

    sign = "-" if value < 0 else ""
    # repr gives the shortest round-tripping digits, the same ones JavaScript uses
    _, digit_tuple, exponent = Decimal(repr(abs(value))).normalize().as_tuple()
    digits = "".join(str(d) for d in digit_tuple)
    k = len(digits)
    point = exponent + k

    if k <= point <= 21:
        body = digits + "0" * (point - k)
    elif 0 < point <= 21:
        body = f"{digits[:point]}.{digits[point:]}"
    elif -6 < point <= 0:
        body = "0." + "0" * -point + digits
    else:
        e = point - 1
        mantissa = digits if k == 1 else f"{digits[0]}.{digits[1:]}"
        body = f"{mantissa}e{'+' if e >= 0 else '-'}{abs(e)}"

    return sign + body
