"""
exactcat: exactly-sized string concatenation for Python

Concatenates a heterogeneous sequence of values into one output using a
single allocation sized to the precise final length. Every value reports
its UTF-8 byte length first, then writes exactly that many bytes.

Quick Start:
    >>> from exactcat import cat
    >>> cat("(", "a", ")", " ", 12, " + ", 7, " = ", 12 + 7)
    '(a) 12 + 7 = 19'

Formatters:
    >>> from exactcat import HEX, IntFormat, SignPolicy, repeat
    >>> cat("0x", HEX(255), " ", IntFormat(min_len=4)(7), " ", repeat("-", 3))
    '0xff 0007 ---'
    >>> cat(IntFormat(sign=SignPolicy.PLUS)(5))
    '+5'

Sinks:
    >>> import io
    >>> out = io.BytesIO()
    >>> write_to(out, "id=", 42, "\\n")
    6

Installation:
    pip install exactcat              # zero runtime dependencies
"""

from exactcat.config import (
    CatConfig,
    cat_config_context,
    get_cat_config,
    reset_cat_config,
    set_cat_config,
)
from exactcat.errors import (
    EncodingContractError,
    ExactcatError,
    FormatterConfigError,
    IntegerRangeError,
    LengthContractError,
    ShowTypeError,
    SinkError,
)
from exactcat.formatting import Format, Formatted, Formatter
from exactcat.numeric import (
    BINARY,
    BINARY_DIGITS,
    DECIMAL,
    DECIMAL_DIGITS,
    HEX,
    HEX_DIGITS,
    OCTAL,
    OCTAL_DIGITS,
    UPPER_HEX,
    UPPER_HEX_DIGITS,
    IntFormat,
    SignPolicy,
    digit_count,
    reverse_digits,
)
from exactcat.pipeline import cat, cat_bytes, cat_length, cat_write, fcat, write_to
from exactcat.profiling import CatAccumulator, get_cat_accumulator, profiled_cat
from exactcat.repeat import Repeat, repeat
from exactcat.show import Bare, Show, show_length, show_write
from exactcat.sink import ByteSink, FixedBuffer, SinkWriter

__version__ = "0.1.0"

__all__ = [
    # Pipeline
    "cat",
    "cat_bytes",
    "cat_length",
    "cat_write",
    "fcat",
    "write_to",
    "Bare",
    "Formatted",
    # Capabilities
    "Show",
    "show_length",
    "show_write",
    "Format",
    "Formatter",
    # Numeric formatting
    "IntFormat",
    "SignPolicy",
    "digit_count",
    "reverse_digits",
    "DECIMAL",
    "HEX",
    "UPPER_HEX",
    "OCTAL",
    "BINARY",
    "DECIMAL_DIGITS",
    "HEX_DIGITS",
    "UPPER_HEX_DIGITS",
    "OCTAL_DIGITS",
    "BINARY_DIGITS",
    # Repeat
    "Repeat",
    "repeat",
    # Sinks
    "ByteSink",
    "FixedBuffer",
    "SinkWriter",
    # Configuration
    "CatConfig",
    "get_cat_config",
    "set_cat_config",
    "reset_cat_config",
    "cat_config_context",
    # Profiling
    "CatAccumulator",
    "get_cat_accumulator",
    "profiled_cat",
    # Errors
    "ExactcatError",
    "EncodingContractError",
    "FormatterConfigError",
    "IntegerRangeError",
    "LengthContractError",
    "ShowTypeError",
    "SinkError",
    # Version
    "__version__",
]
