"""Exception classes for exactcat.

Provides standardized exceptions for error handling throughout exactcat.
Exceptions raised by a caller's sink are never wrapped; they propagate
unchanged so the caller sees the original failure.
"""

from __future__ import annotations


class ExactcatError(Exception):
    """Base exception for all exactcat errors.
    
    Subclass this for specific error categories.
    """

    pass


class FormatterConfigError(ExactcatError, ValueError):
    """Malformed formatter descriptor.
    
    Raised at construction time for digit alphabets with fewer than two
    glyphs, negative widths or counts. Always a programming error.
    """

    def __init__(self, formatter: str, message: str) -> None:
        """Initialize formatter configuration error.
        
        Args:
            formatter: Name of the formatter type (e.g., "IntFormat")
            message: Description of the misconfiguration
        """
        self.formatter = formatter
        super().__init__(f"{formatter}: {message}")


class IntegerRangeError(ExactcatError, OverflowError):
    """Integer outside the 64-bit range the numeric formatter accepts."""

    def __init__(self, value: int) -> None:
        self.value = value
        super().__init__(
            f"integer {value} is outside the 64-bit range [-2**63, 2**64 - 1]"
        )


class ShowTypeError(ExactcatError, TypeError):
    """Value has no Show capability.
    
    Raised when a value of an unsupported type reaches the pipeline.
    """

    def __init__(self, value: object) -> None:
        self.value_type = type(value)
        super().__init__(
            f"{type(value).__name__!r} values cannot be shown; "
            "implement show_length() and show_write() or wrap it in a formatter"
        )


class LengthContractError(ExactcatError):
    """Written byte count differs from the declared length.
    
    Indicates a Show or Format implementation whose length and write
    disagree. Never an expected runtime condition.
    """

    def __init__(
        self,
        expected: int,
        actual: int,
        element: int | None = None,
        value_type: str | None = None,
    ) -> None:
        """Initialize length contract error.
        
        Args:
            expected: Declared length in bytes
            actual: Bytes actually produced
            element: Index of the offending element (optional)
            value_type: Type name of the offending value (optional)
        """
        self.expected = expected
        self.actual = actual
        self.element = element
        self.value_type = value_type

        location = ""
        if element is not None:
            location = f"element {element}"
            if value_type:
                location += f" ({value_type})"
            location += ": "

        super().__init__(
            f"{location}declared {expected} bytes but produced {actual}"
        )


class EncodingContractError(ExactcatError):
    """Output is not valid UTF-8.
    
    Raised when the final bytes of a text concatenation fail to decode,
    or when a lone surrogate is given where a character is expected.
    """

    pass


class SinkError(ExactcatError, OSError):
    """Sink stalled: it accepted zero bytes of a non-empty write."""

    pass
