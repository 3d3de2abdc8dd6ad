"""
Custom exceptions for Sortable IDs

Well-defined error hierarchy enables precise error handling and
clear error messages for callers of the generators and codecs.

Fun fact: Twitter announced Snowflake in 2010 after outgrowing MySQL
auto-increment keys - the error below is the one every port has to keep.
"""


class SortableIdError(Exception):
    """Base exception for all Sortable IDs errors"""

    pass


class InvalidConfigurationError(SortableIdError, ValueError):
    """
    Raised when a generator is constructed with out-of-range settings

    Worker ID and sequence offset must fit their bit widths. The
    constructor fails before any sequencer state exists.
    """

    def __init__(
        self,
        field: str,
        value: object,
        minimum: int | None = None,
        maximum: int | None = None,
        message: str = "",
    ) -> None:
        self.field = field
        self.value = value
        self.minimum = minimum
        self.maximum = maximum
        if not message:
            if minimum is not None and maximum is not None:
                message = f"{field} must be between {minimum} and {maximum}, got {value!r}"
            else:
                message = f"Invalid {field}: {value!r}"
        super().__init__(message)


class ClockRegressionError(SortableIdError):
    """
    Raised when the clock reads earlier than the last issued timestamp

    The generator state is left untouched, so the caller may retry once
    the clock has caught up again.
    """

    def __init__(self, last_timestamp: int, observed_timestamp: int) -> None:
        self.last_timestamp = last_timestamp
        self.observed_timestamp = observed_timestamp
        super().__init__(
            f"Clock moved backwards by {last_timestamp - observed_timestamp} ms. "
            f"Refusing to generate id until {last_timestamp}."
        )


class FieldOverflowError(SortableIdError, OverflowError):
    """Raised when a value does not fit its bit field"""

    def __init__(self, field: str, value: int, bits: int) -> None:
        self.field = field
        self.value = value
        self.bits = bits
        super().__init__(
            f"{field} {value} does not fit in {bits} bits "
            f"(allowed range 0..{(1 << bits) - 1})"
        )


class InvalidIdentifierError(SortableIdError, ValueError):
    """Raised when a value cannot be parsed as an identifier of the given scheme"""

    def __init__(self, value: object, scheme: str, reason: str = "") -> None:
        self.value = value
        self.scheme = scheme
        self.reason = reason
        detail = f": {reason}" if reason else ""
        super().__init__(f"Invalid {scheme} identifier {value!r}{detail}")
