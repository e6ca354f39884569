class DriverError(Exception):
    """Base class of the errors raised by sadriver.

    Failures to open, read or write files are not wrapped; they propagate
    as the built-in ``OSError`` (a.k.a. ``IOError``).
    """


class FormatError(DriverError, ValueError):
    """An input file or a suffix array file is malformed or truncated."""


class ConstructionError(DriverError, RuntimeError):
    """The suffix array construction returned a non-zero code."""

    def __init__(self, code: int, message: str = ""):
        self.code = code
        if not message:
            message = f"suffix array construction failed with return code {code}"
        super().__init__(message)
