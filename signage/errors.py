"""Error kinds raised by the storage layer.

ArgumentError:  the caller passed something bad (invalid name, missing
                queue or slide, unknown slide id). Recoverable by fixing
                the input; the HTTP layer answers 4xx.
InternalError:  the environment or the program misbehaved (delete failed,
                lock timed out, precondition violated, corrupt record).
                Not meant for ordinary callers; the HTTP layer answers 500.
"""


class SignageError(Exception):
    """Base class for all storage errors."""


class ArgumentError(SignageError, ValueError):
    """Raised for bad or malformed input."""


class InternalError(SignageError, RuntimeError):
    """Raised for unexpected environment failures and broken preconditions."""
