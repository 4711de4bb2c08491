"""
Error types raised by the oversampling package.
"""


class SmoteError(Exception):
    """Base class for all oversampling errors."""


class ConfigurationError(SmoteError, ValueError):
    """Invalid parameters or a dataset that cannot be oversampled."""


class EncodingError(SmoteError, ValueError):
    """Raised by the encoder when a column or frame cannot be encoded."""


class ProtectionExhausted(SmoteError, RuntimeError):
    """The protection filter rejected every regenerated candidate."""

    def __init__(self, attempts: int):
        self.attempts = attempts
        super().__init__(
            f"Synthetic example protection rejected {attempts} consecutive candidates; "
            f"the minority class may be enclosed by majority examples"
        )


class NotFittedError(SmoteError, AttributeError):
    """Prediction or introspection requested before a model was built."""
