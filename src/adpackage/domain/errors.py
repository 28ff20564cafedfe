"""Domain-specific exception classes for the package pricing engine."""


class PackageEngineError(Exception):
    """Base class for all domain errors in the package pricing engine."""


class UnknownChannelError(PackageEngineError, ValueError):
    """Raised when a channel tag is outside the closed channel vocabulary.

    An unrecognised tag means the upstream inventory schema drifted, so it is
    surfaced instead of being silently skipped.

    Attributes:
        value: The rejected channel tag.
    """

    def __init__(self, value: object) -> None:
        self.value = value
        super().__init__(f"Unknown channel type: {value!r}")


class UnknownPricingModelError(PackageEngineError, ValueError):
    """Raised when a pricing model tag is outside the pricing vocabulary.

    Attributes:
        value: The rejected pricing model tag.
    """

    def __init__(self, value: object) -> None:
        self.value = value
        super().__init__(f"Unknown pricing model: {value!r}")


class PricingError(PackageEngineError):
    """Raised when a cost or budget calculation receives invalid input."""
