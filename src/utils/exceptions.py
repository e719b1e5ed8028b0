"""Exceptions raised by the planet generation engine."""


class InvalidInputError(ValueError):
    """Raised when a caller passes a value the engine cannot generate from.

    Examples are a day below 1, a non-string seed or a mesh detail level
    below zero.
    """


class ConfigurationError(LookupError):
    """Raised when a configuration table is missing an entry.

    This signals a programming defect in the configuration, not a runtime
    condition, and is never caught inside the package.
    """
