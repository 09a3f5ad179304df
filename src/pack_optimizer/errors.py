"""Exceptions raised before or after a solve."""


class ConfigurationError(ValueError):
    """Raised when the solve setup cannot be searched (e.g. no containers)."""


class InvalidInputError(ValueError):
    """Raised when items or capacities violate the input constraints."""


class StateValidationError(ValueError):
    """Raised when an assignment violates the packing invariants."""
