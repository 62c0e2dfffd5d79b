"""Errors raised by the simulation engine."""


class InvalidScenario(ValueError):
    """The caller supplied a scenario outside its declared bounds."""


class DataUnavailable(Exception):
    """A snapshot aggregate could not be computed from the business records."""

    def __init__(self, field: str, reason: str = ""):
        self.field = field
        self.reason = reason
        message = f"{field} unavailable"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class AdvisorUnavailable(Exception):
    """The narrative advisor backend could not produce advice."""
