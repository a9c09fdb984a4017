"""
Exceptions raised by plainmodel.

Configuration problems (unknown naming cases, malformed field metadata) are
raised as soon as they are detected, usually at class creation. Validation
failures are never raised; see ``plainmodel.validation``.
"""


class PlainModelError(Exception):
    """Base class for all plainmodel errors."""


class ConfigurationError(PlainModelError, ValueError):
    """Invalid model or field metadata."""


class NamingCaseError(ConfigurationError):
    """Unknown naming-case style."""

    def __init__(self, case: object):
        self.case = case
        super().__init__(f"Unknown naming case: {case!r}")


__all__ = ["PlainModelError", "ConfigurationError", "NamingCaseError"]
