"""
Custom exceptions for recordcheck.

These cover generation-time faults only. Failures inside a generated case
are reported as plain ``AssertionError`` so the test runner treats them as
ordinary test failures.
"""


class RecordCheckError(Exception):
    """Base exception for recordcheck errors."""

    pass


class SubjectResolutionError(RecordCheckError, LookupError):
    """Raised when a suite name does not resolve to a model class."""

    def __init__(self, suite_name: str, candidate: str):
        self.suite_name = suite_name
        self.candidate = candidate
        super().__init__(
            f"Cannot resolve subject for suite {suite_name!r}: no class named {candidate!r}"
        )


class ReflectionError(RecordCheckError):
    """Raised when a model has no reflection for a named association."""

    def __init__(self, model_name: str, association: str):
        self.model_name = model_name
        self.association = association
        super().__init__(f"{model_name} has no association named {association!r}")


class DuplicateCaseError(RecordCheckError):
    """Raised when two generated cases in one case set share a name."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"A case named {name!r} is already registered")
