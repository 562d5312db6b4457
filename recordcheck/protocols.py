"""
Interfaces the model layer must provide.

recordcheck never talks to a database or runs validations itself. Generated
cases drive a model through the small capability surface below, so any ORM
can be tested once it is wrapped to match.
"""

from typing import Any, Mapping, Optional, Protocol, runtime_checkable

from recordcheck.reflection import AssociationKind


@runtime_checkable
class SubjectRecord(Protocol):
    """A single model instance."""

    def get_attribute(self, name: str) -> Any:
        """Return the current value of an attribute."""
        ...

    def set_attribute(self, name: str, value: Any) -> None:
        """Assign an attribute without saving."""
        ...

    def is_valid(self) -> bool:
        """Run validations and report whether the record is valid."""
        ...

    def save(self) -> bool:
        """Validate and persist. Returns False when validation fails."""
        ...

    def errors_on(self, name: str) -> list[str]:
        """Error messages for one attribute from the last validation run."""
        ...

    def full_messages(self) -> list[str]:
        """All error messages, prefixed with their attribute names."""
        ...

    def update_attributes(self, values: Mapping[str, Any]) -> bool:
        """Mass-assign values and save. Returns the save result."""
        ...

    def reload(self) -> "SubjectRecord":
        """Refresh attribute values from storage."""
        ...


class Reflection(Protocol):
    """Association metadata as returned by a model class."""

    kind: AssociationKind
    options: Mapping[str, Any]


@runtime_checkable
class SubjectModel(Protocol):
    """A model class under test."""

    __name__: str

    def new(self) -> SubjectRecord:
        """Build a fresh, unsaved instance with no attributes assigned."""
        ...

    def first(self) -> Optional[SubjectRecord]:
        """Return the first persisted instance, or None."""
        ...

    def reflect_on_association(self, name: str) -> Optional[Reflection]:
        """Return the reflection for a named association, or None."""
        ...
