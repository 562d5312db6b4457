"""
Test case generators for model validations and associations.

Every generator takes the model under test plus a rule specification and
returns one GeneratedCase per attribute, value, or association, so a single
failure never hides its siblings. Nothing is registered here; pass the
result to a CaseSet or a ModelSuite.

Example:
    >>> cases = require_presence(User, "email", "name")
    >>> [case.name for case in cases]
    ['require email to be set', 'require name to be set']
    >>> cases[0]()  # raises AssertionError if User() is valid without an email
"""

import logging
import re
from numbers import Integral
from typing import Any, Callable, Optional, Sequence, Union

from recordcheck.cases import GeneratedCase
from recordcheck.config import DEFAULT_SETTINGS, GeneratorSettings
from recordcheck.exceptions import ReflectionError
from recordcheck.protocols import SubjectModel, SubjectRecord
from recordcheck.reflection import AssociationKind

logger = logging.getLogger(__name__)

Bounds = Union[Sequence[int], range]


def _model_name(model: SubjectModel) -> str:
    return getattr(model, "__name__", type(model).__name__)


def _require_items(kind: str, items: Sequence[Any]) -> None:
    if not items:
        raise ValueError(f"At least one {kind} is required")


def _bounds(bounds: Bounds) -> tuple[int, int]:
    """Return the inclusive (first, last) pair of a range or 2-sequence."""
    if isinstance(bounds, range):
        if len(bounds) == 0:
            raise ValueError(f"Empty range: {bounds!r}")
        return bounds[0], bounds[-1]
    low, high = bounds
    if low > high:
        raise ValueError(f"Minimum {low!r} is greater than maximum {high!r}")
    return low, high


def _first_record(model: SubjectModel) -> SubjectRecord:
    record = model.first()
    if record is None:
        logger.warning("No %s record available for a generated case", _model_name(model))
    assert record is not None, f"Can't find first {_model_name(model)}"  # nosec B101
    return record


def _restore(record: SubjectRecord, attribute: str, original: Any) -> None:
    """Put back a value a failed protection check managed to store."""
    record.reload()
    if record.get_attribute(attribute) == original:
        return
    record.set_attribute(attribute, original)
    if not record.save():
        logger.warning("Could not restore %s to %r: %s", attribute, original, record.full_messages())


def _error_text(record: SubjectRecord, attribute: str) -> str:
    return "; ".join(record.errors_on(attribute))


def _case(model: SubjectModel, name: str, body: Callable[[], None]) -> GeneratedCase:
    return GeneratedCase(name=name, body=body, subject=_model_name(model))


def _generated(model: SubjectModel, cases: list[GeneratedCase]) -> list[GeneratedCase]:
    logger.debug("Generated %d case(s) for %s", len(cases), _model_name(model))
    return cases


# Validation generators

def require_presence(
    model: SubjectModel, *attributes: str, settings: Optional[GeneratorSettings] = None
) -> list[GeneratedCase]:
    """
    Ensure the model is invalid when any of the attributes is unset.

    Works on a freshly built instance, so no existing record is needed.
    """
    _require_items("attribute", attributes)
    settings = settings or DEFAULT_SETTINGS
    name = _model_name(model)

    def make(attribute: str) -> Callable[[], None]:
        def body() -> None:
            record = model.new()
            assert not record.is_valid(), f"{name} instance is still valid without {attribute}"  # nosec B101
            errors = record.errors_on(attribute)
            assert errors, f"No errors found on {name}.{attribute}"  # nosec B101
            assert settings.blank_message in errors, (  # nosec B101
                f"Errors on {name}.{attribute} do not include {settings.blank_message!r}: {errors}"
            )
        return body

    return _generated(model, [
        _case(model, f"require {attribute} to be set", make(attribute)) for attribute in attributes
    ])


def require_uniqueness(
    model: SubjectModel, *attributes: str, settings: Optional[GeneratorSettings] = None
) -> list[GeneratedCase]:
    """
    Ensure a new record copying an existing record's value is invalid.

    Requires an existing record.
    """
    _require_items("attribute", attributes)
    settings = settings or DEFAULT_SETTINGS
    name = _model_name(model)

    def make(attribute: str) -> Callable[[], None]:
        def body() -> None:
            existing = _first_record(model)
            record = model.new()
            record.set_attribute(attribute, existing.get_attribute(attribute))
            assert not record.is_valid(), (  # nosec B101
                f"{name} instance is still valid with a duplicate {attribute}"
            )
            errors = record.errors_on(attribute)
            assert errors, f"No errors found on {name}.{attribute}"  # nosec B101
            assert settings.taken_message in errors, (  # nosec B101
                f"Errors on {name}.{attribute} do not include {settings.taken_message!r}: {errors}"
            )
        return body

    return _generated(model, [
        _case(model, f"require unique value for {attribute}", make(attribute)) for attribute in attributes
    ])


def protect_on_update(
    model: SubjectModel, *attributes: str, settings: Optional[GeneratorSettings] = None
) -> list[GeneratedCase]:
    """
    Ensure mass-assignment on update silently ignores the attributes.

    The update itself must succeed and leave the record valid; only the
    stored value of the protected attribute must stay the same. Requires an
    existing record.

    A value that does get through is written back afterwards, so a failing
    case leaves the first record as it found it.
    """
    _require_items("attribute", attributes)
    settings = settings or DEFAULT_SETTINGS
    name = _model_name(model)
    sentinel = settings.protected_sentinel

    def make(attribute: str) -> Callable[[], None]:
        def body() -> None:
            record = _first_record(model)
            original = record.get_attribute(attribute)
            try:
                assert record.update_attributes({attribute: sentinel}), (  # nosec B101
                    f"Cannot update {name} with {{{attribute!r}: {sentinel!r}}}: "
                    + ", ".join(record.full_messages())
                )
                assert record.is_valid(), f"{name} isn't valid after changing {attribute}"  # nosec B101
                record.reload()
                current = record.get_attribute(attribute)
                assert current == original, (  # nosec B101
                    f"Was able to change {name}.{attribute} from {original!r} to {current!r}"
                )
            finally:
                _restore(record, attribute, original)
        return body

    return _generated(model, [
        _case(model, f"not allow {attribute} to be changed by update", make(attribute))
        for attribute in attributes
    ])


def _rejects_on_save(
    model: SubjectModel, attribute: str, value: Any, pattern: Optional[str]
) -> Callable[[], None]:
    name = _model_name(model)

    def body() -> None:
        record = _first_record(model)
        record.set_attribute(attribute, value)
        assert not record.save(), f'Saved {name} with {attribute} set to "{value}"'  # nosec B101
        text = _error_text(record, attribute)
        assert text, f'There are no errors set on {attribute} after being set to "{value}"'  # nosec B101
        if pattern is not None:
            assert re.search(pattern, text), (  # nosec B101
                f'Error set on {attribute} doesn\'t include "{pattern}" when set to "{value}": {text!r}'
            )
    return body


def reject_values(
    model: SubjectModel, attribute: str, *bad_values: Any, settings: Optional[GeneratorSettings] = None
) -> list[GeneratedCase]:
    """
    Ensure saving fails with an "invalid" error for each bad value.

    Requires an existing record.
    """
    _require_items("value", bad_values)
    settings = settings or DEFAULT_SETTINGS

    return _generated(model, [
        _case(
            model,
            f'not allow {attribute} to be set to "{value}"',
            _rejects_on_save(model, attribute, value, settings.invalid_pattern),
        )
        for value in bad_values
    ])


def accept_values(
    model: SubjectModel, attribute: str, *good_values: Any, settings: Optional[GeneratorSettings] = None
) -> list[GeneratedCase]:
    """
    Ensure none of the values produce an "invalid" error.

    The save result is not checked; other attributes may keep the record
    from saving. Requires an existing record.
    """
    _require_items("value", good_values)
    settings = settings or DEFAULT_SETTINGS

    def make(value: Any) -> Callable[[], None]:
        def body() -> None:
            record = _first_record(model)
            record.set_attribute(attribute, value)
            record.save()
            text = _error_text(record, attribute)
            assert not re.search(settings.invalid_pattern, text), (  # nosec B101
                f'Error set on {attribute} includes "{settings.invalid_pattern}" '
                f'when set to "{value}": {text!r}'
            )
        return body

    return _generated(model, [
        _case(model, f'allow {attribute} to be set to "{value}"', make(value)) for value in good_values
    ])


def length_range(
    model: SubjectModel, attribute: str, bounds: Bounds, settings: Optional[GeneratorSettings] = None
) -> list[GeneratedCase]:
    """
    Ensure the attribute's length stays within inclusive bounds.

    Generates two cases: a string one character shorter than the minimum
    (expecting a "short" error) and one character longer than the maximum
    (expecting a "long" error). Requires an existing record.

    Example:
        >>> [case.name for case in length_range(User, "login", (3, 10))]
        ['not allow login to be less than 3 chars long', 'not allow login to be more than 10 chars long']
    """
    settings = settings or DEFAULT_SETTINGS
    min_length, max_length = _bounds(bounds)
    if min_length < 1:
        raise ValueError(f"Minimum length must be at least 1, got {min_length}")

    too_short = settings.filler * (min_length - 1)
    too_long = settings.filler * (max_length + 1)

    return _generated(model, [
        _case(
            model,
            f"not allow {attribute} to be less than {min_length} chars long",
            _rejects_on_save(model, attribute, too_short, settings.too_short_pattern),
        ),
        _case(
            model,
            f"not allow {attribute} to be more than {max_length} chars long",
            _rejects_on_save(model, attribute, too_long, settings.too_long_pattern),
        ),
    ])


def value_range(
    model: SubjectModel, attribute: str, bounds: Bounds, settings: Optional[GeneratorSettings] = None
) -> list[GeneratedCase]:
    """
    Ensure the attribute's value stays within inclusive integer bounds.

    Generates cases for ``min - 1`` and ``max + 1``; each must fail to save
    with an error on the attribute. Requires an existing record.

    ``settings`` is accepted so all generators share one signature; no
    setting affects this generator.
    """
    low, high = _bounds(bounds)
    for bound in (low, high):
        if not isinstance(bound, Integral) or isinstance(bound, bool):
            raise TypeError(f"Value range bounds must be integers, got {bound!r}")

    return _generated(model, [
        _case(model, f"not allow {attribute} to be less than {low}",
              _rejects_on_save(model, attribute, low - 1, None)),
        _case(model, f"not allow {attribute} to be more than {high}",
              _rejects_on_save(model, attribute, high + 1, None)),
    ])


def numeric_only(
    model: SubjectModel, *attributes: str, settings: Optional[GeneratorSettings] = None
) -> list[GeneratedCase]:
    """
    Ensure a non-numeric token makes the record invalid.

    Requires an existing record.
    """
    _require_items("attribute", attributes)
    settings = settings or DEFAULT_SETTINGS
    name = _model_name(model)
    token = settings.non_numeric_token

    def make(attribute: str) -> Callable[[], None]:
        def body() -> None:
            record = _first_record(model)
            record.set_attribute(attribute, token)
            assert not record.is_valid(), (  # nosec B101
                f"{name} instance is still valid with {attribute} set to {token!r}"
            )
            errors = record.errors_on(attribute)
            assert errors, f"No errors found on {name}.{attribute}"  # nosec B101
            assert settings.not_a_number_message in errors, (  # nosec B101
                f"Errors on {name}.{attribute} do not include {settings.not_a_number_message!r}: {errors}"
            )
        return body

    return _generated(model, [
        _case(model, f"only allow numeric values for {attribute}", make(attribute)) for attribute in attributes
    ])


# Association generators

def _kind_value(kind: Any) -> Any:
    return getattr(kind, "value", kind)


def _association_cases(
    model: SubjectModel,
    associations: Sequence[str],
    expected: AssociationKind,
    title: str,
    through: Optional[str] = None,
) -> list[GeneratedCase]:
    _require_items("association", associations)
    name = _model_name(model)

    # A missing association is a broken suite, not a failing case
    for association in associations:
        if model.reflect_on_association(association) is None:
            raise ReflectionError(name, association)

    def make(association: str) -> Callable[[], None]:
        def body() -> None:
            reflection = model.reflect_on_association(association)
            assert reflection is not None, f"{name} has no association named {association!r}"  # nosec B101
            actual = _kind_value(reflection.kind)
            assert actual == expected.value, (  # nosec B101
                f"Expected {name}.{association} to be {expected.label}, got {actual}"
            )
            if through is not None:
                actual_through = reflection.options.get("through")
                assert actual_through == through, (  # nosec B101
                    f"Expected {name}.{association} through {through!r}, got {actual_through!r}"
                )
        return body

    suffix = f" through {through}" if through is not None else ""
    return _generated(model, [
        _case(model, f"{title} {association}{suffix}", make(association)) for association in associations
    ])


def has_many(
    model: SubjectModel, *associations: str, through: Optional[str] = None,
    settings: Optional[GeneratorSettings] = None,
) -> list[GeneratedCase]:
    """
    Ensure each association is declared as has-many.

    When ``through`` is given the reflected ``through`` option must match it.
    ``settings`` is accepted only to keep the generator signatures uniform.
    """
    return _association_cases(model, associations, AssociationKind.HAS_MANY, "have many", through)


def has_and_belongs_to_many(
    model: SubjectModel, *associations: str, settings: Optional[GeneratorSettings] = None
) -> list[GeneratedCase]:
    """
    Ensure each association is declared as has-and-belongs-to-many.

    ``settings`` is accepted only to keep the generator signatures uniform.
    """
    return _association_cases(
        model, associations, AssociationKind.HAS_AND_BELONGS_TO_MANY, "have and belong to many"
    )


def has_one(
    model: SubjectModel, *associations: str, settings: Optional[GeneratorSettings] = None
) -> list[GeneratedCase]:
    """
    Ensure each association is declared as has-one.

    ``settings`` is accepted only to keep the generator signatures uniform.
    """
    return _association_cases(model, associations, AssociationKind.HAS_ONE, "have one")


def belongs_to(
    model: SubjectModel, *associations: str, settings: Optional[GeneratorSettings] = None
) -> list[GeneratedCase]:
    """
    Ensure each association is declared as belongs-to.

    ``settings`` is accepted only to keep the generator signatures uniform.
    """
    return _association_cases(model, associations, AssociationKind.BELONGS_TO, "belong to")
