"""
Tests for the validation generators.

Each generator is checked for fan-out and naming, for cases that pass
against a correctly validated record, and for cases that fail when the
record does not enforce the rule.
"""

import pytest

from recordcheck import (
    GeneratorSettings,
    accept_values,
    length_range,
    numeric_only,
    protect_on_update,
    reject_values,
    require_presence,
    require_uniqueness,
    value_range,
)
from tests.framework.models import Customer, Note, Supplier, backend, seed


class TestRequirePresence:
    """Test the require_presence generator."""

    def test_one_case_per_attribute(self):
        cases = require_presence(Customer, "email", "login", "name")
        assert [case.name for case in cases] == [
            "require email to be set",
            "require login to be set",
            "require name to be set",
        ]

    def test_cases_pass_for_required_attributes(self):
        for case in require_presence(Customer, "email", "login", "name", "age"):
            case()

    def test_case_fails_when_record_is_valid_without_attribute(self):
        case, = require_presence(Note, "title")
        with pytest.raises(AssertionError, match="still valid without title"):
            case()

    def test_no_existing_record_needed(self):
        case, = require_presence(Supplier, "name")
        case()

    def test_case_carries_subject(self):
        case, = require_presence(Customer, "email")
        assert case.subject == "Customer"
        assert case.qualified_name == "Customer should require email to be set"

    def test_requires_attributes(self):
        with pytest.raises(ValueError):
            require_presence(Customer)


class TestRequireUniqueness:
    """Test the require_uniqueness generator."""

    def test_case_name(self):
        case, = require_uniqueness(Customer, "email")
        assert case.name == "require unique value for email"

    def test_case_passes_for_unique_attribute(self):
        case, = require_uniqueness(Customer, "email")
        case()

    def test_case_fails_for_non_unique_attribute(self):
        case, = require_uniqueness(Customer, "name")
        with pytest.raises(AssertionError, match="No errors found on Customer.name"):
            case()


class TestProtectOnUpdate:
    """Test the protect_on_update generator."""

    def test_case_name(self):
        case, = protect_on_update(Customer, "credit")
        assert case.name == "not allow credit to be changed by update"

    def test_case_passes_for_protected_attribute(self):
        case, = protect_on_update(Customer, "credit")
        case()
        assert Customer.first().get_attribute("credit") == 50

    def test_case_fails_when_attribute_changes(self):
        case, = protect_on_update(Customer, "rank")
        with pytest.raises(AssertionError, match="Was able to change Customer.rank from 0 to 1"):
            case()

    def test_case_fails_when_update_is_rejected(self):
        # login only accepts strings, so assigning 1 fails validation
        case, = protect_on_update(Customer, "login")
        with pytest.raises(AssertionError, match="Cannot update Customer"):
            case()

    def test_failed_case_restores_stored_value(self):
        case, = protect_on_update(Customer, "rank")
        with pytest.raises(AssertionError):
            case()
        assert Customer.first().get_attribute("rank") == 0

        # A sibling case sees the record as it was seeded
        sibling, = protect_on_update(Customer, "rank")
        with pytest.raises(AssertionError, match="from 0 to 1"):
            sibling()

    def test_sentinel_comes_from_settings(self):
        case, = protect_on_update(Customer, "rank", settings=GeneratorSettings(protected_sentinel=7))
        with pytest.raises(AssertionError, match="from 0 to 7"):
            case()


class TestRejectValues:
    """Test the reject_values generator."""

    def test_one_case_per_value(self):
        cases = reject_values(Customer, "email", "bad", "no-at-sign.com", "a@b")
        assert [case.name for case in cases] == [
            'not allow email to be set to "bad"',
            'not allow email to be set to "no-at-sign.com"',
            'not allow email to be set to "a@b"',
        ]

    def test_cases_pass_for_invalid_values(self):
        for case in reject_values(Customer, "email", "bad", "no-at-sign.com"):
            case()

    def test_case_fails_when_save_succeeds(self):
        case, = reject_values(Customer, "nickname", "Al")
        with pytest.raises(AssertionError, match='Saved Customer with nickname set to "Al"'):
            case()

    def test_case_fails_when_error_is_not_invalid(self):
        case, = reject_values(Customer, "login", "x")
        with pytest.raises(AssertionError, match="doesn't include \"invalid\""):
            case()

    def test_pattern_comes_from_settings(self):
        case, = reject_values(Customer, "login", "x", settings=GeneratorSettings(invalid_pattern="short"))
        case()

    def test_failing_value_does_not_affect_siblings(self):
        rejected, accepted = reject_values(Customer, "email", "bad", "carol@example.com")
        rejected()
        with pytest.raises(AssertionError):
            accepted()

    def test_requires_values(self):
        with pytest.raises(ValueError):
            reject_values(Customer, "email")


class TestAcceptValues:
    """Test the accept_values generator."""

    def test_case_name(self):
        case, = accept_values(Customer, "email", "carol@example.com")
        assert case.name == 'allow email to be set to "carol@example.com"'

    def test_case_passes_for_valid_value(self):
        case, = accept_values(Customer, "email", "carol@example.com")
        case()

    def test_case_passes_when_save_fails_for_other_reasons(self):
        # Taken, but not invalid
        case, = accept_values(Customer, "email", "bob@example.com")
        case()

    def test_case_fails_for_invalid_value(self):
        case, = accept_values(Customer, "email", "bad")
        with pytest.raises(AssertionError, match='includes "invalid" when set to "bad"'):
            case()


class TestLengthRange:
    """Test the length_range generator."""

    def test_case_names(self):
        cases = length_range(Customer, "login", (3, 10))
        assert [case.name for case in cases] == [
            "not allow login to be less than 3 chars long",
            "not allow login to be more than 10 chars long",
        ]

    def test_accepts_range(self):
        cases = length_range(Customer, "login", range(3, 11))
        assert [case.name for case in cases] == [
            "not allow login to be less than 3 chars long",
            "not allow login to be more than 10 chars long",
        ]

    def test_cases_pass_for_enforced_bounds(self):
        for case in length_range(Customer, "login", (3, 10)):
            case()

    def test_boundary_values_are_exclusive(self):
        too_short, too_long = length_range(Note, "body", (3, 10))
        with pytest.raises(AssertionError, match='set to "xx"'):
            too_short()
        with pytest.raises(AssertionError, match='set to "xxxxxxxxxxx"'):
            too_long()

    def test_case_fails_when_bound_is_not_enforced(self):
        too_short, _ = length_range(Customer, "login", (4, 10))
        with pytest.raises(AssertionError, match='Saved Customer with login set to "xxx"'):
            too_short()

    def test_case_fails_when_error_does_not_mention_length(self):
        # A pattern error is reported instead of a length error
        _, too_long = length_range(Customer, "email", (3, 10))
        with pytest.raises(AssertionError, match="doesn't include \"long\""):
            too_long()

    def test_custom_filler(self):
        too_short, _ = length_range(Note, "body", (3, 10), settings=GeneratorSettings(filler="z"))
        with pytest.raises(AssertionError, match='set to "zz"'):
            too_short()

    @pytest.mark.parametrize("bounds", [(0, 10), (-1, 3), (5, 4), range(0)])
    def test_rejects_unusable_bounds(self, bounds):
        with pytest.raises(ValueError):
            length_range(Customer, "login", bounds)


class TestValueRange:
    """Test the value_range generator."""

    def test_case_names(self):
        cases = value_range(Customer, "age", (1, 100))
        assert [case.name for case in cases] == [
            "not allow age to be less than 1",
            "not allow age to be more than 100",
        ]

    def test_cases_pass_for_enforced_bounds(self):
        for case in value_range(Customer, "age", (1, 100)):
            case()

    def test_accepts_settings(self):
        for case in value_range(Customer, "age", (1, 100), settings=GeneratorSettings(filler="z")):
            case()

    def test_cases_use_values_outside_bounds(self):
        too_low, too_high = value_range(Note, "words", (1, 100))
        with pytest.raises(AssertionError, match='set to "0"'):
            too_low()
        with pytest.raises(AssertionError, match='set to "101"'):
            too_high()

    @pytest.mark.parametrize("bounds", [(1.5, 3), (1, "10"), (True, 3)])
    def test_rejects_non_integer_bounds(self, bounds):
        with pytest.raises(TypeError):
            value_range(Customer, "age", bounds)


class TestNumericOnly:
    """Test the numeric_only generator."""

    def test_one_case_per_attribute(self):
        cases = numeric_only(Customer, "age", "rank")
        assert [case.name for case in cases] == [
            "only allow numeric values for age",
            "only allow numeric values for rank",
        ]

    def test_cases_pass_for_numeric_attributes(self):
        for case in numeric_only(Customer, "age", "rank"):
            case()

    def test_case_fails_for_text_attribute(self):
        case, = numeric_only(Customer, "name")
        with pytest.raises(AssertionError, match="still valid with name set to 'abcd'"):
            case()


class TestSampleRecord:
    """Cases that need an existing record fetch it when they run."""

    @pytest.mark.parametrize("generate", [
        lambda: require_uniqueness(Supplier, "name"),
        lambda: protect_on_update(Supplier, "name"),
        lambda: reject_values(Supplier, "name", "bad"),
        lambda: accept_values(Supplier, "name", "good"),
        lambda: length_range(Supplier, "name", (1, 5)),
        lambda: value_range(Supplier, "name", (1, 5)),
        lambda: numeric_only(Supplier, "name"),
    ])
    def test_case_fails_without_a_record(self, generate):
        for case in generate():
            with pytest.raises(AssertionError, match="Can't find first Supplier"):
                case()

    def test_record_is_fetched_at_execution_time(self):
        backend.clear(Customer)
        case, = reject_values(Customer, "email", "bad")
        with pytest.raises(AssertionError, match="Can't find first Customer"):
            case()

        seed()
        case()
