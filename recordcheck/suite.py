"""
Suite builders and pytest integration.

ModelSuite binds one model to a CaseSet and exposes every generator as a
chaining method. ModelAssertions turns a suite into parametrized pytest
tests when a conftest forwards ``pytest_generate_tests`` to
``generate_model_cases``.
"""

import logging
import sys
from typing import Any, Optional

import pytest

from recordcheck import generators
from recordcheck.cases import CaseSet, GeneratedCase
from recordcheck.config import DEFAULT_SETTINGS, GeneratorSettings
from recordcheck.generators import Bounds
from recordcheck.protocols import SubjectModel
from recordcheck.subject import resolve_subject, subject_name_for

logger = logging.getLogger(__name__)


class ModelSuite:
    """
    Declarative case builder for one model.

    Example:
        >>> suite = (
        ...     ModelSuite(User)
        ...     .require_presence("email", "name")
        ...     .length_range("login", (3, 10))
        ...     .has_many("orders", through="invoices")
        ... )
        >>> len(suite)
        5
    """

    def __init__(self, model: SubjectModel, settings: Optional[GeneratorSettings] = None):
        self.model = model
        self.settings = settings or DEFAULT_SETTINGS
        self.case_set = CaseSet(self.settings)

    @property
    def cases(self) -> list[GeneratedCase]:
        return list(self.case_set)

    def _register(self, cases: list[GeneratedCase]) -> "ModelSuite":
        self.case_set.extend(cases)
        return self

    def require_presence(self, *attributes: str) -> "ModelSuite":
        return self._register(generators.require_presence(self.model, *attributes, settings=self.settings))

    def require_uniqueness(self, *attributes: str) -> "ModelSuite":
        return self._register(generators.require_uniqueness(self.model, *attributes, settings=self.settings))

    def protect_on_update(self, *attributes: str) -> "ModelSuite":
        return self._register(generators.protect_on_update(self.model, *attributes, settings=self.settings))

    def reject_values(self, attribute: str, *bad_values: Any) -> "ModelSuite":
        return self._register(
            generators.reject_values(self.model, attribute, *bad_values, settings=self.settings)
        )

    def accept_values(self, attribute: str, *good_values: Any) -> "ModelSuite":
        return self._register(
            generators.accept_values(self.model, attribute, *good_values, settings=self.settings)
        )

    def length_range(self, attribute: str, bounds: Bounds) -> "ModelSuite":
        return self._register(generators.length_range(self.model, attribute, bounds, settings=self.settings))

    def value_range(self, attribute: str, bounds: Bounds) -> "ModelSuite":
        return self._register(generators.value_range(self.model, attribute, bounds, settings=self.settings))

    def numeric_only(self, *attributes: str) -> "ModelSuite":
        return self._register(generators.numeric_only(self.model, *attributes, settings=self.settings))

    def has_many(self, *associations: str, through: Optional[str] = None) -> "ModelSuite":
        return self._register(
            generators.has_many(self.model, *associations, through=through, settings=self.settings)
        )

    def has_and_belongs_to_many(self, *associations: str) -> "ModelSuite":
        return self._register(
            generators.has_and_belongs_to_many(self.model, *associations, settings=self.settings)
        )

    def has_one(self, *associations: str) -> "ModelSuite":
        return self._register(generators.has_one(self.model, *associations, settings=self.settings))

    def belongs_to(self, *associations: str) -> "ModelSuite":
        return self._register(generators.belongs_to(self.model, *associations, settings=self.settings))

    def parametrize(self, argname: str = "case") -> Any:
        """
        Build a ``pytest.mark.parametrize`` marker over the suite's cases.

        Usage:
            @ModelSuite(User).require_presence("name").parametrize()
            def test_user(case):
                case()
        """
        return pytest.mark.parametrize(argname, self.case_params())

    def case_params(self) -> list[Any]:
        return [pytest.param(case, id=case.name) for case in self.case_set]

    def __iter__(self):
        return iter(self.case_set)

    def __len__(self) -> int:
        return len(self.case_set)


class ModelAssertions:
    """
    Base class for pytest suites built from generators.

    Subclasses implement ``define_cases`` and may set ``subject``. When
    ``subject`` is unset it is resolved from the class name (``TestUser``)
    in the module the class is defined in.

    Subclass names must start with ``Test`` so pytest collects them; any
    other name raises TypeError when the class is defined.

    Usage:
        class TestUser(ModelAssertions):
            subject = User

            @classmethod
            def define_cases(cls, suite):
                suite.require_presence("email").has_many("orders")
    """

    subject: Optional[SubjectModel] = None
    settings: Optional[GeneratorSettings] = None

    def __init_subclass__(cls, **kwargs: Any):
        super().__init_subclass__(**kwargs)
        if not cls.__name__.startswith("Test"):
            raise TypeError(
                f"{cls.__name__} is never collected by pytest; "
                f"name ModelAssertions subclasses Test<Model>, e.g. Test{subject_name_for(cls.__name__)}"
            )

    @classmethod
    def define_cases(cls, suite: ModelSuite) -> None:
        raise NotImplementedError(f"{cls.__name__} must implement define_cases()")

    @classmethod
    def resolve_subject(cls) -> SubjectModel:
        if cls.subject is not None:
            return cls.subject
        module = sys.modules.get(cls.__module__)
        namespace = vars(module) if module is not None else {}
        return resolve_subject(cls.__name__, namespace, cls.settings)

    @classmethod
    def build_suite(cls) -> ModelSuite:
        """Resolve the subject once and collect all cases for this class."""
        suite = ModelSuite(cls.resolve_subject(), cls.settings)
        cls.define_cases(suite)
        logger.debug("Built %d case(s) for %s", len(suite), cls.__name__)
        return suite

    def test_model_assertion(self, case: GeneratedCase) -> None:
        case()


def generate_model_cases(metafunc: Any, argname: str = "case") -> None:
    """
    Parametrize ModelAssertions tests with their generated cases.

    Call from a conftest:

        def pytest_generate_tests(metafunc):
            generate_model_cases(metafunc)
    """
    cls = metafunc.cls
    if cls is None or not issubclass(cls, ModelAssertions) or argname not in metafunc.fixturenames:
        return
    suite = cls.build_suite()
    metafunc.parametrize(argname, suite.case_params())
