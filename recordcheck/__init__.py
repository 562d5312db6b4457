"""
Declarative test generators for ORM model classes.

Each generator inspects a model and returns named, executable test cases
that assert validation rules, persistence constraints, or association
metadata. Cases are registered explicitly through a CaseSet, a ModelSuite,
or the ModelAssertions pytest base class.
"""

from .cases import CaseSet, GeneratedCase
from .config import GeneratorSettings
from .exceptions import (
    DuplicateCaseError,
    RecordCheckError,
    ReflectionError,
    SubjectResolutionError,
)
from .generators import (
    accept_values,
    belongs_to,
    has_and_belongs_to_many,
    has_many,
    has_one,
    length_range,
    numeric_only,
    protect_on_update,
    reject_values,
    require_presence,
    require_uniqueness,
    value_range,
)
from .protocols import SubjectModel, SubjectRecord
from .reflection import AssociationKind, AssociationReflection
from .subject import resolve_subject, subject_name_for
from .suite import ModelAssertions, ModelSuite, generate_model_cases

__version__ = "0.1.0"
__license__ = "MIT"

__all__ = [
    "CaseSet",
    "GeneratedCase",
    "GeneratorSettings",
    "RecordCheckError",
    "SubjectResolutionError",
    "ReflectionError",
    "DuplicateCaseError",
    "require_presence",
    "require_uniqueness",
    "protect_on_update",
    "reject_values",
    "accept_values",
    "length_range",
    "value_range",
    "numeric_only",
    "has_many",
    "has_and_belongs_to_many",
    "has_one",
    "belongs_to",
    "SubjectModel",
    "SubjectRecord",
    "AssociationKind",
    "AssociationReflection",
    "resolve_subject",
    "subject_name_for",
    "ModelSuite",
    "ModelAssertions",
    "generate_model_cases",
]
