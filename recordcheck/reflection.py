"""
Association reflection types.

An ORM describes a declared relationship as a kind tag plus an options
mapping. recordcheck only reads these values; building them is up to the
model layer.
"""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping, Optional


class AssociationKind(str, Enum):
    """Kinds of association a model can declare."""

    HAS_MANY = "has_many"
    HAS_ONE = "has_one"
    BELONGS_TO = "belongs_to"
    HAS_AND_BELONGS_TO_MANY = "has_and_belongs_to_many"

    @property
    def label(self) -> str:
        """Human-readable form, e.g. ``has many``."""
        return self.value.replace("_", " ")


@dataclass(frozen=True)
class AssociationReflection:
    """
    Reflected metadata for one association.

    Example:
        >>> reflection = AssociationReflection(AssociationKind.HAS_MANY, {"through": "invoices"})
        >>> reflection.through
        'invoices'
    """

    kind: AssociationKind
    options: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        # Accept plain strings such as "has_many" from the model layer
        object.__setattr__(self, "kind", AssociationKind(self.kind))
        object.__setattr__(self, "options", MappingProxyType(dict(self.options)))

    @property
    def through(self) -> Optional[str]:
        """Name of the intermediate association, if any."""
        return self.options.get("through")

