"""
Generated test cases and the case set they are registered into.

Generators only build cases. Registration is always an explicit call on a
CaseSet, so a suite can be assembled and inspected without a test runner.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Iterable, Iterator, Optional

from recordcheck.config import DEFAULT_SETTINGS, GeneratorSettings
from recordcheck.exceptions import DuplicateCaseError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GeneratedCase:
    """A named, zero-argument test body."""

    name: str
    body: Callable[[], None]
    subject: str = ""

    @property
    def qualified_name(self) -> str:
        """Name including the subject, e.g. ``User should require name to be set``."""
        if not self.subject:
            return self.name
        return f"{self.subject} should {self.name}"

    def renamed(self, name: str) -> "GeneratedCase":
        return GeneratedCase(name=name, body=self.body, subject=self.subject)

    def __call__(self) -> None:
        self.body()


class CaseSet:
    """
    Ordered collection of generated cases with unique names.

    Example:
        >>> cases = CaseSet()
        >>> cases.extend(require_presence(User, "name"))
        >>> [case.name for case in cases]
        ['require name to be set']
    """

    def __init__(self, settings: Optional[GeneratorSettings] = None):
        self.settings = settings or DEFAULT_SETTINGS
        self._cases: dict[str, GeneratedCase] = {}

    def add(self, case: GeneratedCase) -> GeneratedCase:
        """
        Register one case.

        Returns:
            The registered case, renamed if the suffix policy applied

        Raises:
            DuplicateCaseError: If the name is taken and the policy is ``error``
        """
        if case.name in self._cases:
            if self.settings.duplicate_names == "error":
                raise DuplicateCaseError(case.name)
            case = case.renamed(self._next_free_name(case.name))
            logger.debug("Renamed duplicate case to %r", case.name)
        self._cases[case.name] = case
        return case

    def extend(self, cases: Iterable[GeneratedCase]) -> "CaseSet":
        for case in cases:
            self.add(case)
        return self

    def _next_free_name(self, name: str) -> str:
        n = 2
        while f"{name} ({n})" in self._cases:
            n += 1
        return f"{name} ({n})"

    @property
    def names(self) -> list[str]:
        return list(self._cases)

    def __getitem__(self, name: str) -> GeneratedCase:
        return self._cases[name]

    def __contains__(self, name: object) -> bool:
        return name in self._cases

    def __iter__(self) -> Iterator[GeneratedCase]:
        return iter(list(self._cases.values()))

    def __len__(self) -> int:
        return len(self._cases)
