"""
Subject resolution from a suite name.

``UserTest`` (or the pytest-style ``TestUser``) names a suite for ``User``.
Generators take the model explicitly; this module exists for suites that
rely on the naming convention instead. ModelAssertions subclasses only
accept the ``TestUser`` form, the one pytest collects by default.
"""

import importlib
import logging
from typing import Any, Mapping, Optional

from recordcheck.config import DEFAULT_SETTINGS, GeneratorSettings
from recordcheck.exceptions import SubjectResolutionError

logger = logging.getLogger(__name__)


def subject_name_for(suite_name: str, settings: Optional[GeneratorSettings] = None) -> str:
    """
    Strip the suite marker from a suite name.

    A trailing suffix is preferred; a leading one is accepted for pytest
    naming. Names without either marker are returned unchanged.

    Example:
        >>> subject_name_for("UserTest")
        'User'
        >>> subject_name_for("TestLineItem")
        'LineItem'
    """
    suffix = (settings or DEFAULT_SETTINGS).suite_suffix
    if suite_name.endswith(suffix) and len(suite_name) > len(suffix):
        return suite_name[: -len(suffix)]
    if suite_name.startswith(suffix) and len(suite_name) > len(suffix):
        return suite_name[len(suffix):]
    return suite_name


def resolve_subject(
    suite_name: str,
    namespace: Optional[Mapping[str, Any]] = None,
    settings: Optional[GeneratorSettings] = None,
) -> type:
    """
    Resolve a suite name to its subject class.

    The stripped name is looked up in ``namespace`` first. A dotted name
    (``app.models.User``) is imported instead.

    Raises:
        SubjectResolutionError: If no class is found under that name
        ImportError: If the named module exists but fails to import
    """
    candidate = subject_name_for(suite_name, settings)
    subject = None
    if namespace is not None:
        subject = namespace.get(candidate)
    if subject is None and "." in candidate:
        subject = _import_dotted(candidate)
    if not isinstance(subject, type):
        raise SubjectResolutionError(suite_name, candidate)
    logger.debug("Resolved suite %s to subject %s", suite_name, subject.__qualname__)
    return subject


def _import_dotted(path: str) -> Optional[Any]:
    module_name, _, attr = path.rpartition(".")
    try:
        module = importlib.import_module(module_name)
    except ModuleNotFoundError as exc:
        # Only the named module (or a parent package) being absent means
        # "no such class"; errors raised while it loads propagate
        if exc.name is None or not (module_name == exc.name or module_name.startswith(exc.name + ".")):
            raise
        return None
    return getattr(module, attr, None)
