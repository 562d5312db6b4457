"""
Generator settings.

Settings hold the conventions generated cases depend on: the suite name
suffix, the values used to provoke validation errors, and the error
vocabulary expected from the model layer.
"""

import os
from typing import Any, Literal, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field

ENV_PREFIX = "RECORDCHECK_"


class GeneratorSettings(BaseModel):
    """
    Conventions shared by all generators.

    Example:
        >>> settings = GeneratorSettings(duplicate_names="suffix")
        >>> settings.filler
        'x'
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    suite_suffix: str = Field("Test", min_length=1)
    filler: str = Field("x", min_length=1, max_length=1)
    protected_sentinel: int = 1
    non_numeric_token: str = "abcd"

    # Error vocabulary of the model layer
    blank_message: str = "can't be blank"
    taken_message: str = "has already been taken"
    not_a_number_message: str = "is not a number"
    invalid_pattern: str = "invalid"
    too_short_pattern: str = "short"
    too_long_pattern: str = "long"

    duplicate_names: Literal["error", "suffix"] = "error"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None, **overrides: Any) -> "GeneratorSettings":
        """
        Build settings from ``RECORDCHECK_*`` environment variables.

        ``RECORDCHECK_DUPLICATE_NAMES=suffix`` sets ``duplicate_names``, and so
        on for every field. Keyword overrides win over the environment.
        """
        environ = os.environ if environ is None else environ
        values: dict[str, Any] = {}
        for name in cls.model_fields:
            env_value = environ.get(f"{ENV_PREFIX}{name.upper()}")
            if env_value is not None:
                values[name] = env_value
        values.update(overrides)
        return cls(**values)


DEFAULT_SETTINGS = GeneratorSettings()
