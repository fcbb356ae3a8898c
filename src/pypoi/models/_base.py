"""Base model for content bundle payloads.

Every bundle model inherits from :class:`PoiBaseModel` which provides:

* ``alias_generator=to_camel`` so camelCase keys written by the content
  tooling map to snake_case fields, while snake_case keys keep working.
* A ``model_validator(mode="before")`` that strips placeholder values
  (``""``, ``"--"``, NaN) so the field default is used.
* A ``raw`` dict that captures the original payload.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from pypoi._normalize import is_meaningful


class PoiBaseModel(BaseModel):
    """Base for bundle models.

    Handles:
    * camelCase → snake_case via ``alias_generator=to_camel``
    * placeholder values → dropped so the field default is used instead
    * stashes the original dict in ``raw``
    """

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        alias_generator=to_camel,
    )

    raw: dict[str, Any] = Field(default_factory=dict, exclude=True, repr=False)
    """Original payload dict."""

    @model_validator(mode="before")
    @classmethod
    def _clean_placeholders(cls, values: Any) -> Any:
        """Strip placeholder values and stash the raw payload."""
        if not isinstance(values, dict):
            return values
        original = dict(values)
        cleaned = {key: value for key, value in original.items() if is_meaningful(value)}
        # Keep an explicitly supplied raw= (kwargs construction).
        if "raw" not in values:
            cleaned["raw"] = original
        return cleaned
