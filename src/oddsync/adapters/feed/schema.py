"""Pydantic models describing the decoded odds feed document.

The XML is decoded with ``xmltodict``: attributes appear under ``@``-prefixed
keys and element text under ``#text`` whenever an element also has attributes.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Final, cast

from pydantic import BaseModel, ConfigDict, Field, field_validator

from oddsync.config.feed import FEED_CONTAINER_KEY, FEED_TIME_KEY

ATTR_PREFIX: Final[str] = "@"
TEXT_KEY: Final[str] = "#text"


def element_text(value: object) -> object:
    """Collapse a decoded leaf element to its text, leaving structured values alone."""

    if value is None:
        return ""
    if isinstance(value, Mapping):
        mapping_value = cast(Mapping[str, object], value)
        content_keys = [key for key in mapping_value if not key.startswith(ATTR_PREFIX)]
        if not content_keys:
            return ""
        if content_keys == [TEXT_KEY]:
            return mapping_value[TEXT_KEY]
    return value


class BettingDataPayload(BaseModel):
    """The ``BettingData`` container: metadata plus one child per candidate."""

    model_config = ConfigDict(extra="allow", frozen=True)

    time: str | None = Field(default=None, alias=FEED_TIME_KEY)

    @field_validator("time", mode="before")
    @classmethod
    def _collapse_time(cls, value: object) -> str | None:
        # Time is metadata whatever its shape; only plain text survives for display.
        text = None if value is None else element_text(value)
        return text if isinstance(text, str) else None

    @property
    def attributes(self) -> dict[str, object]:
        extra = self.model_extra or {}
        return {
            key.removeprefix(ATTR_PREFIX): value
            for key, value in extra.items()
            if key.startswith(ATTR_PREFIX)
        }

    @property
    def candidates(self) -> dict[str, object]:
        extra = self.model_extra or {}
        return {
            key: element_text(value)
            for key, value in extra.items()
            if not key.startswith(ATTR_PREFIX) and key != TEXT_KEY
        }


class FeedEnvelope(BaseModel):
    """Root of the decoded document."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    betting_data: BettingDataPayload = Field(alias=FEED_CONTAINER_KEY)

    @field_validator("betting_data", mode="before")
    @classmethod
    def _empty_container(cls, value: object) -> object:
        # <BettingData/> decodes to None: a container without candidates.
        return {} if value is None else value
