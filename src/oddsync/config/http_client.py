"""Configuration types for outbound HTTP clients."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping


@dataclass(slots=True, frozen=True)
class HttpClientConfig:
    """Transport settings for one upstream.

    ``timeout_seconds=None`` keeps the httpx default timeout.
    """

    name: str
    timeout_seconds: float | None = None
    default_headers: Mapping[str, str] | None = None
