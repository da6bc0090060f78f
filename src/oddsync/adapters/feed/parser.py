"""Decode the odds feed XML into a betting snapshot."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING
from xml.parsers.expat import ExpatError

import xmltodict
from pydantic import ValidationError

from oddsync.config.feed import FEED_CONTAINER_KEY
from oddsync.domain.errors import ParseError, SchemaError

from .schema import ATTR_PREFIX, TEXT_KEY, FeedEnvelope

if TYPE_CHECKING:
    from oddsync.domain.model import BettingSnapshot
    from oddsync.domain.ports.fetching import SnapshotParser

log = getLogger(__name__)


@dataclass(slots=True, frozen=True)
class ParsedFeed:
    """Candidates plus the feed metadata stripped from them."""

    candidates: dict[str, object]
    time: str | None = None
    attributes: dict[str, object] = field(default_factory=dict)


class OddsParser:
    """Structural parser: no numeric interpretation of candidate values."""

    def parse(self, raw: str | bytes) -> BettingSnapshot:
        return self.parse_feed(raw).candidates

    def parse_feed(self, raw: str | bytes) -> ParsedFeed:
        tree = _decode(raw)
        if not isinstance(tree, dict) or FEED_CONTAINER_KEY not in tree:
            raise SchemaError(f"Feed document has no {FEED_CONTAINER_KEY} container")

        try:
            envelope = FeedEnvelope.model_validate(tree)
        except ValidationError as exc:
            raise SchemaError(f"Unexpected {FEED_CONTAINER_KEY} structure: {exc}") from exc

        container = envelope.betting_data
        candidates = container.candidates
        log.debug("Parsed %s candidates from feed (time=%s)", len(candidates), container.time)
        return ParsedFeed(
            candidates=candidates,
            time=container.time,
            attributes=container.attributes,
        )


def _decode(raw: str | bytes) -> object:
    try:
        return xmltodict.parse(
            raw,
            attr_prefix=ATTR_PREFIX,
            cdata_key=TEXT_KEY,
            disable_entities=True,
        )
    except ExpatError as exc:
        raise ParseError(f"Malformed feed document: {exc}") from exc


if TYPE_CHECKING:
    _parser_check: SnapshotParser = OddsParser()
