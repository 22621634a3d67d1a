"""Translate free-text place names into ranked geocoding candidates."""
from __future__ import annotations

from typing import List

from weatherlookup import config
from weatherlookup.data_sources import PlaceCandidate, WeatherDataSource
from weatherlookup.errors import EmptyQuery, NotFound
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="place_resolver")


def normalize_query(query: str | None) -> str:
    """Trim surrounding whitespace; raise EmptyQuery if nothing is left."""
    trimmed = (query or "").strip()
    if not trimmed:
        raise EmptyQuery()
    return trimmed


class PlaceResolver:
    """Resolve a query to at most `max_candidates` places, in upstream relevance order."""

    def __init__(self, source: WeatherDataSource, settings: config.Settings | None = None) -> None:
        settings = settings or config.settings
        self.source = source
        self.max_candidates = settings.candidate_count
        self.language = settings.language
        self.timeout = settings.request_timeout_seconds

    def resolve(self, query: str) -> List[PlaceCandidate]:
        """Return candidates for `query`.

        Raises EmptyQuery before any request when the trimmed query is empty,
        NotFound when the service has no match and UpstreamError (from the
        data source) on transport or response-shape failures.
        """
        name = normalize_query(query)
        logger.debug("Resolving place", extra={"query": name})
        candidates = self.source.search_places(
            name,
            count=self.max_candidates,
            language=self.language,
            timeout=self.timeout,
        )
        if not candidates:
            logger.info("No geocoding match", extra={"query": name})
            raise NotFound()
        return list(candidates[: self.max_candidates])
