"""Lookup orchestration: resolve a place, disambiguate, fetch its forecast, publish.

The orchestrator holds the only mutable reference to the LookupSession and
moves it forward with the pure transitions in `lookup_state`. Network calls
run in worker threads via asyncio.to_thread, so the event loop stays free
while a request is outstanding. Each request is tagged with the session's
sequence number; results that come back after a newer request started are
dropped.
"""
from __future__ import annotations

import asyncio
from typing import Callable, List

from weatherlookup import config, lookup_state
from weatherlookup.data_sources import PlaceCandidate, WeatherDataSource, build_data_source
from weatherlookup.errors import EmptyQuery, WeatherLookupError
from weatherlookup.forecast_service import ForecastFetcher, assemble_conditions
from weatherlookup.lookup_state import LookupSession, LookupState
from weatherlookup.place_resolver import PlaceResolver, normalize_query
from weatherlookup.recent_searches import RecentSearchStore
from weatherlookup.storage import build_storage
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="orchestrator")

SessionListener = Callable[[LookupSession], None]


class LookupOrchestrator:
    """Owns one lookup state machine for the lifetime of a session."""

    def __init__(
        self,
        resolver: PlaceResolver,
        fetcher: ForecastFetcher,
        recent: RecentSearchStore,
        *,
        disambiguation: str = lookup_state.AUTO_SELECT,
    ) -> None:
        if disambiguation not in (lookup_state.AUTO_SELECT, lookup_state.ALWAYS_CHOOSE):
            raise ValueError(f"Unknown disambiguation policy '{disambiguation}'")
        self.resolver = resolver
        self.fetcher = fetcher
        self.recent = recent
        self.disambiguation = disambiguation
        self._session = LookupSession()
        self._listeners: List[SessionListener] = []

    @classmethod
    def from_settings(
        cls,
        settings: config.Settings | None = None,
        *,
        source: WeatherDataSource | None = None,
        recent: RecentSearchStore | None = None,
    ) -> "LookupOrchestrator":
        """Wire up resolver, fetcher and recent-search store from configuration."""
        settings = settings or config.settings
        source = source or build_data_source(settings)
        if recent is None:
            recent = RecentSearchStore(
                build_storage(settings),
                key=settings.recent_storage_key,
                limit=settings.recent_limit,
            )
        return cls(
            PlaceResolver(source, settings),
            ForecastFetcher(source, settings),
            recent,
            disambiguation=settings.disambiguation,
        )

    @property
    def session(self) -> LookupSession:
        return self._session

    def subscribe(self, listener: SessionListener) -> Callable[[], None]:
        """Call `listener` with every new session snapshot; returns an unsubscribe function."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def _transition(self, new: LookupSession) -> None:
        if new is self._session:
            return
        previous = self._session
        self._session = new
        if previous.state is not new.state:
            logger.debug(
                "Lookup state changed",
                extra={"from": previous.state.value, "to": new.state.value, "seq": new.request_seq},
            )
        for listener in list(self._listeners):
            listener(new)

    async def submit(self, query: str) -> LookupSession:
        """Start a new lookup, superseding whatever was in progress."""
        try:
            name = normalize_query(query)
        except EmptyQuery as exc:
            self._transition(lookup_state.reject(self._session, exc))
            return self._session

        self._transition(lookup_state.begin_resolve(self._session, name))
        seq = self._session.request_seq
        logger.info("Lookup started", extra={"query": name, "seq": seq})

        try:
            candidates = await asyncio.to_thread(self.resolver.resolve, name)
        except WeatherLookupError as exc:
            self._fail(seq, exc)
            return self._session

        if not lookup_state.is_current(self._session, seq):
            logger.debug("Discarding superseded geocoding result", extra={"query": name, "seq": seq})
            return self._session

        self._transition(lookup_state.receive_candidates(self._session, seq, candidates, self.disambiguation))
        if self._session.state is LookupState.FETCHING_FORECAST:
            await self._fetch_forecast(seq, self._session.place)
        return self._session

    async def select_candidate(self, candidate: PlaceCandidate) -> LookupSession:
        """Fetch the forecast for one of the held candidates."""
        self._transition(lookup_state.select_candidate(self._session, candidate))
        await self._fetch_forecast(self._session.request_seq, candidate)
        return self._session

    async def search_recent(self, label: str) -> LookupSession:
        """Look up a label from the recent-search list again."""
        return await self.submit(label)

    def clear_recent(self) -> None:
        self.recent.clear()

    async def _fetch_forecast(self, seq: int, place: PlaceCandidate) -> None:
        try:
            bundle = await asyncio.to_thread(self.fetcher.fetch, place.latitude, place.longitude)
        except WeatherLookupError as exc:
            self._fail(seq, exc)
            return

        if not lookup_state.is_current(self._session, seq):
            logger.debug("Discarding superseded forecast", extra={"place": place.label, "seq": seq})
            return

        current, daily = assemble_conditions(place, bundle)
        # Listeners reacting to Ready must already see the updated recent list.
        self.recent.record(current.place_label)
        self._transition(lookup_state.receive_forecast(self._session, seq, current, daily))
        logger.info("Lookup ready", extra={"place": current.place_label, "seq": seq})

    def _fail(self, seq: int, error: WeatherLookupError) -> None:
        if not lookup_state.is_current(self._session, seq):
            logger.debug("Discarding superseded failure", extra={"error": error.message, "seq": seq})
            return
        logger.info("Lookup failed", extra={"error_type": type(error).__name__, "error": error.message, "seq": seq})
        self._transition(lookup_state.fail(self._session, seq, error))
