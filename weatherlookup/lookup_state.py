"""Lookup session record and its pure transition functions.

Every function takes the current LookupSession and returns the next one
without mutating anything. Handlers for network results take the sequence
number the request was issued under and return the session unchanged when a
newer request has started since.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional, Sequence, Tuple

from weatherlookup.data_sources import PlaceCandidate
from weatherlookup.domain import CurrentConditions, DailyForecast
from weatherlookup.errors import InvalidTransition, WeatherLookupError

AUTO_SELECT = "auto_select"
ALWAYS_CHOOSE = "always_choose"


class LookupState(str, Enum):
    """Where the current lookup is in its lifecycle."""
    IDLE = "idle"
    RESOLVING = "resolving"
    AWAITING_SELECTION = "awaiting_selection"
    FETCHING_FORECAST = "fetching_forecast"
    READY = "ready"
    FAILED = "failed"


@dataclass(frozen=True)
class LookupSession:
    """Snapshot of everything the rendering layer needs about the current lookup."""
    state: LookupState = LookupState.IDLE
    request_seq: int = 0
    query: Optional[str] = None
    candidates: Tuple[PlaceCandidate, ...] = ()
    place: Optional[PlaceCandidate] = None
    conditions: Optional[CurrentConditions] = None
    daily: Tuple[DailyForecast, ...] = ()
    error: Optional[str] = None
    error_type: Optional[str] = None

    @property
    def is_busy(self) -> bool:
        """True while a request is outstanding."""
        return self.state in (LookupState.RESOLVING, LookupState.FETCHING_FORECAST)


def is_current(session: LookupSession, seq: int) -> bool:
    """True if `seq` identifies the most recently initiated request."""
    return session.request_seq == seq


def begin_resolve(session: LookupSession, query: str) -> LookupSession:
    """Start resolving `query`; held candidates and the previously chosen place are discarded.

    The last conditions stay visible until the new lookup succeeds or fails.
    """
    return replace(
        session,
        state=LookupState.RESOLVING,
        request_seq=session.request_seq + 1,
        query=query,
        candidates=(),
        place=None,
        error=None,
        error_type=None,
    )


def reject(session: LookupSession, error: WeatherLookupError) -> LookupSession:
    """Fail immediately (no request issued), superseding anything in flight."""
    bumped = replace(session, request_seq=session.request_seq + 1, query=None)
    return fail(bumped, bumped.request_seq, error)


def receive_candidates(
    session: LookupSession,
    seq: int,
    candidates: Sequence[PlaceCandidate],
    policy: str = AUTO_SELECT,
) -> LookupSession:
    """Hold the candidates for selection, or go straight to the forecast for a lone match."""
    if not is_current(session, seq):
        return session
    if session.state is not LookupState.RESOLVING:
        raise InvalidTransition(f"Cannot accept candidates while {session.state.value}")
    if not candidates:
        raise ValueError("receive_candidates needs at least one candidate")

    if len(candidates) == 1 and policy == AUTO_SELECT:
        return replace(session, state=LookupState.FETCHING_FORECAST, candidates=(), place=candidates[0])
    return replace(session, state=LookupState.AWAITING_SELECTION, candidates=tuple(candidates))


def select_candidate(session: LookupSession, candidate: PlaceCandidate) -> LookupSession:
    """Pick one of the held candidates and start fetching its forecast as a new request."""
    if session.state is not LookupState.AWAITING_SELECTION:
        raise InvalidTransition(f"No candidates to choose from while {session.state.value}")
    if candidate not in session.candidates:
        raise ValueError(f"{candidate.label!r} is not one of the held candidates")
    return replace(
        session,
        state=LookupState.FETCHING_FORECAST,
        request_seq=session.request_seq + 1,
        candidates=(),
        place=candidate,
    )


def receive_forecast(
    session: LookupSession,
    seq: int,
    conditions: CurrentConditions,
    daily: Sequence[DailyForecast],
) -> LookupSession:
    """Publish the assembled result."""
    if not is_current(session, seq):
        return session
    if session.state is not LookupState.FETCHING_FORECAST:
        raise InvalidTransition(f"Cannot accept a forecast while {session.state.value}")
    return replace(
        session,
        state=LookupState.READY,
        conditions=conditions,
        daily=tuple(daily),
        error=None,
        error_type=None,
    )


def fail(session: LookupSession, seq: int, error: WeatherLookupError) -> LookupSession:
    """Record a failure and clear every piece of result data."""
    if not is_current(session, seq):
        return session
    return replace(
        session,
        state=LookupState.FAILED,
        candidates=(),
        place=None,
        conditions=None,
        daily=(),
        error=error.message,
        error_type=type(error).__name__,
    )
