"""Plain-text rendering of lookup sessions for terminals."""
from __future__ import annotations

import datetime as dt
from typing import List, Sequence

from weatherlookup.domain import CurrentConditions, DailyForecast
from weatherlookup.lookup_state import LookupSession, LookupState
from weatherlookup.units import UnitPreference


def _weekday(date_iso: str) -> str:
    try:
        return dt.date.fromisoformat(date_iso).strftime("%a")
    except ValueError:
        return date_iso


def render_conditions(conditions: CurrentConditions, units: UnitPreference) -> List[str]:
    humidity = "-" if conditions.humidity_percent is None else f"{conditions.humidity_percent:.0f}"
    return [
        conditions.place_label,
        f"{units.format(conditions.temperature_celsius)} | {conditions.description}",
        f"Humidity: {humidity}% | Wind: {conditions.wind_speed_kmh:g} km/h",
        f"Observed: {conditions.observed_at}",
    ]


def render_daily(daily: Sequence[DailyForecast], units: UnitPreference) -> List[str]:
    return [
        f"{_weekday(day.date):<4} {units.format_range(day.max_temp_celsius, day.min_temp_celsius):<12} {day.description}"
        for day in daily
    ]


def render_candidates(session: LookupSession) -> List[str]:
    lines = [f"Several places match '{session.query}':"]
    for idx, candidate in enumerate(session.candidates, start=1):
        lines.append(f"  {idx}. {candidate.detailed_label} ({candidate.latitude:.2f}, {candidate.longitude:.2f})")
    return lines


def render_session(session: LookupSession, units: UnitPreference) -> str:
    """Render whatever the session currently has to show."""
    if session.state is LookupState.FAILED:
        return f"Error: {session.error}"
    if session.state is LookupState.AWAITING_SELECTION:
        return "\n".join(render_candidates(session))
    if session.state is LookupState.READY and session.conditions is not None:
        lines = render_conditions(session.conditions, units)
        if session.daily:
            lines.append("")
            lines.extend(render_daily(session.daily, units))
        return "\n".join(lines)
    if session.is_busy:
        return "Searching..."
    return ""


def render_recent(labels: Sequence[str]) -> str:
    if not labels:
        return "No recent searches."
    return "\n".join(f"{idx}. {label}" for idx, label in enumerate(labels, start=1))
