"""
Shift reconstruction: pairs IN/OUT attendance events into worked shifts.

Runs over a snapshot of events on every request; nothing is cached or persisted.
"""
import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List

from app.models.attendance import EventKind

_log = logging.getLogger(__name__)

DEFAULT_OVERTIME_THRESHOLD_HOURS = 8.0


@dataclass(frozen=True)
class Shift:
    """One IN paired with the next OUT of the same employee."""
    employee_id: Any
    in_event: Any
    out_event: Any
    duration_hours: float
    is_overtime: bool


def _kind(event) -> EventKind:
    return EventKind(getattr(event.kind, "value", event.kind))


def reconstruct(
    events: Iterable,
    overtime_threshold_hours: float = DEFAULT_OVERTIME_THRESHOLD_HOURS,
) -> List[Shift]:
    """
    Reconstruct worked shifts from attendance events.

    Args:
        events: Objects exposing employee_id, timestamp and kind (IN/OUT).
            Timestamps must be mutually comparable.
        overtime_threshold_hours: Shifts strictly longer than this are overtime

    Returns:
        Shifts ordered most recent IN first

    Pairing policy:
        - A second IN before any OUT replaces the pending IN (missed clock-out);
          the older IN produces no shift.
        - An OUT with no pending IN is dropped.
        - A pairing whose duration is not positive is rejected and logged.
    """
    ordered = sorted(events, key=lambda e: e.timestamp)
    pending: Dict[Any, Any] = {}
    shifts: List[Shift] = []

    for event in ordered:
        kind = _kind(event)
        if kind == EventKind.IN:
            superseded = pending.get(event.employee_id)
            if superseded is not None:
                _log.debug(
                    "superseded IN dropped: employee_id=%s at=%s",
                    event.employee_id, superseded.timestamp,
                )
            pending[event.employee_id] = event
            continue

        in_event = pending.pop(event.employee_id, None)
        if in_event is None:
            _log.debug("orphan OUT dropped: employee_id=%s at=%s", event.employee_id, event.timestamp)
            continue

        duration_hours = (event.timestamp - in_event.timestamp).total_seconds() / 3600.0
        if duration_hours <= 0:
            _log.warning(
                "rejected non-positive shift: employee_id=%s in=%s out=%s",
                event.employee_id, in_event.timestamp, event.timestamp,
            )
            continue

        shifts.append(
            Shift(
                employee_id=event.employee_id,
                in_event=in_event,
                out_event=event,
                duration_hours=duration_hours,
                is_overtime=duration_hours > overtime_threshold_hours,
            )
        )

    shifts.sort(
        key=lambda s: (s.in_event.timestamp, s.out_event.timestamp, str(s.employee_id)),
        reverse=True,
    )
    return shifts
