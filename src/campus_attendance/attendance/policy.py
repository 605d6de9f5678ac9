from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time
from zoneinfo import ZoneInfo

from ..actors.model import Actor
from ..common.datetime_utils import local_day, local_time_of_day, resolve_zone, to_local
from ..core.enums import JustificationStatus


@dataclass(frozen=True)
class ArrivalDecision:
    attendance_date: date
    is_late: bool
    status: JustificationStatus


@dataclass(frozen=True)
class LateCutoffPolicy:
    """Classify an arrival against the configured time-of-day cutoff.

    The cutoff is applied per calendar day in the actor's own zone, falling
    back to ``default_zone``. A scan exactly at the cutoff is on time.
    """

    cutoff: time
    default_zone: str

    def zone_for(self, actor: Actor) -> ZoneInfo:
        return resolve_zone(actor.timezone or self.default_zone)

    def localize(self, actor: Actor, moment: datetime) -> datetime:
        """Aware timestamp in the actor zone (naive input is read as local)."""
        return to_local(moment, self.zone_for(actor))

    def day_for(self, actor: Actor, moment: datetime) -> date:
        return local_day(moment, self.zone_for(actor))

    def is_late(self, actor: Actor, moment: datetime) -> bool:
        return local_time_of_day(moment, self.zone_for(actor)) > self.cutoff

    def decide_arrival(self, actor: Actor, moment: datetime) -> ArrivalDecision:
        late = self.is_late(actor, moment)
        return ArrivalDecision(
            attendance_date=self.day_for(actor, moment),
            is_late=late,
            status=JustificationStatus.TO_JUSTIFY if late else JustificationStatus.NONE,
        )
