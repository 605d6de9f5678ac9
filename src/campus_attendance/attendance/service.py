from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Optional, Sequence

from ..actors.model import Identity
from ..actors.repository import ActorDirectory
from ..common.datetime_utils import now_utc
from ..core.constants import DEFAULT_HISTORY_LIMIT, DEFAULT_REPORT_DAYS
from ..core.enums import ActorKind, JustificationStatus, Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..stats.aggregator import AttendanceStats, AttendanceStatsAggregator
from .model import AttendanceRecord
from .policy import LateCutoffPolicy
from .repository import AttendanceRepository


class AttendanceQueryService:
    """Read side: records by actor, by date range, by group, and review queues."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        actors: ActorDirectory,
        policy: LateCutoffPolicy,
        *,
        aggregator: AttendanceStatsAggregator | None = None,
    ):
        self._attendance = attendance
        self._actors = actors
        self._policy = policy
        self._aggregator = aggregator or AttendanceStatsAggregator()

    @staticmethod
    def _range(start: Optional[date], end: Optional[date], *, today: date) -> tuple[date, date]:
        end = end or today
        start = start or end - timedelta(days=DEFAULT_REPORT_DAYS - 1)
        if end < start:
            raise ValidationError("End date must be on or after start date")
        return start, end

    @staticmethod
    def _ensure_can_read(identity: Identity, actor_id: str) -> None:
        if identity.role in {Role.ADMIN, Role.COACH}:
            return
        if identity.actor_id != actor_id:
            raise AuthorizationError("You can only read your own attendance")

    def my_attendance(self, identity: Identity, *, limit: int = DEFAULT_HISTORY_LIMIT) -> Sequence[AttendanceRecord]:
        return self._attendance.list_for_actor(identity.actor_id, limit=limit)

    def for_actor(
        self,
        identity: Identity,
        actor_id: str,
        *,
        start: Optional[date] = None,
        end: Optional[date] = None,
        today: Optional[date] = None,
    ) -> Sequence[AttendanceRecord]:
        self._ensure_can_read(identity, actor_id)
        if start is None and end is None:
            return self._attendance.list_for_actor(actor_id, limit=DEFAULT_HISTORY_LIMIT)
        start, end = self._range(start, end, today=today or date.today())
        return self._attendance.list_for_actor(actor_id, start_date=start, end_date=end, limit=(end - start).days + 1)

    def for_group(
        self,
        identity: Identity,
        group_id: str,
        *,
        start: Optional[date] = None,
        end: Optional[date] = None,
        today: Optional[date] = None,
    ) -> Sequence[AttendanceRecord]:
        if identity.role not in {Role.ADMIN, Role.COACH}:
            raise AuthorizationError("Group attendance is restricted to staff")
        members = self._actors.list_group_members(group_id)
        start, end = self._range(start, end, today=today or date.today())
        return self._attendance.list_for_actors([m.actor_id for m in members], start_date=start, end_date=end)

    def pending_reviews(self, identity: Identity, *, limit: int = 200) -> Sequence[AttendanceRecord]:
        if not identity.is_admin:
            raise AuthorizationError("Only administrators review justifications")
        return self._attendance.list_by_status(JustificationStatus.PENDING, limit=limit)

    def coaches_today(self, identity: Identity, *, now: Optional[datetime] = None) -> list[dict]:
        """Every active coach with today's record (or none) and toggle state."""

        if not identity.is_admin:
            raise AuthorizationError("Only administrators see the coach board")
        now = now or now_utc()
        rows = []
        for coach in self._actors.list_active(ActorKind.COACH):
            record = self._attendance.get_for_actor_and_date(coach.actor_id, self._policy.day_for(coach, now))
            rows.append(
                {
                    "coach": coach.to_dict(),
                    "record": record.to_dict() if record else None,
                    "state": record.presence_state.value if record else "NOT_ARRIVED",
                }
            )
        return rows

    def stats_for_actor(
        self,
        identity: Identity,
        actor_id: str,
        *,
        start: Optional[date] = None,
        end: Optional[date] = None,
        today: Optional[date] = None,
    ) -> AttendanceStats:
        actor = self._actors.get_by_id(actor_id)
        if actor is None:
            raise NotFoundError("Unknown actor")
        records = self.for_actor(identity, actor_id, start=start, end=end, today=today)
        return self._aggregator.aggregate(records, include_coach=actor.kind == ActorKind.COACH)
