from __future__ import annotations

import io
import threading
from dataclasses import replace
from datetime import date, datetime, time, timedelta
from typing import Optional
from zoneinfo import ZoneInfo

import pytest

from campus_attendance.actors.model import Actor, Identity
from campus_attendance.attendance.model import AttendanceRecord
from campus_attendance.container import EngineSettings, assemble
from campus_attendance.core.enums import ActorKind, JustificationStatus, MealType, Role
from campus_attendance.meals.model import MealScan

DAKAR = ZoneInfo("Africa/Dakar")
DAY = date(2025, 3, 10)


class InMemoryActorDirectory:
    def __init__(self, actors=()):
        self._by_id: dict[str, Actor] = {a.actor_id: a for a in actors}

    def add(self, actor: Actor) -> Actor:
        self._by_id[actor.actor_id] = actor
        return actor

    def find_by_code(self, code: str) -> Optional[Actor]:
        if code in self._by_id:
            return self._by_id[code]
        return next((a for a in self._by_id.values() if a.matricule == code), None)

    def get_by_id(self, actor_id: str) -> Optional[Actor]:
        return self._by_id.get(actor_id)

    def list_active(self, kind: ActorKind):
        return [a for a in self._by_id.values() if a.kind == kind and a.is_active]

    def list_group_members(self, group_id: str):
        return [a for a in self._by_id.values() if a.group_id == group_id]


class InMemoryAttendanceRepository:
    """Emulates the unique (actor_id, attendance_date) index and conditional UPDATEs."""

    def __init__(self):
        self._lock = threading.Lock()
        self._by_id: dict[int, AttendanceRecord] = {}
        self._by_key: dict[tuple[str, date], int] = {}
        self._next_id = 0
        self.inserts = 0

    def get(self, record_id: int) -> Optional[AttendanceRecord]:
        return self._by_id.get(int(record_id))

    def get_for_actor_and_date(self, actor_id: str, attendance_date: date) -> Optional[AttendanceRecord]:
        rid = self._by_key.get((actor_id, attendance_date))
        return self._by_id.get(rid) if rid else None

    def insert_if_absent(self, *, actor_id, actor_kind, attendance_date, is_present, is_late, status, scan_time=None, check_in=None):
        with self._lock:
            rid = self._by_key.get((actor_id, attendance_date))
            if rid:
                return self._by_id[rid], False
            self._next_id += 1
            self.inserts += 1
            record = AttendanceRecord(
                record_id=self._next_id,
                actor_id=actor_id,
                actor_kind=actor_kind,
                attendance_date=attendance_date,
                is_present=is_present,
                is_late=is_late,
                status=status,
                scan_time=scan_time,
                check_in=check_in,
            )
            self._by_id[record.record_id] = record
            self._by_key[(actor_id, attendance_date)] = record.record_id
            return record, True

    def put(self, record: AttendanceRecord) -> AttendanceRecord:
        """Seed a record directly (fixtures only)."""
        with self._lock:
            self._next_id = max(self._next_id, record.record_id)
            self._by_id[record.record_id] = record
            self._by_key[(record.actor_id, record.attendance_date)] = record.record_id
        return record

    def set_checkout(self, *, record_id, check_out):
        with self._lock:
            r = self._by_id.get(record_id)
            if not r or r.check_in is None or r.check_out is not None or check_out < r.check_in:
                return False
            self._by_id[record_id] = replace(r, check_out=check_out)
            return True

    def apply_submission(self, *, record_id, expected_status, justification, document):
        with self._lock:
            r = self._by_id.get(record_id)
            if not r or r.status != expected_status:
                return False
            self._by_id[record_id] = replace(
                r,
                status=JustificationStatus.PENDING,
                justification=justification,
                document=document,
                review_comment=None,
                reviewed_by=None,
                reviewed_at=None,
            )
            return True

    def apply_review(self, *, record_id, expected_status, new_status, review_comment, reviewed_by, reviewed_at):
        with self._lock:
            r = self._by_id.get(record_id)
            if not r or r.status != expected_status:
                return False
            self._by_id[record_id] = replace(
                r,
                status=new_status,
                review_comment=review_comment,
                reviewed_by=reviewed_by,
                reviewed_at=reviewed_at,
            )
            return True

    def list_for_actor(self, actor_id, *, start_date=None, end_date=None, limit=100):
        rows = [
            r
            for r in self._by_id.values()
            if r.actor_id == actor_id
            and (start_date is None or r.attendance_date >= start_date)
            and (end_date is None or r.attendance_date <= end_date)
        ]
        rows.sort(key=lambda r: r.attendance_date, reverse=True)
        return rows[:limit]

    def list_for_actors(self, actor_ids, *, start_date, end_date):
        ids = set(actor_ids)
        rows = [r for r in self._by_id.values() if r.actor_id in ids and start_date <= r.attendance_date <= end_date]
        rows.sort(key=lambda r: (r.attendance_date, r.actor_id))
        return rows

    def list_by_status(self, status, *, limit=200):
        return [r for r in self._by_id.values() if r.status == status][:limit]


class InMemoryMealScanRepository:
    def __init__(self):
        self._lock = threading.Lock()
        self._scans: dict[tuple[str, date, MealType], MealScan] = {}

    def insert_if_absent(self, *, learner_id, meal_date, meal_type, scanned_at):
        with self._lock:
            key = (learner_id, meal_date, meal_type)
            if key in self._scans:
                return self._scans[key], False
            scan = MealScan(
                scan_id=len(self._scans) + 1,
                learner_id=learner_id,
                meal_date=meal_date,
                meal_type=meal_type,
                scanned_at=scanned_at,
            )
            self._scans[key] = scan
            return scan, True

    def list_for_date(self, meal_date, *, meal_type=None):
        return [
            s for s in self._scans.values() if s.meal_date == meal_date and (meal_type is None or s.meal_type == meal_type)
        ]

    def list_latest(self, *, limit=100):
        return sorted(self._scans.values(), key=lambda s: s.scanned_at, reverse=True)[:limit]


class RecordingNotifier:
    def __init__(self):
        self.sent = []

    def notify(self, notification) -> None:
        self.sent.append(notification)


class MemoryDocumentStore:
    def __init__(self):
        self.saved: dict[str, bytes] = {}
        self._count = 0

    def save(self, data: bytes, *, filename: str, mime_type: str) -> str:
        self._count += 1
        ref = f"mem://{self._count}/{filename}"
        self.saved[ref] = data
        return ref

    def delete(self, storage_ref: str) -> None:
        self.saved.pop(storage_ref, None)


def make_actor(actor_id: str, kind: ActorKind, *, active: bool = True, timezone=None, group_id="P7") -> Actor:
    return Actor(
        actor_id=actor_id,
        matricule=f"MAT-{actor_id.upper()}",
        kind=kind,
        first_name=actor_id.title(),
        last_name="Diallo",
        is_active=active,
        timezone=timezone,
        group_id=group_id,
    )


def png_bytes(size=(4, 4)) -> bytes:
    from PIL import Image

    buf = io.BytesIO()
    Image.new("RGB", size, color=(200, 30, 30)).save(buf, format="PNG")
    return buf.getvalue()


@pytest.fixture
def at():
    """``at(8, 20)`` -> aware datetime on DAY in the default (Dakar) zone."""

    def _at(hour: int, minute: int = 0, second: int = 0, *, day: date = DAY) -> datetime:
        return datetime.combine(day, time(hour, minute, second), tzinfo=DAKAR)

    return _at


@pytest.fixture
def learner():
    return make_actor("awa", ActorKind.LEARNER)


@pytest.fixture
def coach():
    return make_actor("moussa", ActorKind.COACH, group_id=None)


@pytest.fixture
def directory(learner, coach):
    return InMemoryActorDirectory(
        [
            learner,
            coach,
            make_actor("fatou", ActorKind.LEARNER),
            make_actor("ibou", ActorKind.LEARNER, active=False),
            make_actor("admin", ActorKind.COACH, group_id=None),
        ]
    )


@pytest.fixture
def attendance_repo():
    return InMemoryAttendanceRepository()


@pytest.fixture
def meals_repo():
    return InMemoryMealScanRepository()


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def document_store():
    return MemoryDocumentStore()


@pytest.fixture
def settings():
    return EngineSettings(late_cutoff=time(8, 15), default_timezone="Africa/Dakar", checkout_min_gap=timedelta(seconds=60))


@pytest.fixture
def container(settings, directory, attendance_repo, meals_repo, notifier, document_store):
    return assemble(
        settings=settings,
        actors=directory,
        attendance_repo=attendance_repo,
        meals_repo=meals_repo,
        document_store=document_store,
        notifier=notifier,
    )


@pytest.fixture
def admin_identity():
    return Identity(actor_id="admin", role=Role.ADMIN)


@pytest.fixture
def learner_identity(learner):
    return Identity(actor_id=learner.actor_id, role=Role.LEARNER)


@pytest.fixture
def seed_record(attendance_repo, learner):
    """Seed a learner record with a given status (defaults: late, TO_JUSTIFY)."""

    def _seed(status=JustificationStatus.TO_JUSTIFY, *, is_present=True, is_late=True, day=DAY, actor=None):
        actor = actor or learner
        return attendance_repo.put(
            AttendanceRecord(
                record_id=attendance_repo._next_id + 1,
                actor_id=actor.actor_id,
                actor_kind=actor.kind,
                attendance_date=day,
                is_present=is_present,
                is_late=is_late,
                status=status,
                scan_time=datetime.combine(day, time(8, 20), tzinfo=DAKAR) if is_present else None,
            )
        )

    return _seed
