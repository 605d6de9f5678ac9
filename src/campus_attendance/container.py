from __future__ import annotations

from dataclasses import dataclass
from datetime import time, timedelta
from typing import Optional

from .actors.mysql_actor_directory import MySQLActorDirectory
from .actors.repository import ActorDirectory
from .attendance.checkinout import CheckInOutRecorder
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.policy import LateCutoffPolicy
from .attendance.recorder import AttendanceRecorder
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceQueryService
from .attendance.sweep import AbsenceSweep
from .common.datetime_utils import parse_time_of_day, resolve_zone
from .core import constants
from .database.connection import DBConfig, DatabaseConnection
from .justifications.notifier import Notifier
from .justifications.service import JustificationWorkflow
from .justifications.storage import DocumentStore, LocalDocumentStore
from .meals.mysql_meal_repository import MySQLMealScanRepository
from .meals.repository import MealScanRepository
from .meals.service import MealScanRecorder
from .scans.service import ScanIngestor
from .stats.aggregator import AttendanceStatsAggregator


@dataclass(frozen=True)
class EngineSettings:
    late_cutoff: time = constants.DEFAULT_LATE_CUTOFF
    default_timezone: str = constants.DEFAULT_TIMEZONE
    checkout_min_gap: timedelta = timedelta(seconds=constants.DEFAULT_CHECKOUT_MIN_GAP_SECONDS)
    max_document_bytes: int = constants.DEFAULT_MAX_DOCUMENT_BYTES
    upload_folder: str = "uploads/justifications"

    @classmethod
    def from_module(cls, settings) -> "EngineSettings":
        cutoff = getattr(settings, "LATE_CUTOFF", None)
        zone = str(getattr(settings, "DEFAULT_TIMEZONE", constants.DEFAULT_TIMEZONE))
        resolve_zone(zone)  # fail fast on typos
        return cls(
            late_cutoff=parse_time_of_day(cutoff) if cutoff else constants.DEFAULT_LATE_CUTOFF,
            default_timezone=zone,
            checkout_min_gap=timedelta(
                seconds=int(getattr(settings, "CHECKOUT_MIN_GAP_SECONDS", constants.DEFAULT_CHECKOUT_MIN_GAP_SECONDS))
            ),
            max_document_bytes=int(getattr(settings, "MAX_DOCUMENT_BYTES", constants.DEFAULT_MAX_DOCUMENT_BYTES)),
            upload_folder=str(getattr(settings, "UPLOAD_FOLDER", "uploads/justifications")),
        )


@dataclass(frozen=True)
class Container:
    settings: EngineSettings

    actors: ActorDirectory
    attendance_repo: AttendanceRepository
    meals_repo: MealScanRepository
    document_store: DocumentStore

    policy: LateCutoffPolicy
    attendance_recorder: AttendanceRecorder
    checkinout_recorder: CheckInOutRecorder
    scan_ingestor: ScanIngestor
    meal_recorder: MealScanRecorder
    justification_workflow: JustificationWorkflow
    stats_aggregator: AttendanceStatsAggregator
    attendance_queries: AttendanceQueryService
    absence_sweep: AbsenceSweep


def assemble(
    *,
    settings: EngineSettings,
    actors: ActorDirectory,
    attendance_repo: AttendanceRepository,
    meals_repo: MealScanRepository,
    document_store: Optional[DocumentStore] = None,
    notifier: Optional[Notifier] = None,
) -> Container:
    """Wire services over any repository implementations (MySQL or in-memory)."""

    policy = LateCutoffPolicy(cutoff=settings.late_cutoff, default_zone=settings.default_timezone)
    attendance_recorder = AttendanceRecorder(attendance_repo, policy)
    checkinout_recorder = CheckInOutRecorder(attendance_repo, policy, min_gap=settings.checkout_min_gap)
    scan_ingestor = ScanIngestor(actors, attendance_recorder, checkinout_recorder)
    stats_aggregator = AttendanceStatsAggregator()

    return Container(
        settings=settings,
        actors=actors,
        attendance_repo=attendance_repo,
        meals_repo=meals_repo,
        document_store=document_store or LocalDocumentStore(settings.upload_folder),
        policy=policy,
        attendance_recorder=attendance_recorder,
        checkinout_recorder=checkinout_recorder,
        scan_ingestor=scan_ingestor,
        meal_recorder=MealScanRecorder(meals_repo, policy, scan_ingestor),
        justification_workflow=JustificationWorkflow(attendance_repo, notifier),
        stats_aggregator=stats_aggregator,
        attendance_queries=AttendanceQueryService(attendance_repo, actors, policy, aggregator=stats_aggregator),
        absence_sweep=AbsenceSweep(actors, attendance_recorder),
    )


def build_container(*, db_config: dict, settings: EngineSettings, notifier: Optional[Notifier] = None) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_mapping(db_config))
    return assemble(
        settings=settings,
        actors=MySQLActorDirectory(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        meals_repo=MySQLMealScanRepository(conn),
        notifier=notifier,
    )
