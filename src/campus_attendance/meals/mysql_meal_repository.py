from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Sequence

import mysql.connector

from ..common.datetime_utils import from_utc_naive, to_utc_naive
from ..core.enums import MealType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, is_duplicate_key
from .model import MealScan
from .repository import MealScanRepository


def _row_to_scan(r: dict) -> MealScan:
    return MealScan(
        scan_id=int(r["scan_id"]),
        learner_id=str(r["learner_id"]),
        meal_date=r["meal_date"],
        meal_type=MealType(r["meal_type"]),
        scanned_at=from_utc_naive(r["scanned_at"]),
    )


class MySQLMealScanRepository(MealScanRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _get(self, *, learner_id: str, meal_date: date, meal_type: MealType) -> Optional[MealScan]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT scan_id, learner_id, meal_date, meal_type, scanned_at
                FROM meal_scans
                WHERE learner_id=%s AND meal_date=%s AND meal_type=%s
                """,
                (learner_id, meal_date, meal_type.value),
            )
            r = fetchone(cur)
            return _row_to_scan(r) if r else None

    def insert_if_absent(
        self,
        *,
        learner_id: str,
        meal_date: date,
        meal_type: MealType,
        scanned_at: datetime,
    ) -> tuple[MealScan, bool]:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO meal_scans(learner_id, meal_date, meal_type, scanned_at)
                    VALUES(%s,%s,%s,%s)
                    """,
                    (learner_id, meal_date, meal_type.value, to_utc_naive(scanned_at)),
                )
                scan_id = int(cur.lastrowid)
        except mysql.connector.IntegrityError as exc:
            if not is_duplicate_key(exc):
                raise
            existing = self._get(learner_id=learner_id, meal_date=meal_date, meal_type=meal_type)
            if existing is None:
                raise
            return existing, False

        return (
            MealScan(
                scan_id=scan_id,
                learner_id=learner_id,
                meal_date=meal_date,
                meal_type=meal_type,
                scanned_at=scanned_at,
            ),
            True,
        )

    def list_for_date(self, meal_date: date, *, meal_type: Optional[MealType] = None) -> Sequence[MealScan]:
        sql = "SELECT scan_id, learner_id, meal_date, meal_type, scanned_at FROM meal_scans WHERE meal_date=%s"
        params: list[object] = [meal_date]
        if meal_type is not None:
            sql += " AND meal_type=%s"
            params.append(meal_type.value)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql + " ORDER BY scanned_at DESC", tuple(params))
            return [_row_to_scan(r) for r in fetchall(cur)]

    def list_latest(self, *, limit: int = 100) -> Sequence[MealScan]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT scan_id, learner_id, meal_date, meal_type, scanned_at
                FROM meal_scans
                ORDER BY scanned_at DESC
                LIMIT %s
                """,
                (int(limit),),
            )
            return [_row_to_scan(r) for r in fetchall(cur)]
