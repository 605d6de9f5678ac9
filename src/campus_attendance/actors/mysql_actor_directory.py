from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import ActorKind
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Actor
from .repository import ActorDirectory

_COLUMNS = "actor_id, matricule, kind, first_name, last_name, is_active, timezone, group_id"


def _row_to_actor(r: dict) -> Actor:
    return Actor(
        actor_id=str(r["actor_id"]),
        matricule=str(r["matricule"]),
        kind=ActorKind(r["kind"]),
        first_name=r["first_name"],
        last_name=r["last_name"],
        is_active=bool(r["is_active"]),
        timezone=r.get("timezone"),
        group_id=r.get("group_id"),
    )


class MySQLActorDirectory(ActorDirectory):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def find_by_code(self, code: str) -> Optional[Actor]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM actors
                WHERE actor_id=%s OR matricule=%s
                ORDER BY actor_id=%s DESC
                LIMIT 1
                """,
                (code, code, code),
            )
            r = fetchone(cur)
            return _row_to_actor(r) if r else None

    def get_by_id(self, actor_id: str) -> Optional[Actor]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM actors WHERE actor_id=%s", (actor_id,))
            r = fetchone(cur)
            return _row_to_actor(r) if r else None

    def list_active(self, kind: ActorKind) -> Sequence[Actor]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM actors WHERE kind=%s AND is_active=1 ORDER BY matricule",
                (kind.value,),
            )
            return [_row_to_actor(r) for r in fetchall(cur)]

    def list_group_members(self, group_id: str) -> Sequence[Actor]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM actors WHERE group_id=%s ORDER BY matricule", (group_id,))
            return [_row_to_actor(r) for r in fetchall(cur)]
