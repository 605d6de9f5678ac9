from __future__ import annotations

import click
from flask import Flask

from ..common.datetime_utils import local_day, now_utc, parse_iso_date, resolve_zone
from ..container import Container
from ..core.enums import ActorKind


def register(app: Flask, container: Container) -> None:
    @app.cli.command("sweep-absences")
    @click.option("--date", "day", default=None, help="Day to sweep (YYYY-MM-DD), defaults to today.")
    @click.option("--include-coaches", is_flag=True, help="Also mark unscanned active coaches absent.")
    def sweep_absences(day: str | None, include_coaches: bool) -> None:
        """Create absence records for active actors who never scanned that day."""

        if day:
            target = parse_iso_date(day)
        else:
            target = local_day(now_utc(), resolve_zone(container.settings.default_timezone))
        kinds = (ActorKind.LEARNER, ActorKind.COACH) if include_coaches else (ActorKind.LEARNER,)
        report = container.absence_sweep.run(target, kinds=kinds)
        click.echo(f"{report.attendance_date}: {report.marked_absent} absent of {report.scanned} checked")
