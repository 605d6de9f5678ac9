from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import current_identity, json_endpoint, parse_date_arg
from ..container import Container


def register(app: Flask, container: Container) -> None:
    queries = container.attendance_queries

    def _records(records) -> list[dict]:
        return [r.to_dict() for r in records]

    @app.route("/api/attendance/me", methods=["GET"], endpoint="api_my_attendance")
    @json_endpoint
    def api_my_attendance():
        identity = current_identity()
        records = queries.my_attendance(identity)
        stats = container.stats_aggregator.aggregate(records)
        return jsonify({"success": True, "records": _records(records), "stats": stats.to_dict()})

    @app.route("/api/actors/<actor_id>/attendance", methods=["GET"], endpoint="api_actor_attendance")
    @json_endpoint
    def api_actor_attendance(actor_id: str):
        records = queries.for_actor(
            current_identity(),
            actor_id,
            start=parse_date_arg("start"),
            end=parse_date_arg("end"),
        )
        return jsonify({"success": True, "records": _records(records)})

    @app.route("/api/actors/<actor_id>/attendance-stats", methods=["GET"], endpoint="api_actor_attendance_stats")
    @json_endpoint
    def api_actor_attendance_stats(actor_id: str):
        stats = queries.stats_for_actor(
            current_identity(),
            actor_id,
            start=parse_date_arg("start"),
            end=parse_date_arg("end"),
        )
        return jsonify({"success": True, "stats": stats.to_dict()})

    @app.route("/api/groups/<group_id>/attendance", methods=["GET"], endpoint="api_group_attendance")
    @json_endpoint
    def api_group_attendance(group_id: str):
        records = queries.for_group(
            current_identity(),
            group_id,
            start=parse_date_arg("start"),
            end=parse_date_arg("end"),
        )
        by_actor = container.stats_aggregator.aggregate_by_actor(records)
        return jsonify(
            {
                "success": True,
                "records": _records(records),
                "stats": container.stats_aggregator.aggregate(records).to_dict(),
                "byActor": {actor_id: s.to_dict() for actor_id, s in by_actor.items()},
            }
        )

    @app.route("/api/attendance/pending", methods=["GET"], endpoint="api_pending_justifications")
    @json_endpoint
    def api_pending_justifications():
        return jsonify({"success": True, "records": _records(queries.pending_reviews(current_identity()))})

    @app.route("/api/coaches/attendance/today", methods=["GET"], endpoint="api_coaches_today")
    @json_endpoint
    def api_coaches_today():
        return jsonify({"success": True, "coaches": queries.coaches_today(current_identity())})
