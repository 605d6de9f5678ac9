from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import current_identity, json_endpoint, parse_date_arg, request_data
from ..container import Container
from ..core.enums import Role
from ..core.exceptions import AuthorizationError
from .service import parse_meal_type


def register(app: Flask, container: Container) -> None:
    def _require_staff():
        identity = current_identity()
        if identity.role not in {Role.ADMIN, Role.COACH}:
            raise AuthorizationError("Meal service is restricted to staff")
        return identity

    @app.route("/api/meals/scans", methods=["POST"], endpoint="api_meal_scan")
    @json_endpoint
    def api_meal_scan():
        _require_staff()
        data = request_data()
        meal_type = parse_meal_type(data.get("meal_type") or data.get("mealType"))
        learner, scan = container.meal_recorder.record_meal_scan(data.get("code") or "", meal_type)
        return (
            jsonify(
                {
                    "success": True,
                    "message": f"{meal_type.value.title()} validated for {learner.full_name}",
                    "learner": learner.to_dict(),
                    "scan": scan.to_dict(),
                }
            ),
            201,
        )

    @app.route("/api/meals/scans/latest", methods=["GET"], endpoint="api_meal_history")
    @json_endpoint
    def api_meal_history():
        _require_staff()
        meal_type_s = request.args.get("meal_type")
        meal_type = parse_meal_type(meal_type_s) if meal_type_s and meal_type_s.upper() != "ALL" else None
        scans = container.meal_recorder.history(meal_date=parse_date_arg("date"), meal_type=meal_type)
        return jsonify(
            {
                "success": True,
                "scans": [s.to_dict() for s in scans],
                "counts": container.meal_recorder.count_by_type(scans),
            }
        )
