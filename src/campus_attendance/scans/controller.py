from __future__ import annotations

from flask import Flask, Response, jsonify

from ..common.http import current_identity, json_endpoint, request_data
from ..container import Container
from ..core.enums import ActorKind, Role, ScanAction
from ..core.exceptions import AlreadyScannedError, AuthorizationError, NotFoundError, ValidationError
from .badge import render_badge_png

ACTION_MESSAGES = {
    (ActorKind.LEARNER, ScanAction.CHECKIN): "Presence recorded",
    (ActorKind.COACH, ScanAction.CHECKIN): "Check-in recorded",
    (ActorKind.COACH, ScanAction.CHECKOUT): "Check-out recorded",
}


def register(app: Flask, container: Container) -> None:
    @app.route("/api/scans", methods=["POST"], endpoint="api_scan")
    @json_endpoint
    def api_scan():
        """Scanning station endpoint; the physical QR capture happens client side."""

        identity = current_identity()
        if identity.role not in {Role.ADMIN, Role.COACH}:
            raise AuthorizationError("Only scanning staff can submit scans")

        code = request_data().get("code")
        if code is None:
            raise ValidationError("Missing scan code")

        result = container.scan_ingestor.ingest(code)
        body = {"success": True, **result.to_dict()}

        if result.already_scanned:
            notice = AlreadyScannedError(f"{result.actor.full_name} was already scanned today")
            body.update(kind=notice.kind, message=str(notice))
        else:
            body["message"] = ACTION_MESSAGES.get((result.actor.kind, result.action), "Scan recorded")
            if result.is_late and result.action == ScanAction.CHECKIN:
                body["message"] += " (late)"

        status = 201 if result.action != ScanAction.NONE else AlreadyScannedError.http_status
        return jsonify(body), status

    @app.route("/api/actors/<actor_id>/qrcode.png", methods=["GET"], endpoint="api_actor_badge")
    @json_endpoint
    def api_actor_badge(actor_id: str):
        identity = current_identity()
        if identity.actor_id != actor_id and not identity.is_admin:
            raise AuthorizationError("You can only download your own badge")

        actor = container.actors.get_by_id(actor_id)
        if actor is None:
            raise NotFoundError("Unknown actor")
        return Response(render_badge_png(actor), mimetype="image/png")
