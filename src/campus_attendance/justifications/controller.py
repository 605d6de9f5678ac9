from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import current_identity, json_endpoint, request_data
from ..common.validators import require_non_empty
from ..container import Container
from ..core.exceptions import DomainError
from .storage import ingest_document


def register(app: Flask, container: Container) -> None:
    workflow = container.justification_workflow

    @app.route("/api/attendance/<int:record_id>/justification", methods=["POST"], endpoint="api_submit_justification")
    @json_endpoint
    def api_submit_justification(record_id: int):
        identity = current_identity()
        data = request_data()
        text = require_non_empty(data.get("justification"), "Justification")

        # Refused submissions must not leave files behind.
        workflow.check_submittable(record_id, identity=identity)

        document = None
        upload = request.files.get("document")
        if upload is not None and upload.filename:
            document = ingest_document(
                upload.stream,
                filename=upload.filename,
                mime_type=upload.mimetype,
                store=container.document_store,
                max_bytes=container.settings.max_document_bytes,
            )

        try:
            record = workflow.submit_justification(
                record_id,
                text,
                document,
                identity=identity,
            )
        except DomainError:
            if document is not None:
                container.document_store.delete(document.storage_ref)
            raise
        return jsonify({"success": True, "record": record.to_dict()})

    @app.route("/api/attendance/<int:record_id>/review", methods=["POST"], endpoint="api_review_justification")
    @json_endpoint
    def api_review_justification(record_id: int):
        identity = current_identity()
        data = request_data()
        record = workflow.review(record_id, data.get("status") or "", data.get("comment"), identity=identity)
        return jsonify({"success": True, "record": record.to_dict()})
