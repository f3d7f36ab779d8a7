"""REST API blueprint."""

from __future__ import annotations

import uuid
from datetime import datetime

from flask import Blueprint, current_app, jsonify, request, send_file
from flask import session as cookie_session

from ..config import APP_CONFIG, STORAGE_PATHS
from ..core.exceptions import (
    ConversionError,
    NoDataToExportError,
    UnsupportedFormatError,
)
from ..services.kml_loader import file_extension
from ..session import ConversionSession
from ..utils.io import ensure_directory, safe_filename

api_bp = Blueprint("api", __name__)

_SESSION_KEY = "conversion"


@api_bp.errorhandler(ConversionError)
def conversion_error(exc: ConversionError):
    status = 400
    if isinstance(exc, NoDataToExportError):
        status = 409
    payload = {"error": str(exc)}
    if exc.details:
        payload["details"] = exc.details
    return jsonify(payload), status


@api_bp.post("/conversions")
def create_conversion():
    """Accept a KML/KMZ upload and queue its conversion."""

    uploaded = request.files.get("file")
    if uploaded is None or not uploaded.filename:
        return jsonify({"error": "file field is required"}), 400
    if file_extension(uploaded.filename) not in APP_CONFIG.allowed_extensions:
        raise UnsupportedFormatError(
            "Unsupported file format", details={"filename": uploaded.filename}
        )

    conversion_id = str(uuid.uuid4())
    upload_path = ensure_directory(STORAGE_PATHS.uploads / conversion_id) / (
        safe_filename(uploaded.filename) or "upload"
    )
    uploaded.save(upload_path)

    session = _session()
    session.select(uploaded.filename, ticket=conversion_id)
    _save_session(session)

    created_at = datetime.utcnow().isoformat()
    job = _queue().enqueue(
        "kml_csv.tasks.process_conversion",
        kwargs={
            "conversion_id": conversion_id,
            "upload_path": str(upload_path),
            "source_name": uploaded.filename,
        },
        job_id=conversion_id,
        meta={"created_at": created_at},
    )

    response = {
        "conversion_id": job.id,
        "status": job.get_status(refresh=False),
        "created_at": created_at,
    }
    return jsonify(response), 202


@api_bp.get("/conversions/<conversion_id>")
def conversion_status(conversion_id: str):
    job = _queue().fetch_job(conversion_id)
    if job is None:
        return jsonify({"error": "Conversion not found"}), 404

    payload: dict[str, object] = {
        "conversion_id": job.id,
        "status": job.get_status(refresh=True),
        "created_at": job.meta.get("created_at"),
    }

    if job.is_finished:
        _settle(job)
        payload["result"] = job.result or {}
        return jsonify(payload), 200
    if job.is_failed:
        _settle(job)
        payload["error"] = job.meta.get("error", job.exc_info)
        return jsonify(payload), 500

    payload["progress"] = job.meta.get("progress", 0)
    return jsonify(payload), 200


@api_bp.get("/conversions/<conversion_id>/csv")
def download_conversion(conversion_id: str):
    job = _queue().fetch_job(conversion_id)
    if job is None:
        return jsonify({"error": "Conversion not found"}), 404
    if not job.is_finished:
        return jsonify({"error": "Conversion is not finished"}), 409
    return _send_csv(conversion_id, job.result)


@api_bp.get("/export")
def export_current():
    """Download the CSV of the most recently completed conversion."""

    session = _session()
    if session.pending and session.latest:
        job = _queue().fetch_job(session.latest)
        if job is not None:
            _settle(job, session)

    conversion_id = session.export()
    job = _queue().fetch_job(conversion_id)
    if job is None or not job.is_finished:
        raise NoDataToExportError(
            "The converted data is no longer available. Please upload the file again."
        )
    return _send_csv(conversion_id, job.result)


def _settle(job, session: ConversionSession | None = None) -> None:
    session = session or _session()
    if job.is_finished:
        if job.id == session.latest and session.current != job.id:
            session.complete(job.id, job.id)
    elif job.is_failed:
        session.fail(job.id)
    _save_session(session)


def _send_csv(conversion_id: str, result: dict):
    csv_file = result["csv_file"]
    return send_file(
        (STORAGE_PATHS.outputs / conversion_id / csv_file).resolve(),
        mimetype="text/csv",
        as_attachment=True,
        download_name=result.get("download_name", csv_file),
    )


def _session() -> ConversionSession:
    return ConversionSession.from_dict(cookie_session.get(_SESSION_KEY))


def _save_session(session: ConversionSession) -> None:
    cookie_session[_SESSION_KEY] = session.to_dict()


def _queue():
    return current_app.extensions["rq"]["queue"]
