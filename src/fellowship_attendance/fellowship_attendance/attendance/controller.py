from __future__ import annotations

import io
import logging
from functools import wraps

from flask import Flask, jsonify, request, send_file, session

from ..common.validators import optional_float, optional_text
from ..container import Container
from ..core.constants import DEFAULT_GEOFENCE_RADIUS_METERS
from ..core.enums import Role
from ..core.exceptions import (
    AuthorizationError,
    DomainError,
    NotFoundError,
    StaleRecordError,
    ValidationError,
)
from ..geofence.validator import haversine_distance, is_within_radius
from ..reports.export import session_report_to_csv
from ..reports.serializers import cohort_stats_to_dict, session_report_to_dict
from .model import CheckInContext
from .serializers import attendance_to_dict, check_in_to_dict

logger = logging.getLogger(__name__)


def _status_for(exc: DomainError) -> int:
    if isinstance(exc, NotFoundError):
        return 404
    if isinstance(exc, StaleRecordError):
        return 409
    if isinstance(exc, AuthorizationError):
        return 403
    # Conflict, Forbidden, RenderError, Validation
    return 400


def register(app: Flask, container: Container) -> None:
    def _error(message: str, status: int):
        return jsonify({"success": False, "message": message}), status

    def json_api(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            try:
                return view(*args, **kwargs)
            except DomainError as e:
                return _error(str(e), _status_for(e))
            except Exception:
                logger.exception("unhandled error in %s", request.path)
                return _error("Internal error while processing attendance", 500)

        return wrapper

    def login_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if "user_id" not in session:
                return _error("Please sign in to continue", 401)
            return view(*args, **kwargs)

        return wrapper

    def roles_required(*roles: Role):
        allowed = {r.value for r in roles}

        def decorator(view):
            @wraps(view)
            def wrapper(*args, **kwargs):
                if "user_id" not in session:
                    return _error("Please sign in to continue", 401)
                if session.get("role") not in allowed:
                    return _error("You do not have permission to perform this action", 403)
                return view(*args, **kwargs)

            return wrapper

        return decorator

    def _current_user_id() -> str:
        return str(session["user_id"])

    def _body() -> dict:
        data = request.get_json(silent=True)
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ValidationError("Request body must be a JSON object")
        return data

    @app.route("/attendance/session/<session_id>/qr-code", methods=["GET"], endpoint="attendance_qr_code")
    @roles_required(Role.FACILITATOR, Role.ADMIN)
    @json_api
    def qr_code(session_id: str):
        token = container.token_issuer.issue(session_id)
        if request.args.get("format") == "png":
            return send_file(io.BytesIO(token.image), mimetype=token.mime_type)
        return jsonify({"qrCode": token.as_data_url(), "checkInUrl": token.url})

    @app.route("/attendance/check-in/<session_id>", methods=["POST"], endpoint="attendance_check_in")
    @login_required
    @json_api
    def check_in(session_id: str):
        data = _body()
        context = CheckInContext(
            latitude=optional_float(data.get("latitude"), "latitude"),
            longitude=optional_float(data.get("longitude"), "longitude"),
            ip_address=optional_text(data.get("ipAddress"), "ipAddress", max_len=64) or request.remote_addr,
            user_agent=optional_text(data.get("userAgent"), "userAgent", max_len=512)
            or request.headers.get("User-Agent"),
        )
        result = container.attendance_ledger.check_in(_current_user_id(), session_id, context)
        return jsonify(check_in_to_dict(result)), 201

    @app.route("/attendance/check-out/<session_id>", methods=["POST"], endpoint="attendance_check_out")
    @login_required
    @json_api
    def check_out(session_id: str):
        view = container.attendance_ledger.check_out(_current_user_id(), session_id)
        return jsonify(attendance_to_dict(view))

    @app.route("/attendance/session/<session_id>/me", methods=["GET"], endpoint="attendance_my_record")
    @login_required
    @json_api
    def my_record(session_id: str):
        view = container.attendance_ledger.get_user_attendance(_current_user_id(), session_id)
        return jsonify(attendance_to_dict(view))

    @app.route("/attendance/me", methods=["GET"], endpoint="attendance_my_history")
    @login_required
    @json_api
    def my_history():
        cohort_id = request.args.get("cohortId") or None
        views = container.attendance_ledger.get_user_attendance_history(_current_user_id(), cohort_id)
        return jsonify([attendance_to_dict(v) for v in views])

    @app.route("/attendance/session/<session_id>/report", methods=["GET"], endpoint="attendance_session_report")
    @roles_required(Role.FACILITATOR, Role.ADMIN)
    @json_api
    def session_report(session_id: str):
        report = container.session_reports.build(session_id)
        return jsonify(session_report_to_dict(report))

    @app.route(
        "/attendance/session/<session_id>/report.csv",
        methods=["GET"],
        endpoint="attendance_session_report_csv",
    )
    @roles_required(Role.FACILITATOR, Role.ADMIN)
    @json_api
    def session_report_csv(session_id: str):
        report = container.session_reports.build(session_id)
        return app.response_class(
            session_report_to_csv(report),
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename=attendance_{session_id}.csv"},
        )

    @app.route("/attendance/cohort/<cohort_id>/stats", methods=["GET"], endpoint="attendance_cohort_stats")
    @roles_required(Role.FACILITATOR, Role.ADMIN)
    @json_api
    def cohort_stats(cohort_id: str):
        stats = container.cohort_stats.build(cohort_id)
        return jsonify(cohort_stats_to_dict(stats))

    @app.route(
        "/attendance/session/<session_id>/user/<user_id>/excuse",
        methods=["PATCH"],
        endpoint="attendance_mark_excused",
    )
    @roles_required(Role.FACILITATOR, Role.ADMIN)
    @json_api
    def mark_excused(session_id: str, user_id: str):
        data = _body()
        notes = None
        if "notes" in data:
            # Explicit empty notes clear the stored ones.
            notes = optional_text(data["notes"], "notes", max_len=2000) or ""
        view = container.attendance_ledger.mark_excused(session_id, user_id, notes)
        return jsonify(attendance_to_dict(view))

    @app.route("/attendance/session/<session_id>/geofence", methods=["POST"], endpoint="attendance_geofence")
    @login_required
    @json_api
    def geofence(session_id: str):
        """Advisory distance check; does not record anything."""
        data = _body()
        latitude = optional_float(data.get("latitude"), "latitude")
        longitude = optional_float(data.get("longitude"), "longitude")
        if latitude is None or longitude is None:
            raise ValidationError("latitude and longitude are required")

        radius = optional_float(data.get("radiusMeters"), "radiusMeters")
        if radius is None:
            radius = float(container.settings.geofence_radius_meters or DEFAULT_GEOFENCE_RADIUS_METERS)
        if radius <= 0:
            raise ValidationError("radiusMeters must be positive")

        target = container.sessions_repo.get_by_id(session_id)
        if not target:
            raise NotFoundError("Session", session_id)
        if target.location is None:
            raise ValidationError("Session has no location")

        ref = target.location
        return jsonify(
            {
                "withinRadius": is_within_radius(latitude, longitude, ref.latitude, ref.longitude, radius),
                "distanceMeters": round(haversine_distance(latitude, longitude, ref.latitude, ref.longitude), 1),
                "radiusMeters": radius,
            }
        )
