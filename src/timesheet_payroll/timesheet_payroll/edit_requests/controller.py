from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date
from ..container import Container
from ..core.enums import TimeField
from ..core.exceptions import NotFoundError, ValidationError
from ..locations.model import find_location_field, location_to_dict
from ..time_records.model import TimeRecord
from .model import EditRequest

logger = logging.getLogger(__name__)


def _to_json(r: EditRequest) -> dict:
    return {
        "id": r.request_id,
        "employee_id": r.employee_id,
        "date": r.work_date.strftime("%Y-%m-%d"),
        "field": r.field.value,
        "old_value": r.old_value,
        "new_value": r.new_value,
        "reason": r.reason,
        "status": r.status.value,
        "location": location_to_dict(r.location),
        "reviewed_by": r.reviewed_by,
        "reviewed_at": r.reviewed_at.isoformat() if r.reviewed_at else None,
        "created_at": r.created_at.isoformat() if r.created_at else None,
    }


def _record_to_json(record: TimeRecord) -> dict:
    return {
        "id": record.id,
        "date": record.date.strftime("%Y-%m-%d"),
        "clock_in": record.clock_in,
        "lunch_start": record.lunch_start,
        "lunch_end": record.lunch_end,
        "clock_out": record.clock_out,
        "total_hours": round(record.total_hours, 2),
        "total_pay": record.total_pay,
        "locations": {
            f.value: location_to_dict(find_location_field(record.locations, f.value)) for f in TimeField
        },
    }


def register(app: Flask, container: Container) -> None:
    def _error(e: Exception):
        if isinstance(e, NotFoundError):
            return jsonify({"success": False, "message": str(e)}), 404
        return jsonify({"success": False, "message": str(e)}), 400

    @app.route("/api/edit-requests", methods=["GET"], endpoint="list_edit_requests")
    def list_edit_requests():
        try:
            items = container.edit_request_service.list_requests(
                status=request.args.get("status") or None,
                employee_id=request.args.get("employee_id") or None,
            )
            return jsonify({"items": [_to_json(r) for r in items]}), 200
        except ValidationError as e:
            return _error(e)
        except Exception:
            logger.exception("Listing edit requests failed")
            return jsonify({"success": False, "message": "Unexpected error while listing requests"}), 500

    @app.route("/api/edit-requests", methods=["POST"], endpoint="submit_edit_request")
    def submit_edit_request():
        data = request.get_json(silent=True) or {}
        try:
            try:
                work_date = parse_iso_date(str(data.get("date", "")))
            except ValueError:
                raise ValidationError("date must be in YYYY-MM-DD format")

            request_id = container.edit_request_service.submit(
                employee_id=str(data.get("employee_id", "")),
                work_date=work_date,
                field=data.get("field", ""),
                new_value=str(data.get("new_value", "")),
                reason=str(data.get("reason", "")),
                location=data.get("location"),
            )
            return jsonify({"success": True, "id": request_id}), 201
        except (ValidationError, NotFoundError) as e:
            return _error(e)
        except Exception:
            logger.exception("Submitting edit request failed")
            return jsonify({"success": False, "message": "Unexpected error while submitting the request"}), 500

    @app.route("/api/edit-requests/<request_id>/approve", methods=["POST"], endpoint="approve_edit_request")
    def approve_edit_request(request_id: str):
        data = request.get_json(silent=True) or {}
        try:
            record = container.edit_request_service.approve(
                request_id=request_id,
                reviewer_id=str(data.get("reviewer_id", "")),
            )
            return jsonify({"success": True, "record": _record_to_json(record)}), 200
        except (ValidationError, NotFoundError) as e:
            return _error(e)
        except Exception:
            logger.exception("Approving edit request %s failed", request_id)
            return jsonify({"success": False, "message": "Unexpected error while approving the request"}), 500

    @app.route("/api/edit-requests/<request_id>/reject", methods=["POST"], endpoint="reject_edit_request")
    def reject_edit_request(request_id: str):
        data = request.get_json(silent=True) or {}
        try:
            container.edit_request_service.reject(
                request_id=request_id,
                reviewer_id=str(data.get("reviewer_id", "")),
            )
            return jsonify({"success": True}), 200
        except (ValidationError, NotFoundError) as e:
            return _error(e)
        except Exception:
            logger.exception("Rejecting edit request %s failed", request_id)
            return jsonify({"success": False, "message": "Unexpected error while rejecting the request"}), 500
