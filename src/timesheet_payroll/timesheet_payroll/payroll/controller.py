from __future__ import annotations

import logging
from datetime import date
from typing import Optional

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date
from ..container import Container
from ..core.exceptions import ValidationError
from .export import report_to_csv, report_to_excel

logger = logging.getLogger(__name__)

XLSX_MIMETYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def register(app: Flask, container: Container) -> None:
    def _parse_date(value: Optional[str], field_name: str) -> Optional[date]:
        if not value:
            return None
        try:
            return parse_iso_date(value)
        except ValueError:
            raise ValidationError(f"{field_name} must be a date in YYYY-MM-DD format")

    def _generate():
        start = _parse_date(request.args.get("start"), "start")
        end = _parse_date(request.args.get("end"), "end")
        employee_id = request.args.get("employee_id") or None
        service = container.payroll_report_service
        report = service.generate(start=start, end=end, employee_id=employee_id)
        return report, service.build_rows(report), service.build_summary(report)

    def _download(payload: bytes, *, filename: str, mimetype: str):
        return app.response_class(
            payload,
            mimetype=mimetype,
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )

    def _filename(report, ext: str) -> str:
        return f"payroll_{report.period.start:%Y%m%d}_{report.period.end:%Y%m%d}.{ext}"

    @app.route("/api/payroll", methods=["GET"], endpoint="payroll_report")
    def payroll_report():
        try:
            _, rows, summary = _generate()
            return jsonify({"rows": rows, "summary": summary}), 200
        except ValidationError as e:
            return jsonify({"success": False, "message": str(e)}), 400
        except Exception:
            logger.exception("Payroll report failed")
            return jsonify({"success": False, "message": "Unexpected error while generating the payroll"}), 500

    @app.route("/api/payroll/export.csv", methods=["GET"], endpoint="payroll_export_csv")
    def payroll_export_csv():
        try:
            report, rows, _ = _generate()
            return _download(report_to_csv(rows), filename=_filename(report, "csv"), mimetype="text/csv")
        except ValidationError as e:
            return jsonify({"success": False, "message": str(e)}), 400
        except Exception:
            logger.exception("Payroll CSV export failed")
            return jsonify({"success": False, "message": "Unexpected error while exporting the payroll"}), 500

    @app.route("/api/payroll/export.xlsx", methods=["GET"], endpoint="payroll_export_xlsx")
    def payroll_export_xlsx():
        try:
            report, rows, summary = _generate()
            return _download(report_to_excel(rows, summary), filename=_filename(report, "xlsx"), mimetype=XLSX_MIMETYPE)
        except ValidationError as e:
            return jsonify({"success": False, "message": str(e)}), 400
        except Exception:
            logger.exception("Payroll Excel export failed")
            return jsonify({"success": False, "message": "Unexpected error while exporting the payroll"}), 500
