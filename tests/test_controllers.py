from __future__ import annotations

from datetime import date
from types import SimpleNamespace

import pytest
from flask import Flask

from src.timesheet_payroll.timesheet_payroll.edit_requests import controller as edit_requests_controller
from src.timesheet_payroll.timesheet_payroll.edit_requests.service import EditRequestService
from src.timesheet_payroll.timesheet_payroll.employees.model import Employee
from src.timesheet_payroll.timesheet_payroll.locations import controller as locations_controller
from src.timesheet_payroll.timesheet_payroll.locations.geofence import AllowedLocation
from src.timesheet_payroll.timesheet_payroll.locations.geocoding import GeocodeResult
from src.timesheet_payroll.timesheet_payroll.payroll import controller as payroll_controller
from src.timesheet_payroll.timesheet_payroll.payroll.service import PayrollReportService
from src.timesheet_payroll.timesheet_payroll.time_records.model import TimeRecord
from tests.fakes import FakeEditRequestsRepo, FakeEmployeesRepo, FakeTimeRecordsRepo


class StubGeocoder:
    def reverse(self, latitude, longitude):
        return GeocodeResult(address=f"Near {latitude},{longitude}", success=True)


class StubAllowedLocations:
    def list_active(self):
        return [AllowedLocation(id="1", name="Office", latitude=0.0, longitude=0.0, range_meters=100)]


@pytest.fixture()
def client():
    employees = FakeEmployeesRepo([Employee(id="e1", name="Ana", email="ana@example.com", hourly_rate=25.0)])
    records = FakeTimeRecordsRepo(
        [
            TimeRecord(
                id="r1",
                user_id="e1",
                date=date(2026, 1, 5),
                clock_in="08:00",
                lunch_start="12:00",
                lunch_end="13:00",
                clock_out="17:00",
                locations={"clockIn": {"lat": -23.55, "lng": -46.63}},
            )
        ]
    )
    container = SimpleNamespace(
        payroll_report_service=PayrollReportService(employees, records),
        edit_request_service=EditRequestService(FakeEditRequestsRepo(), records, employees),
        geocoder=StubGeocoder(),
        allowed_locations_repo=StubAllowedLocations(),
    )

    app = Flask(__name__)
    app.config["TESTING"] = True
    payroll_controller.register(app, container)
    edit_requests_controller.register(app, container)
    locations_controller.register(app, container)
    return app.test_client()


def test_payroll_report_json(client):
    resp = client.get("/api/payroll?start=2026-01-01&end=2026-01-31")

    assert resp.status_code == 200
    data = resp.get_json()
    assert data["rows"][0]["total_hours"] == 8.0
    assert data["summary"]["total_pay"] == 200.0


def test_payroll_report_rejects_bad_dates(client):
    assert client.get("/api/payroll?start=2026-02-01&end=2026-01-01").status_code == 400
    assert client.get("/api/payroll?start=01/01/2026&end=2026-01-31").status_code == 400
    assert client.get("/api/payroll").status_code == 400


def test_payroll_csv_export(client):
    resp = client.get("/api/payroll/export.csv?start=2026-01-01&end=2026-01-31")

    assert resp.status_code == 200
    assert resp.mimetype == "text/csv"
    assert "payroll_20260101_20260131.csv" in resp.headers["Content-Disposition"]
    assert b"Ana" in resp.data


def test_payroll_excel_export(client):
    resp = client.get("/api/payroll/export.xlsx?start=2026-01-01&end=2026-01-31")

    assert resp.status_code == 200
    assert resp.data[:2] == b"PK"


def test_edit_request_flow(client):
    resp = client.post(
        "/api/edit-requests",
        json={"employee_id": "e1", "date": "2026-01-05", "field": "clock_out", "new_value": "18:00", "reason": "Late"},
    )
    assert resp.status_code == 201
    rid = resp.get_json()["id"]

    listed = client.get("/api/edit-requests?status=pending").get_json()["items"]
    assert [item["id"] for item in listed] == [rid]
    assert listed[0]["old_value"] == "17:00"

    approved = client.post(f"/api/edit-requests/{rid}/approve", json={"reviewer_id": "admin"})
    assert approved.status_code == 200
    assert approved.get_json()["record"]["clock_out"] == "18:00"
    assert approved.get_json()["record"]["total_hours"] == 9.0
    locations = approved.get_json()["record"]["locations"]
    assert locations["clock_in"] == {"lat": -23.55, "lng": -46.63, "address": None, "kind": "coordinates"}
    assert locations["clock_out"] is None

    again = client.post(f"/api/edit-requests/{rid}/reject", json={"reviewer_id": "admin"})
    assert again.status_code == 400


def test_edit_request_errors(client):
    bad_date = client.post("/api/edit-requests", json={"employee_id": "e1", "date": "05/01/2026"})
    assert bad_date.status_code == 400

    missing = client.post(
        "/api/edit-requests",
        json={"employee_id": "e1", "date": "2026-01-09", "field": "clock_in", "new_value": "08:00", "reason": "x"},
    )
    assert missing.status_code == 404

    assert client.post("/api/edit-requests/42/approve", json={"reviewer_id": "admin"}).status_code == 404


def test_reverse_geocode_endpoint(client):
    resp = client.get("/api/locations/reverse?lat=1.5&lng=2.5")
    assert resp.get_json() == {"success": True, "address": "Near 1.5,2.5"}

    assert client.get("/api/locations/reverse?lat=abc&lng=2").status_code == 400


def test_check_location_endpoint(client):
    inside = client.get("/api/locations/check?lat=0.0005&lng=0&accuracy=10").get_json()
    assert inside["allowed"] is True
    assert inside["location"] == "Office"

    outside = client.get("/api/locations/check?lat=0.01&lng=0&accuracy=10").get_json()
    assert outside["allowed"] is False
    assert outside["distance_meters"] == pytest.approx(1111.9, abs=1)

    assert client.get("/api/locations/check?lat=x&lng=0").status_code == 400
