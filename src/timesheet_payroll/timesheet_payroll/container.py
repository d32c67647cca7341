from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from .common.retry import RetryPolicy
from .core.constants import (
    DEFAULT_CURRENCY,
    DEFAULT_GEOCODE_CACHE_SIZE,
    DEFAULT_GEOCODE_CACHE_TTL_SECONDS,
    DEFAULT_NORMAL_HOURS_THRESHOLD,
    DEFAULT_RETRY_ATTEMPTS,
    DEFAULT_RETRY_BASE_DELAY,
)
from .database.connection import DBConfig, DatabaseConnection
from .database.mysql_base import mysql_retry_policy
from .edit_requests.mysql_edit_request_repository import MySQLEditRequestRepository
from .edit_requests.service import EditRequestService
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .locations.geocoding import NOMINATIM_REVERSE_URL, GeocodeCache, ReverseGeocoder
from .locations.mysql_allowed_location_repository import MySQLAllowedLocationRepository
from .payroll.calculator.standard_calculator import StandardWorkingHoursCalculator
from .payroll.service import PayrollReportService
from .time_records.mysql_time_record_repository import MySQLTimeRecordRepository


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection
    db_retry: RetryPolicy

    employees_repo: MySQLEmployeeRepository
    time_records_repo: MySQLTimeRecordRepository
    edit_requests_repo: MySQLEditRequestRepository
    allowed_locations_repo: MySQLAllowedLocationRepository

    calculator: StandardWorkingHoursCalculator
    payroll_report_service: PayrollReportService
    edit_request_service: EditRequestService
    geocoder: ReverseGeocoder


def build_container(*, db_config: dict, settings: Mapping[str, Any] | None = None) -> Container:
    settings = settings or {}
    threshold = float(settings.get("NORMAL_HOURS_THRESHOLD", DEFAULT_NORMAL_HOURS_THRESHOLD))

    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))
    db_retry = mysql_retry_policy(
        max_attempts=int(settings.get("RETRY_MAX_ATTEMPTS", DEFAULT_RETRY_ATTEMPTS)),
        base_delay=float(settings.get("RETRY_BASE_DELAY", DEFAULT_RETRY_BASE_DELAY)),
    )

    employees_repo = MySQLEmployeeRepository(conn, retry_policy=db_retry)
    time_records_repo = MySQLTimeRecordRepository(conn, retry_policy=db_retry)
    edit_requests_repo = MySQLEditRequestRepository(conn, retry_policy=db_retry)
    allowed_locations_repo = MySQLAllowedLocationRepository(conn, retry_policy=db_retry)

    calculator = StandardWorkingHoursCalculator(threshold)
    geocoder = ReverseGeocoder(
        GeocodeCache(
            max_entries=int(settings.get("GEOCODE_CACHE_SIZE", DEFAULT_GEOCODE_CACHE_SIZE)),
            ttl_seconds=float(settings.get("GEOCODE_CACHE_TTL", DEFAULT_GEOCODE_CACHE_TTL_SECONDS)),
        ),
        base_url=str(settings.get("GEOCODER_URL", NOMINATIM_REVERSE_URL)),
        user_agent=str(settings.get("GEOCODER_USER_AGENT", "timesheet-payroll/1.0")),
    )
    payroll_report_service = PayrollReportService(
        employees_repo,
        time_records_repo,
        calculator=calculator,
        default_threshold=threshold,
        currency=str(settings.get("CURRENCY", DEFAULT_CURRENCY)),
    )
    edit_request_service = EditRequestService(
        edit_requests_repo,
        time_records_repo,
        employees_repo,
        calculator=calculator,
        default_threshold=threshold,
        geocoder=geocoder,
    )

    return Container(
        conn=conn,
        db_retry=db_retry,
        employees_repo=employees_repo,
        time_records_repo=time_records_repo,
        edit_requests_repo=edit_requests_repo,
        allowed_locations_repo=allowed_locations_repo,
        calculator=calculator,
        payroll_report_service=payroll_report_service,
        edit_request_service=edit_request_service,
        geocoder=geocoder,
    )
