from __future__ import annotations

import csv
import io
from typing import Sequence

import pandas as pd

EXPORT_COLUMNS = [
    ("name", "Employee"),
    ("email", "Email"),
    ("hourly_rate", "Hourly rate"),
    ("overtime_rate", "Overtime rate"),
    ("total_hours", "Total hours"),
    ("normal_hours", "Normal hours"),
    ("overtime_hours", "Overtime hours"),
    ("total_hours_hhmm", "Total (HH:MM)"),
    ("days_worked", "Days worked"),
    ("normal_pay", "Normal pay"),
    ("overtime_pay", "Overtime pay"),
    ("total_pay", "Total pay"),
]

SUMMARY_LABELS = [
    ("start_date", "Start date"),
    ("end_date", "End date"),
    ("employee_count", "Employees"),
    ("working_days", "Working days"),
    ("expected_hours_per_employee", "Expected hours per employee"),
    ("total_hours", "Total hours"),
    ("overtime_hours", "Overtime hours"),
    ("total_pay", "Total payroll"),
]


def report_to_csv(rows: Sequence[dict]) -> bytes:
    """Payroll rows as CSV; BOM-prefixed so spreadsheet apps detect UTF-8."""

    out = io.StringIO()
    writer = csv.writer(out)
    writer.writerow([label for _, label in EXPORT_COLUMNS])
    for row in rows:
        writer.writerow([row.get(key, "") for key, _ in EXPORT_COLUMNS])
    return out.getvalue().encode("utf-8-sig")


def report_to_excel(rows: Sequence[dict], summary: dict) -> bytes:
    df = pd.DataFrame(
        [[row.get(key) for key, _ in EXPORT_COLUMNS] for row in rows],
        columns=[label for _, label in EXPORT_COLUMNS],
    )
    summary_df = pd.DataFrame(
        [(label, summary.get(key)) for key, label in SUMMARY_LABELS],
        columns=["Metric", "Value"],
    )

    output = io.BytesIO()
    with pd.ExcelWriter(output, engine="openpyxl") as writer:
        df.to_excel(writer, sheet_name="Payroll", index=False)
        summary_df.to_excel(writer, sheet_name="Summary", index=False)
    return output.getvalue()
