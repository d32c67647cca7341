"""Timesheet Payroll package.

This package is organized by feature modules (employees, time_records,
payroll, edit_requests, locations, ...) with a thin Flask controller layer
over service/repository layers.
"""
