"""Home-care operations core package.

This package is organized by feature modules (schedules, payroll, caregivers, ...)
with a thin Flask controller layer over pure domain functions and
service/repository layers talking to the back-office REST API.
"""
