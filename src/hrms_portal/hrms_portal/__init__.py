"""HRMS Portal package.

This package is organized by feature modules (organization, employees,
attendance, leave, payroll, ...) with a thin Flask controller layer on top of
service/repository layers.
"""
