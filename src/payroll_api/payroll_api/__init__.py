"""Payroll API package.

This package is organized by feature modules (users, employees, payslips, ...)
with a thin Flask controller layer, a security layer (token codec, auth and
CSRF gates) and service/repository layers underneath.
"""
