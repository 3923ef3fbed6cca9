"""Fellowship attendance package.

Organized by feature modules (sessions, cohorts, attendance, reports, ...)
with a thin Flask controller layer over service/repository layers.
"""
