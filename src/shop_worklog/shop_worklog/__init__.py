"""Shop Worklog package.

This package is organized by feature modules (entries, reports, users, ...)
with a thin Flask controller layer and service/repository layers.
"""
