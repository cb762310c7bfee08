"""Campus attendance client core.

The package is organized by feature modules (geo, sessions, validation,
attendance, ...) with service/repository layers that a UI shell calls into.
"""
