"""School attendance package.

This package is organized by feature modules (students, teachers, attendance,
reports, ...) with a thin Flask controller layer over service/repository
layers that read a synced replica of the document store.
"""
