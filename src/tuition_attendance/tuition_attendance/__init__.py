"""Tuition Attendance package.

This package is organized by feature modules (users, batches, students,
sessions, attendance, reports) with a thin Flask controller layer on top of
service/repository layers.
"""
