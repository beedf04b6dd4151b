"""Attendance Tracker package.

Organized by feature modules (users, attendance, analytics, reports) with a
thin Flask controller layer over service/repository layers.
"""
