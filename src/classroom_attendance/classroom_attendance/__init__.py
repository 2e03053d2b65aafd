"""Classroom Attendance package.

Organized by feature modules (users, students, attendance, analytics) with a
thin Flask controller layer on top of service/repository layers.
"""
