"""Timetable Tracker package.

Tracks a student's weekly class schedule, one-off exceptions (holidays, extra
classes, exams) and attendance, and derives day views and local reminders.
Organized by feature modules with a thin Flask controller layer on top of
plain service and state layers.
"""
