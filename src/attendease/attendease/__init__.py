"""AttendEase package.

Feature modules (attendance, timetable, users, auth, admin) each carry a thin
Flask controller over service/repository layers. The attendance aggregator is
the pure core; everything else feeds it records or serves its results.

Entry point: ``attendease.main.create_app``.
"""
