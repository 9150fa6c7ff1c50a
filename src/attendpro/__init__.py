"""AttendPro attendance core.

Organized by feature modules (attendance, geofence, verification, users, ...)
with a thin Flask controller layer over service/repository layers.
"""
