"""
Top-level package for the Lesson Booking API.

All functionality lives in submodules under ``app``; import the ASGI
application as ``lesson_booking_api.app.main:app``.
"""

__all__ = []
