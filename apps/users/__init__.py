"""Users app package.

Defines the custom user model (``apps.users.models.CustomUser``, the
project's AUTH_USER_MODEL). Bookings stamp ``last_booking_date`` on it when
they commit.
"""
