"""Slots app package.

One row per bookable hour on one date. Bookings claim rows by setting them
to ``Unavailable``; operators park rows in ``Maintenance``.
"""
