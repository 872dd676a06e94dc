"""Bookings app package.

This app holds the booking transaction: it expands a requested time range
into hourly slots, locks the slot rows in order, and commits the booking
together with the slot claims, or nothing at all. The availability probe
runs the same locking without waiting and without committing.
"""
