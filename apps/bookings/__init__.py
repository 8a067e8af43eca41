"""Bookings app package.

This app owns the booking ledger. A booking is created pending after the
property's availability check and later confirmed or rejected. Bookings
reference properties and users by id only.
"""
