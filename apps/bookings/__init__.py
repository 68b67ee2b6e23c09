"""Bookings app package.

The booking lifecycle and availability-conflict engine: date-range
validation against existing bookings, price calculation, status changes
and cancellation. Overlap checks and inserts for one property are
serialized so two requests can never both reserve the same days.
"""
