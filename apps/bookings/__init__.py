"""Bookings app package.

This app holds the booking-availability and pricing engine: the
reservation ledger, the availability checker, the lifecycle state
machine and the use cases that run them inside one transaction per
request. Overlaps are prevented by locking the room row before the
check-then-write sequence.
"""
