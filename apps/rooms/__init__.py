"""Rooms app package.

The room catalogue: nightly rates, capacity, room types and the
administrative availability flag. Deleting a room is guarded by the
bookings ledger.
"""
