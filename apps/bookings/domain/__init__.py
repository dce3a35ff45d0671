"""Booking domain rules: lifecycle, pricing and events."""
