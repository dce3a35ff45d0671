"""Notifications app package.

Reacts to booking and account events published on the message bus and
delivers guest emails through Celery tasks. Delivery failures are logged
and never affect the operation that raised the event.
"""
