"""Celery tasks delivering notifications after booking and account events."""

from __future__ import annotations

import logging

from celery import shared_task  # type: ignore
from django.contrib.auth import get_user_model  # type: ignore

from shared.domain.errors import NotificationDeliveryError

from . import services

logger = logging.getLogger(__name__)


@shared_task(name="notifications.send_booking_confirmation")
def send_booking_confirmation(booking_id: int) -> bool:
    """Email the guest that the booking was received."""
    from apps.bookings.models import Booking

    try:
        booking = Booking.objects.select_related("room").get(id=booking_id)
    except Booking.DoesNotExist:
        logger.error(f"Booking {booking_id} not found for confirmation notification")
        return False

    try:
        services.send_booking_confirmation_email(booking)
    except NotificationDeliveryError as e:
        logger.warning(f"[NOTIFICATION] Booking {booking_id} confirmation not delivered: {e}")
        return False

    logger.info(f"[NOTIFICATION] Booking confirmation sent: {booking_id} to {booking.guest_email}")
    return True


@shared_task(name="notifications.send_booking_cancellation")
def send_booking_cancellation(booking_id: int) -> bool:
    from apps.bookings.models import Booking

    try:
        booking = Booking.objects.select_related("room").get(id=booking_id)
    except Booking.DoesNotExist:
        logger.error(f"Booking {booking_id} not found for cancellation notification")
        return False

    try:
        services.send_booking_cancellation_email(booking)
    except NotificationDeliveryError as e:
        logger.warning(f"[NOTIFICATION] Booking {booking_id} cancellation not delivered: {e}")
        return False

    logger.info(f"[NOTIFICATION] Booking cancellation sent: {booking_id} to {booking.guest_email}")
    return True


@shared_task(name="notifications.send_welcome")
def send_welcome(user_id: int) -> bool:
    User = get_user_model()
    try:
        user = User.objects.get(id=user_id)
    except User.DoesNotExist:
        logger.error(f"User {user_id} not found for welcome notification")
        return False

    try:
        services.send_welcome_email(user)
    except NotificationDeliveryError as e:
        logger.warning(f"[NOTIFICATION] Welcome email for user {user_id} not delivered: {e}")
        return False

    logger.info(f"[NOTIFICATION] Welcome email sent to {user.email}")
    return True
