"""Notification services for sending guest emails."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from django.conf import settings  # type: ignore
from django.core.mail import send_mail  # type: ignore
from django.utils.html import strip_tags  # type: ignore

from shared.domain.errors import NotificationDeliveryError

if TYPE_CHECKING:  # pragma: no cover
    from apps.bookings.models import Booking
    from apps.users.models import CustomUser

logger = logging.getLogger(__name__)


# ============================================================================
# EMAIL NOTIFICATIONS
# ============================================================================

def send_email_notification(recipient_email: str, subject: str, html_message: str) -> None:
    """
    Send one HTML email with a plain-text alternative.

    Raises:
        NotificationDeliveryError: the mail backend refused or failed
    """
    try:
        send_mail(
            subject=subject,
            message=strip_tags(html_message),
            from_email=settings.DEFAULT_FROM_EMAIL,
            recipient_list=[recipient_email],
            html_message=html_message,
            fail_silently=False,
        )
    except Exception as e:
        logger.error(f"Failed to send email to {recipient_email}: {e}", exc_info=True)
        raise NotificationDeliveryError(f"Could not send '{subject}' to {recipient_email}") from e

    logger.info(f"Email sent successfully to {recipient_email}: {subject}")


def _hotel_name() -> str:
    return getattr(settings, "HOTEL_NAME", "Hotel Management System")


def send_booking_confirmation_email(booking: "Booking") -> None:
    """Booking received: sent to the guest contact snapshot."""
    hotel = _hotel_name()
    subject = f"Booking Confirmation - {hotel}"

    special = (
        f"<p><strong>Special Requests:</strong> {booking.special_requests}</p>"
        if booking.special_requests
        else ""
    )
    html_message = f"""
    <html>
    <body>
        <h2>Booking Confirmation</h2>
        <p>Dear {booking.guest_name},</p>
        <p>Your booking has been received. Here are your booking details:</p>

        <ul>
            <li><strong>Booking ID:</strong> {booking.pk}</li>
            <li><strong>Room:</strong> {booking.room.room_number} ({booking.room.room_type})</li>
            <li><strong>Check-in Date:</strong> {booking.check_in_date:%Y-%m-%d}</li>
            <li><strong>Check-out Date:</strong> {booking.check_out_date:%Y-%m-%d}</li>
            <li><strong>Number of Guests:</strong> {booking.number_of_guests}</li>
            <li><strong>Total Price:</strong> ${booking.total_price}</li>
            <li><strong>Status:</strong> {booking.status}</li>
        </ul>

        {special}

        <p>We look forward to welcoming you!</p>
        <p>Best regards,<br>{hotel} Team</p>
    </body>
    </html>
    """

    send_email_notification(booking.guest_email, subject, html_message)


def send_booking_cancellation_email(booking: "Booking") -> None:
    hotel = _hotel_name()
    subject = f"Booking Cancellation - {hotel}"

    html_message = f"""
    <html>
    <body>
        <h2>Booking Cancelled</h2>
        <p>Dear {booking.guest_name},</p>
        <p>Your booking has been cancelled.</p>

        <ul>
            <li><strong>Booking ID:</strong> {booking.pk}</li>
            <li><strong>Check-in Date:</strong> {booking.check_in_date:%Y-%m-%d}</li>
            <li><strong>Check-out Date:</strong> {booking.check_out_date:%Y-%m-%d}</li>
        </ul>

        <p>If you did not request this cancellation, please contact us immediately.</p>
        <p>Best regards,<br>{hotel} Team</p>
    </body>
    </html>
    """

    send_email_notification(booking.guest_email, subject, html_message)


def send_welcome_email(user: "CustomUser") -> None:
    hotel = _hotel_name()
    subject = f"Welcome to {hotel}"

    html_message = f"""
    <html>
    <body>
        <h2>Welcome to {hotel}!</h2>
        <p>Dear {user.username},</p>
        <p>Thank you for registering with us. Your account has been created successfully.</p>
        <p>You can now:</p>
        <ul>
            <li>Browse available rooms</li>
            <li>Make bookings</li>
            <li>Manage your reservations</li>
            <li>Update your profile</li>
        </ul>
        <p>We look forward to serving you!</p>
        <p>Best regards,<br>{hotel} Team</p>
    </body>
    </html>
    """

    send_email_notification(user.email, subject, html_message)
