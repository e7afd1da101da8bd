# ============================================================================
# app/services/booking/booking_service.py
# Booking lifecycle - no FastAPI dependencies
# ============================================================================
"""Service for creating, cancelling and rescheduling bookings"""
import logging
from datetime import date, datetime, timezone
from typing import Any, Dict, List, Optional
from uuid import UUID

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.config.settings import get_settings
from app.core.context import RequestContext
from app.core.exceptions import (
    DataUnavailable,
    InvalidBookingState,
    InvalidInput,
    NotFound,
    PermissionDenied,
    SlotConflict,
)
from app.models.booking import Booking, BookingStatus
from app.services.availability.availability_resolver import AvailabilityResolver
from app.utils.validators import parse_date, normalize_time

logger = logging.getLogger(__name__)


class BookingService:
    """Handles booking operations"""

    @staticmethod
    def create_booking(
            db: Session,
            booking_date: str,
            time: str,
            customer_name: str,
            customer_email: str,
            customer_phone: Optional[str] = None,
            service_type: Optional[str] = None,
            notes: Optional[str] = None,
            context: Optional[RequestContext] = None,
            today: Optional[date] = None,
            now: Optional[datetime] = None
    ) -> Booking:
        """
        Create a confirmed booking for an offered, unbooked slot.

        The availability check narrows the window for double bookings; the
        partial unique index on (date, time) closes it. Either one failing
        raises SlotConflict.
        """
        target_date = parse_date(booking_date)
        time = normalize_time(time)
        BookingService._reject_past(target_date, time, today, now)

        # Same check as is_slot_free, but a storage error surfaces as 503 instead of a conflict
        slot = AvailabilityResolver.for_session(db).find_slot(target_date, time)
        if slot is None or not slot.available:
            raise SlotConflict()

        booking = Booking(
            user_id=context.user_id if context else None,
            date=target_date,
            time=slot.time,
            end_time=slot.end_time,
            customer_name=customer_name,
            customer_email=customer_email,
            customer_phone=customer_phone,
            service_type=service_type or get_settings().DEFAULT_SERVICE_TYPE,
            notes=notes or "",
            status=BookingStatus.CONFIRMED.value,
        )

        BookingService._commit(db, booking)
        logger.info(f"Booking {booking.id} created for {target_date} {time}")
        return booking

    @staticmethod
    def get_booking(db: Session, booking_id: UUID, context: RequestContext) -> Booking:
        booking = BookingService._load(db, booking_id)
        if not context.can_manage(booking.user_id):
            raise PermissionDenied("You do not have permission to view this booking")
        return booking

    @staticmethod
    def cancel_booking(
            db: Session,
            booking_id: UUID,
            context: RequestContext,
            reason: Optional[str] = None,
            notes: Optional[str] = None
    ) -> Booking:
        """Cancel a booking; the slot becomes bookable again"""
        booking = BookingService._load(db, booking_id)

        if not context.can_manage(booking.user_id):
            raise PermissionDenied("You do not have permission to cancel this booking")

        if booking.status == BookingStatus.CANCELLED.value:
            raise InvalidBookingState("Booking is already cancelled")

        booking.status = BookingStatus.CANCELLED.value
        booking.cancellation_reason = reason or "Not specified"
        if notes:
            booking.notes = notes
        booking.cancelled_at = datetime.now(timezone.utc)
        booking.cancelled_by = context.user_id

        BookingService._commit(db, booking)
        logger.info(f"Booking {booking.id} cancelled by {context.user_id}")
        return booking

    @staticmethod
    def reschedule_booking(
            db: Session,
            booking_id: UUID,
            context: RequestContext,
            new_date: str,
            new_time: str,
            notes: Optional[str] = None,
            today: Optional[date] = None,
            now: Optional[datetime] = None
    ) -> Booking:
        """Move a booking to another free slot, keeping the original date/time for reference"""
        booking = BookingService._load(db, booking_id)

        if not context.can_manage(booking.user_id):
            raise PermissionDenied("You do not have permission to reschedule this booking")

        if booking.status == BookingStatus.CANCELLED.value:
            raise InvalidBookingState("Cannot reschedule a cancelled booking")
        if booking.status == BookingStatus.COMPLETED.value:
            raise InvalidBookingState("Cannot reschedule a completed booking")

        target_date = parse_date(new_date)
        time = normalize_time(new_time)
        BookingService._reject_past(target_date, time, today, now)

        # The booking being moved must not block its own target slot
        slot = AvailabilityResolver.for_session(db).find_slot(
            target_date, time, exclude_booking_id=booking.id
        )
        if slot is None or not slot.available:
            raise SlotConflict()

        booking.original_date = booking.date
        booking.original_time = booking.time
        booking.date = target_date
        booking.time = slot.time
        booking.end_time = slot.end_time
        booking.status = BookingStatus.RESCHEDULED.value
        if notes:
            booking.notes = notes

        BookingService._commit(db, booking)
        logger.info(
            f"Booking {booking.id} moved from {booking.original_date} {booking.original_time} "
            f"to {target_date} {time}"
        )
        return booking

    @staticmethod
    def list_bookings(
            db: Session,
            context: RequestContext,
            status: Optional[str] = None,
            from_date: Optional[str] = None,
            to_date: Optional[str] = None
    ) -> List[Booking]:
        """
        Get bookings ordered by date and time, optionally filtered.

        Admins see every booking, customers their own. Cancelled bookings
        are included unless a status filter says otherwise.
        """
        if status is not None and status not in {s.value for s in BookingStatus}:
            raise InvalidInput(f"Unknown booking status '{status}'")
        start = parse_date(from_date) if from_date else None
        end = parse_date(to_date) if to_date else None

        try:
            query = db.query(Booking)
            if not context.is_admin:
                query = query.filter(Booking.user_id == context.user_id)
            if status:
                query = query.filter(Booking.status == status)
            if start:
                query = query.filter(Booking.date >= start)
            if end:
                query = query.filter(Booking.date <= end)
            return query.order_by(Booking.date.asc(), Booking.time.asc()).all()
        except SQLAlchemyError as e:
            logger.error(f"Failed to list bookings: {e}")
            raise DataUnavailable("Unable to load bookings, please try again") from e

    @staticmethod
    def list_upcoming(
            db: Session,
            context: RequestContext,
            today: Optional[date] = None
    ) -> List[Booking]:
        """Get future, non-cancelled bookings; customers only see their own"""
        today = today or date.today()
        try:
            query = db.query(Booking).filter(
                Booking.date >= today,
                Booking.status != BookingStatus.CANCELLED.value
            )
            if not context.is_admin:
                query = query.filter(Booking.user_id == context.user_id)
            return query.order_by(Booking.date.asc(), Booking.time.asc()).all()
        except SQLAlchemyError as e:
            logger.error(f"Failed to list upcoming bookings: {e}")
            raise DataUnavailable("Unable to load bookings, please try again") from e

    @staticmethod
    def serialize_booking(booking: Booking) -> Dict[str, Any]:
        return {
            "id": str(booking.id),
            "user_id": str(booking.user_id) if booking.user_id else None,
            "date": booking.date.isoformat(),
            "time": booking.time,
            "end_time": booking.end_time,
            "customer_name": booking.customer_name,
            "customer_email": booking.customer_email,
            "customer_phone": booking.customer_phone,
            "service_type": booking.service_type,
            "notes": booking.notes,
            "status": booking.status,
            "cancellation_reason": booking.cancellation_reason,
            "cancelled_at": booking.cancelled_at.isoformat() if booking.cancelled_at else None,
            "original_date": booking.original_date.isoformat() if booking.original_date else None,
            "original_time": booking.original_time,
        }

    @staticmethod
    def _reject_past(target_date: date, time: str, today: Optional[date], now: Optional[datetime]):
        now = now or datetime.now()
        if target_date < (today or now.date()):
            raise InvalidInput("Cannot book a date in the past")
        # Earlier slots of the current day are gone too
        if target_date == now.date() and time <= now.strftime("%H:%M"):
            raise InvalidInput("Cannot book a time that has already passed")

    @staticmethod
    def _load(db: Session, booking_id: UUID) -> Booking:
        try:
            booking = db.query(Booking).filter(Booking.id == booking_id).first()
        except SQLAlchemyError as e:
            logger.error(f"Failed to load booking {booking_id}: {e}")
            raise DataUnavailable("Unable to load booking, please try again") from e

        if not booking:
            raise NotFound("Booking not found")
        return booking

    @staticmethod
    def _commit(db: Session, booking: Booking):
        slot_label = f"{booking.date} {booking.time}"
        db.add(booking)
        try:
            db.commit()
        except IntegrityError as e:
            db.rollback()
            logger.warning(f"Slot {slot_label} taken concurrently: {e.orig}")
            raise SlotConflict() from e
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Failed to save booking: {e}")
            raise DataUnavailable("Unable to save booking, please try again") from e
        db.refresh(booking)
