# ============================================================================
# FILE: app/api/v1/bookings.py
# Booking endpoints - thin HTTP layer over BookingService
# IMPORTANT: Specific routes MUST come before parameterized routes
# ============================================================================
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy.orm import Session

from app.api.dependencies import get_request_context, optional_request_context
from app.config.database import get_db
from app.core.context import RequestContext
from app.schemas.booking import BookingCreateRequest, BookingCancelRequest, BookingRescheduleRequest
from app.services.booking.booking_service import BookingService

router = APIRouter(prefix="/bookings", tags=["bookings"])


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_booking(
        payload: BookingCreateRequest,
        context: Optional[RequestContext] = Depends(optional_request_context),
        db: Session = Depends(get_db)
):
    """
    Book a slot. Signed-in customers get the booking linked to their profile;
    anonymous bookings are allowed.
    """
    booking = BookingService.create_booking(
        db=db,
        booking_date=payload.date,
        time=payload.time,
        customer_name=payload.customer_name,
        customer_email=payload.customer_email,
        customer_phone=payload.customer_phone,
        service_type=payload.service_type,
        notes=payload.notes,
        context=context
    )
    return {"success": True, "booking": BookingService.serialize_booking(booking)}


@router.get("")
async def list_bookings(
        status: Optional[str] = Query(None, description="Filter by status (confirmed, rescheduled, completed, cancelled)"),
        from_date: Optional[str] = Query(None, description="Bookings on or after this date (YYYY-MM-DD)"),
        to_date: Optional[str] = Query(None, description="Bookings on or before this date (YYYY-MM-DD)"),
        context: RequestContext = Depends(get_request_context),
        db: Session = Depends(get_db)
):
    """
    Get bookings ordered by date and time. Admins see every booking, customers their own.
    """
    bookings = BookingService.list_bookings(
        db=db,
        context=context,
        status=status,
        from_date=from_date,
        to_date=to_date
    )
    return {"bookings": [BookingService.serialize_booking(b) for b in bookings]}


@router.get("/upcoming")
async def list_upcoming_bookings(
        context: RequestContext = Depends(get_request_context),
        db: Session = Depends(get_db)
):
    """
    Get upcoming bookings. Admins see every booking, customers their own.
    """
    bookings = BookingService.list_upcoming(db=db, context=context)
    return {"bookings": [BookingService.serialize_booking(b) for b in bookings]}


@router.get("/{booking_id}")
async def get_booking(
        booking_id: UUID = Path(..., description="The booking ID"),
        context: RequestContext = Depends(get_request_context),
        db: Session = Depends(get_db)
):
    booking = BookingService.get_booking(db=db, booking_id=booking_id, context=context)
    return {"booking": BookingService.serialize_booking(booking)}


@router.post("/{booking_id}/cancel")
async def cancel_booking(
        payload: BookingCancelRequest,
        booking_id: UUID = Path(..., description="The booking ID"),
        context: RequestContext = Depends(get_request_context),
        db: Session = Depends(get_db)
):
    """
    Cancel a booking. Owners and admins only.
    """
    booking = BookingService.cancel_booking(
        db=db,
        booking_id=booking_id,
        context=context,
        reason=payload.reason,
        notes=payload.notes
    )
    return {"booking": BookingService.serialize_booking(booking)}


@router.post("/{booking_id}/reschedule")
async def reschedule_booking(
        payload: BookingRescheduleRequest,
        booking_id: UUID = Path(..., description="The booking ID"),
        context: RequestContext = Depends(get_request_context),
        db: Session = Depends(get_db)
):
    """
    Move a booking to another free slot. Owners and admins only.
    """
    booking = BookingService.reschedule_booking(
        db=db,
        booking_id=booking_id,
        context=context,
        new_date=payload.date,
        new_time=payload.time,
        notes=payload.notes
    )
    return {"booking": BookingService.serialize_booking(booking)}
