"""
API v1 router setup
Organized into: public, bookings (optional/required JWT), and admin routes
"""
from fastapi import APIRouter

from app.api.v1 import bookings
from app.api.v1.public import availability as public_availability
from app.api.v1.admin import availability as admin_availability

api_v1_router = APIRouter()

# ============================================================================
# PUBLIC ROUTES (No authentication required)
# ============================================================================
api_v1_router.include_router(
    public_availability.router,
    # No prefix needed - router already has "/availability" prefix
    tags=["Public"]
)

# ============================================================================
# BOOKING ROUTES (JWT optional for create, required otherwise)
# ============================================================================
api_v1_router.include_router(
    bookings.router,
    tags=["Bookings"]
)

# ============================================================================
# ADMIN ROUTES (JWT authentication + admin flag required)
# ============================================================================
api_v1_router.include_router(
    admin_availability.router,
    tags=["Admin"]
)


# ============================================================================
# ROOT ENDPOINT - API Info
# ============================================================================
@api_v1_router.get("/", tags=["Info"])
async def api_info():
    """
    API information and available endpoints.
    """
    return {
        "version": "1.0",
        "authentication": {
            "public": "No authentication required",
            "bookings": "Bearer token optional for booking creation, required for everything else",
            "admin": "Bearer token + admin profile required"
        }
    }
