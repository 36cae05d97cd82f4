from fastapi import APIRouter

# Public: locations, availability, reservations
from brewtable.api.v1.public.locations import router as locations_router
from brewtable.api.v1.public.slots import router as slots_router
from brewtable.api.v1.public.bookings import router as bookings_router

# Admin
from brewtable.api.v1.admin.auth import router as admin_auth_router
from brewtable.api.v1.admin.blocked_windows import router as blocked_windows_router
from brewtable.api.v1.admin.bookings import router as admin_bookings_router

api_router = APIRouter()

# --- Public ---
api_router.include_router(locations_router)
api_router.include_router(slots_router)
api_router.include_router(bookings_router)

# --- Admin ---
api_router.include_router(admin_auth_router)
api_router.include_router(blocked_windows_router)
api_router.include_router(admin_bookings_router)
