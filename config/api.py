"""Django Ninja API configuration."""

from ninja import NinjaAPI

from features.auth.endpoints import router as auth_router
from features.notifications.endpoints import router as notifications_router

# Create the main API instance
api = NinjaAPI(
    title="Personal Finance API",
    version="1.0.0",
    description="Budgets, loans, savings goals and scheduled notifications",
)

# Register routers
api.add_router("/auth", auth_router, tags=["Authentication"])
api.add_router("/notifications", notifications_router, tags=["Notifications"])
