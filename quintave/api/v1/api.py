from fastapi import APIRouter

from quintave.api.v1.routes import (
    auth,
    buckets,
    transactions,
    goals,
    habits,
    journal,
    onboarding,
    analytics,
    purchase,
)

# Routers carry their own prefixes
api_router = APIRouter()

api_router.include_router(auth.router)
api_router.include_router(buckets.router)
api_router.include_router(transactions.router)
api_router.include_router(goals.router)
api_router.include_router(habits.router)
api_router.include_router(journal.router)
api_router.include_router(onboarding.router)
api_router.include_router(analytics.router)
api_router.include_router(purchase.router)
