"""
API router aggregation.
"""
from fastapi import APIRouter
from revi.api.endpoints import (
    account, analytics, cards, decks, reviews, upload
)

api_router = APIRouter()

# Resource routers carry their own prefixes; the /api prefix is added in main
api_router.include_router(decks.router)
api_router.include_router(cards.router)
api_router.include_router(reviews.router)
api_router.include_router(analytics.router)
api_router.include_router(upload.router)
api_router.include_router(account.router)
