"""
API v1 router aggregation.
"""
from fastapi import APIRouter
from weekly_words.api.v1.endpoints import users, generated_decks

api_router = APIRouter()

# Include all endpoint routers
# Note: Each router already defines its own prefix, so we don't add another one here
api_router.include_router(users.router)
api_router.include_router(generated_decks.router)
