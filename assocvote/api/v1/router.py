"""Main API router for v1."""
from fastapi import APIRouter

from assocvote.api.v1.endpoints import surveys, votes
from assocvote.schemas import ErrorResponse

api_router = APIRouter(
    prefix="/api/v1",
    responses={
        401: {"model": ErrorResponse, "description": "Missing or invalid token, duplicate answer"},
        404: {"model": ErrorResponse, "description": "Resource not found"},
    },
)

api_router.include_router(surveys.router, prefix="/surveys", tags=["Surveys"])
api_router.include_router(votes.router, prefix="/votes", tags=["Votes"])
