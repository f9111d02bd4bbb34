"""API router aggregator."""

from fastapi import APIRouter

from aquarium_analyser.api.v1 import analysis, articles

api_router = APIRouter()

api_router.include_router(articles.router, tags=["Articles"])
api_router.include_router(analysis.router, tags=["Analysis"])
