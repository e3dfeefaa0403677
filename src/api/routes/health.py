"""
Health check API route
"""

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

router = APIRouter()

@router.get("/api/health", response_class=PlainTextResponse)
async def health_check():
    """
    Health check - reports healthy whenever the process is serving
    requests, independent of database connectivity
    """
    return "Server is healthy"
