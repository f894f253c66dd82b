from fastapi import APIRouter

from app.api.v1.endpoints import auth, blockchain, health, notes

api_router = APIRouter()

# Health endpoints
api_router.include_router(health.router, prefix="/health", tags=["health"])

# Authentication endpoints
api_router.include_router(auth.router, prefix="/auth", tags=["authentication"])

# Note management endpoints
api_router.include_router(notes.router, prefix="/notes", tags=["notes"])

# Blockchain note endpoints
api_router.include_router(
    blockchain.router, prefix="/blockchain", tags=["blockchain"]
)
