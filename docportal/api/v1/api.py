from fastapi import APIRouter
from docportal.api.v1.endpoints import auth, health, clients, documents

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])

# Resource endpoints
api_router.include_router(clients.router, prefix="/clients", tags=["clients"])
api_router.include_router(documents.router, prefix="/documents", tags=["documents"])
