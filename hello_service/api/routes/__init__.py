from fastapi import APIRouter

from hello_service.api.routes.health import router as health_router
from hello_service.api.routes.hello import router as hello_router
from hello_service.api.routes.metrics import router as metrics_router

api_router = APIRouter()

api_router.include_router(hello_router)
api_router.include_router(health_router)
api_router.include_router(metrics_router)
