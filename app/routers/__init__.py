from app.routers.monitoring import router as monitoring_router

__all__ = ["monitoring_router"]
