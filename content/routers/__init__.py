from content.routers.content_by_concept import router as content_by_concept_router

__all__ = ["content_by_concept_router"]
