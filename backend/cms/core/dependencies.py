"""FastAPI dependencies."""

from fastapi import Request

from cms.services.category_service import CategoryService


def get_category_service(request: Request) -> CategoryService:
    """Return the process-wide service built by ``create_app``."""
    return request.app.state.category_service
