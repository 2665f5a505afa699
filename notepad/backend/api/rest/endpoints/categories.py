"""
Categories API Endpoints.

REST API endpoints for category management.
"""

from fastapi import APIRouter, Response

from notepad.backend.core.dependencies import DbSession
from notepad.backend.schemas.category import (
    CategoryCreate,
    CategoryResponse,
    CategoryUpdate,
    CategoryWithCountResponse,
)
from notepad.backend.services.category import CategoryService

router = APIRouter()


@router.get(
    "",
    response_model=list[CategoryWithCountResponse],
    summary="List categories",
    description="All categories, oldest first, each with its note count.",
)
async def list_categories(db: DbSession) -> list[CategoryWithCountResponse]:
    """List categories with note counts."""
    service = CategoryService(db)
    categories = await service.list_categories_with_counts()
    return [CategoryWithCountResponse.model_validate(c) for c in categories]


@router.post(
    "",
    response_model=CategoryResponse,
    status_code=201,
    summary="Create a category",
    description="Create a category. Color defaults to #3b82f6.",
)
async def create_category(
    data: CategoryCreate,
    db: DbSession,
) -> CategoryResponse:
    """Create a new category."""
    service = CategoryService(db)
    category = await service.create_category(data)
    return CategoryResponse.model_validate(category)


@router.put(
    "/{category_id}",
    response_model=CategoryResponse,
    summary="Update a category",
    description="Update name and/or color. Only provided fields are updated.",
)
async def update_category(
    category_id: str,
    data: CategoryUpdate,
    db: DbSession,
) -> CategoryResponse:
    """Update a category."""
    service = CategoryService(db)
    category = await service.update_category(category_id, data)
    return CategoryResponse.model_validate(category)


@router.delete(
    "/{category_id}",
    status_code=204,
    response_class=Response,
    summary="Delete a category",
    description="Permanently delete a category and every note in it.",
)
async def delete_category(
    category_id: str,
    db: DbSession,
) -> Response:
    """Delete a category and its notes."""
    service = CategoryService(db)
    await service.delete_category(category_id)
    return Response(status_code=204)
