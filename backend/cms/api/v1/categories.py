"""CRUD endpoints for categories."""

import uuid

from fastapi import APIRouter, Depends, Query

from cms.core.dependencies import get_category_service
from cms.schemas.category import (
    CategoryCreate,
    CategoryDetailResponse,
    CategoryListData,
    CategoryListItem,
    CategoryListResponse,
    CategoryResponse,
    CategoryUpdate,
    CategoryUpdateResponse,
)
from cms.schemas.common import ErrorResponse, FieldErrorResponse, MessageResponse, PageInfo
from cms.services.category_service import SUCCESS_MESSAGE, CategoryService

router = APIRouter()

_FIELD_ERRORS = {400: {"model": FieldErrorResponse}}
_NOT_FOUND = {404: {"model": ErrorResponse}}


@router.get("", response_model=CategoryListResponse, response_model_exclude_none=True)
async def list_categories(
    page: str | None = Query(None),
    page_size: str | None = Query(None, alias="pageSize"),
    order_column: str | None = Query(None, alias="orderColumn"),
    order_type: str | None = Query(None, alias="orderType"),
    filter_column: str | None = Query(None, alias="filterColumn"),
    word: str | None = Query(None),
    service: CategoryService = Depends(get_category_service),
) -> CategoryListResponse:
    result = await service.list_categories(
        page=page,
        page_size=page_size,
        order_column=order_column,
        order_type=order_type,
        filter_column=filter_column,
        word=word,
    )

    page_info = None
    if result.pagination is not None:
        page_info = PageInfo(
            page=result.pagination.page,
            page_size=result.pagination.page_size,
            total=result.total,
        )
    return CategoryListResponse(
        data=CategoryListData(
            page=page_info,
            items=[CategoryListItem.model_validate(c) for c in result.items],
        )
    )


@router.post("", response_model=MessageResponse, responses=_FIELD_ERRORS)
async def create_category(
    body: CategoryCreate,
    service: CategoryService = Depends(get_category_service),
) -> MessageResponse:
    await service.add_category(body.name, body.description)
    return MessageResponse(message=SUCCESS_MESSAGE)


@router.get("/{category_id}", response_model=CategoryDetailResponse, responses=_NOT_FOUND)
async def get_category(
    category_id: uuid.UUID,
    service: CategoryService = Depends(get_category_service),
) -> CategoryDetailResponse:
    category = await service.get_category(category_id)
    return CategoryDetailResponse(category=CategoryResponse.model_validate(category))


@router.put(
    "/{category_id}",
    response_model=CategoryUpdateResponse,
    responses={**_FIELD_ERRORS, **_NOT_FOUND},
)
async def update_category(
    category_id: uuid.UUID,
    body: CategoryUpdate,
    service: CategoryService = Depends(get_category_service),
) -> CategoryUpdateResponse:
    category = await service.update_category(category_id, body.name)
    return CategoryUpdateResponse(
        message=SUCCESS_MESSAGE,
        category=CategoryResponse.model_validate(category),
    )


@router.delete("", response_model=MessageResponse, responses=_FIELD_ERRORS)
async def delete_category_without_id(
    service: CategoryService = Depends(get_category_service),
) -> None:
    # The id is mandatory: remove_category(None) raises FieldValidationError (400).
    await service.remove_category(None)


@router.delete("/{category_id}", response_model=MessageResponse)
async def delete_category(
    category_id: uuid.UUID,
    service: CategoryService = Depends(get_category_service),
) -> MessageResponse:
    await service.remove_category(category_id)
    return MessageResponse(message=SUCCESS_MESSAGE)
