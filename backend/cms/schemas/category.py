"""Category request/response schemas.

Wire names are camelCase (``createTime``/``updateTime``); attributes stay
snake_case so ORM rows validate directly.
"""

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from cms.schemas.common import PageInfo


class CategoryCreate(BaseModel):
    # Presence and uniqueness of ``name`` are checked by the service so the
    # client gets a field-keyed 400 rather than a 422.
    name: str | None = Field(None, max_length=255)
    description: str | None = None


class CategoryUpdate(BaseModel):
    name: str | None = Field(None, max_length=255)


class CategoryListItem(BaseModel):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: uuid.UUID
    name: str
    create_time: datetime = Field(alias="createTime")
    update_time: datetime = Field(alias="updateTime")


class CategoryResponse(CategoryListItem):
    description: str | None = None


class CategoryListData(BaseModel):
    page: PageInfo | None = None
    items: list[CategoryListItem]


class CategoryListResponse(BaseModel):
    data: CategoryListData


class CategoryDetailResponse(BaseModel):
    category: CategoryResponse


class CategoryUpdateResponse(BaseModel):
    message: str
    category: CategoryResponse
