"""Shared schema types: pagination, messages, error responses."""

from pydantic import BaseModel, ConfigDict, Field


class PageInfo(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    page: int
    page_size: int = Field(alias="pageSize")
    total: int


class MessageResponse(BaseModel):
    message: str


class FieldErrorResponse(BaseModel):
    errors: dict[str, str]


class ErrorResponse(BaseModel):
    type: str
    title: str
    status: int
    detail: str | dict | list
    instance: str
