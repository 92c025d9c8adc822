"""Shared response envelopes."""

from typing import Generic, TypeVar

from pydantic import BaseModel

from hagwon.app.core.pagination import PageMeta

T = TypeVar("T")


class Page(BaseModel, Generic[T]):
    data: list[T]
    meta: PageMeta


class SuccessResponse(BaseModel):
    success: bool = True
