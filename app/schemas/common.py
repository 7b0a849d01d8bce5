"""
Common schemas used across the API
"""
from typing import Generic, TypeVar

from pydantic import BaseModel, Field


T = TypeVar("T")


class PaginationParams(BaseModel):
    """Page-based pagination as requested by the client (normalised by the service)"""
    page: int = Field(default=1, description="1-based page number")
    limit: int = Field(default=10, description="Items per page")


class DataResponse(BaseModel, Generic[T]):
    """Success envelope carrying a payload"""
    message: str
    data: T


class MessageResponse(BaseModel):
    """Success envelope without a payload"""
    message: str


class HealthCheckResponse(BaseModel):
    """Health check response"""
    status: str = "ok"
    service: str
    timestamp: str
    version: str
