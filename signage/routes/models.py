"""Pydantic request models for API endpoints."""

from pydantic import BaseModel, Field


class CreateQueue(BaseModel):
    name: str
    owner: str


class CreateSlide(BaseModel):
    queue_name: str
    owner: str
    name: str
    index: int | None = Field(default=None, ge=0)
    duration: int = Field(default=5000, gt=0)
    markup: str = ""
    enabled: bool = True


class UpdateSlide(BaseModel):
    name: str | None = None
    index: int | None = Field(default=None, ge=0)
    duration: int | None = Field(default=None, gt=0)
    markup: str | None = None
    enabled: bool | None = None
