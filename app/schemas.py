from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator


class LinkCreate(BaseModel):
    original_url: str = Field("", alias="originalUrl")
    custom_code: str | None = Field(None, alias="customCode")

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("original_url", mode="before")
    @classmethod
    def strip_url(cls, v):
        return (v or "").strip()

    @field_validator("custom_code", mode="before")
    @classmethod
    def blank_code_is_none(cls, v):
        v = (v or "").strip()
        return v or None

class LinkOut(BaseModel):
    id: int
    original_url: str
    short_code: str
    clicks: int
    created_at: datetime
    last_accessed: datetime | None = None

    model_config = ConfigDict(from_attributes=True)

class IndexPage(BaseModel):
    records: list[LinkOut] = []
    total: int = 0
    error: str | None = None
    success: str | None = None
    base_url: str

class Health(BaseModel):
    status: str
    env: str
