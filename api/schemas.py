from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, Field


class UploadRequest(BaseModel):
    filename: str
    content: str


class UploadResponse(BaseModel):
    filename: str
    rows: int
    columns: List[str]
    message: str


class SelectionModel(BaseModel):
    x: Optional[str] = None
    y: Optional[List[str]] = None
    kind: Optional[Literal["bar", "line"]] = None


class MetaColumnsResponse(BaseModel):
    columns: List[str] = Field(default_factory=list)
    numeric_columns: List[str] = Field(default_factory=list)
