"""
Pydantic schemas for category endpoints.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class CategoryRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=128)
