"""
Pydantic schemas for user endpoints.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class UpdateMeRequest(BaseModel):
    email: str | None = Field(default=None, min_length=3, max_length=320)
    password: str | None = Field(default=None, min_length=8, max_length=128)


class UpdateAdminRequest(BaseModel):
    admin: bool
