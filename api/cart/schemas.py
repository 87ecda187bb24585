"""
Pydantic schemas for cart endpoints.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class AddToCartRequest(BaseModel):
    product: int = Field(..., ge=1)
    quantity: int = Field(default=1, ge=1, le=10000)


class UpdateLineRequest(BaseModel):
    quantity: int = Field(..., ge=1, le=10000)
