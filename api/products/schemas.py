"""
Pydantic schemas for product endpoints.
"""

from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, Field


class CreateProductRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    price: Decimal = Field(..., ge=0, max_digits=12, decimal_places=2)
    description: str = Field(default="", max_length=10000)
    image: str | None = Field(default=None, max_length=1024)
    category: int = Field(..., ge=1)


class UpdateProductRequest(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    price: Decimal | None = Field(default=None, ge=0, max_digits=12, decimal_places=2)
    description: str | None = Field(default=None, max_length=10000)
    image: str | None = Field(default=None, max_length=1024)
    category: int | None = Field(default=None, ge=1)

    def changes(self) -> dict:
        """
        Column changes for the fields the client actually sent.
        """
        data = self.model_dump(exclude_none=True)
        if "category" in data:
            data["category_id"] = data.pop("category")
        return data
