# product_api/schemas.py

from typing import List

from pydantic import BaseModel, ConfigDict, Field


class ProductBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    price: float = Field(..., gt=0)


class ProductCreate(ProductBase):
    pass


class ProductUpdate(ProductBase):
    availability: bool


class ProductResponse(BaseModel):
    id: int
    name: str
    price: float
    availability: bool

    # Timestamps stay on the ORM row and are never serialized
    model_config = ConfigDict(from_attributes=True)


class ProductEnvelope(BaseModel):
    data: ProductResponse


class ProductListEnvelope(BaseModel):
    data: List[ProductResponse]


class MessageEnvelope(BaseModel):
    data: str = Field(..., examples=["deleted"])
