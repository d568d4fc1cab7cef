from pydantic import BaseModel, Field, ConfigDict

from database import MAX_INTEGER


# Base configuration for ORM compatibility
class ORMBase(BaseModel):
    model_config = ConfigDict(from_attributes=True)


# Shared catalog attributes
class ProductBase(ORMBase):
    title: str = Field(min_length=1)
    description: str
    category: str
    price: float = Field(ge=0)
    rating: float = Field(ge=0, le=5)
    stock: int = Field(ge=0, le=MAX_INTEGER)


# Schema for creating a new product; the id is assigned by the database
class ProductCreate(ProductBase):
    pass


# Full product representation including ID
class ProductOut(ProductBase):
    id: int
