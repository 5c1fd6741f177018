from decimal import Decimal
from typing import Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class ProductCreate(BaseModel):
    name: str = Field(min_length=1)
    sku: str = Field(min_length=1)
    price: Decimal = Field(ge=0, max_digits=10, decimal_places=2)
    warehouse_id: int = Field(
        validation_alias=AliasChoices("warehouse_id", "warehouseId"),
    )
    initial_quantity: int = Field(
        ge=0,
        validation_alias=AliasChoices("initial_quantity", "initialQuantity"),
    )
    low_stock_threshold: Optional[int] = Field(
        default=None,
        ge=0,
        validation_alias=AliasChoices("low_stock_threshold", "lowStockThreshold"),
    )
    primary_supplier_id: Optional[int] = Field(
        default=None,
        validation_alias=AliasChoices("primary_supplier_id", "primarySupplierId"),
    )

    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)


class ProductRead(BaseModel):
    id: int
    company_id: int
    name: str
    sku: str
    price: float
    low_stock_threshold: int
    primary_supplier_id: Optional[int] = None

    model_config = ConfigDict(from_attributes=True)


class ProductCreated(BaseModel):
    message: str = "Product created successfully"
    product_id: int
