from datetime import datetime

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


class MovementCreate(BaseModel):
    product_id: int = Field(
        validation_alias=AliasChoices("product_id", "productId"),
    )
    warehouse_id: int = Field(
        validation_alias=AliasChoices("warehouse_id", "warehouseId"),
    )
    quantity_change: int
    reason: str = Field(min_length=1)

    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    @field_validator("quantity_change")
    @classmethod
    def _non_zero(cls, value: int) -> int:
        if value == 0:
            raise ValueError("quantity_change must be non-zero")
        return value


class MovementRead(BaseModel):
    id: int
    product_id: int
    warehouse_id: int
    quantity_change: int
    reason: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class MovementRecorded(BaseModel):
    message: str = "Inventory movement logged successfully"
    movement: MovementRead
    quantity: int
