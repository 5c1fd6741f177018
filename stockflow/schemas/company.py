from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class CompanyCreate(BaseModel):
    name: str = Field(min_length=1)

    model_config = ConfigDict(str_strip_whitespace=True)


class CompanyRead(BaseModel):
    id: int
    name: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class WarehouseCreate(BaseModel):
    name: str = Field(min_length=1)
    location: Optional[str] = None

    model_config = ConfigDict(str_strip_whitespace=True)


class WarehouseRead(BaseModel):
    id: int
    company_id: int
    name: str
    location: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class SupplierCreate(BaseModel):
    name: str = Field(min_length=1)
    contact_email: Optional[str] = None

    model_config = ConfigDict(str_strip_whitespace=True)


class SupplierRead(BaseModel):
    id: int
    company_id: int
    name: str
    contact_email: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)
