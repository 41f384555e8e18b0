"""
Parcel Pydantic schemas.

Defines the input and output shapes the store maps rows to and from.
"""

from pydantic import BaseModel, ConfigDict, Field


class ParcelCreate(BaseModel):
    """Schema for a parcel that has not been stored yet."""
    client: int = Field(..., description="Owning client identifier")
    status: str = Field(..., description="Lifecycle stage (see ParcelStatus)")
    address: str = Field(..., description="Delivery address")
    created_at: str = Field(..., description="Creation time, RFC3339")


class ParcelRead(ParcelCreate):
    """Schema for a stored parcel."""
    number: int
    
    model_config = ConfigDict(from_attributes=True)
