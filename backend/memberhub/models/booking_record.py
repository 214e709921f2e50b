"""
Booking record models.

A booking is one expected or received membership payment. BookingRecord is
the persisted JSON document; bookings without an owner are system bookings
that have not been matched to a member yet.
"""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, Field


class BookingRecord(BaseModel):
    """Persisted booking. deletedAt marks a soft-deleted record."""

    id: str = Field(..., description="UUID identifier")
    userId: Optional[str] = Field(None, description="Owning member, null for system bookings")
    expectedPurpose: Optional[str] = None
    expectedAmount: Optional[Decimal] = Field(None, max_digits=10, decimal_places=2)
    receivedAt: Optional[datetime] = None
    actualPurpose: Optional[str] = None
    actualAmount: Optional[Decimal] = Field(None, max_digits=10, decimal_places=2)
    note: Optional[str] = None
    code: Optional[str] = None
    createdAt: datetime
    updatedAt: datetime
    deletedAt: Optional[datetime] = None

    @property
    def is_deleted(self) -> bool:
        return self.deletedAt is not None


class BookingCreateRequest(BaseModel):
    """Request body for recording a booking."""

    userId: Optional[str] = Field(None, description="Owning member; omit for a system booking")
    expectedPurpose: Optional[str] = Field(None, max_length=255)
    expectedAmount: Optional[Decimal] = Field(None, ge=0, max_digits=10, decimal_places=2)
    receivedAt: Optional[datetime] = None
    actualPurpose: Optional[str] = Field(None, max_length=255)
    actualAmount: Optional[Decimal] = Field(None, ge=0, max_digits=10, decimal_places=2)
    note: Optional[str] = Field(None, max_length=1000)
    code: Optional[str] = Field(None, max_length=64)

    model_config = {
        "json_schema_extra": {
            "example": {
                "userId": "550e8400-e29b-41d4-a716-446655440000",
                "expectedPurpose": "Membership fee 2026",
                "expectedAmount": "60.00",
                "receivedAt": "2026-01-15T09:30:00Z",
                "actualPurpose": "MEMBERSHIP 2026 LOVELACE",
                "actualAmount": "60.00",
                "code": "MF-2026-0042",
            }
        }
    }


class BookingAssignRequest(BaseModel):
    """Request body for moving a booking to a member or back to the system bucket."""

    userId: Optional[str] = Field(None, description="New owner; null returns the booking to the system bucket")


class BookingPage(BaseModel):
    """One page of bookings, newest first."""

    content: List[BookingRecord]
    page: int = Field(..., description="Zero-based page index")
    size: int = Field(..., description="Requested page size")
    totalElements: int
    totalPages: int
    first: bool
    last: bool
