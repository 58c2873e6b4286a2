# rentalhub/schemas/identity.py
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class IdentitySubmit(BaseModel):
    # URL returned by object storage; bytes never reach this service
    document_url: str = Field(..., min_length=1, max_length=1024)


class IdentityDecision(BaseModel):
    """
    Admin verdict:
      { "status": "approved" }
      { "status": "rejected", "reason": "photo is blurry" }
    """
    status: str
    reason: Optional[str] = None


class IdentityOut(BaseModel):
    id: int
    user_id: int
    document_url: str
    status: str
    verified: bool
    reason: Optional[str] = None
    verified_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class IdentityReviewItem(IdentityOut):
    """Pending queue row for admins, with the renter's contact."""
    user_name: str
    user_email: str
