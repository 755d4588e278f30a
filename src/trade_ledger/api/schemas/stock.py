"""Pydantic schemas for quote endpoints."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class QuoteResponse(BaseModel):
    """Latest quote for a symbol."""

    model_config = {"from_attributes": True}

    symbol: str
    name: Optional[str] = None
    price: float
    change: float
    change_percent: float
    as_of: Optional[datetime] = None
