"""Category entity. Icon and color are presentation-only."""

from datetime import datetime

from pydantic import BaseModel

from personal_ledger.models.enums import TransactionType


class Category(BaseModel):
    model_config = {"frozen": True}

    id: str
    name: str
    icon: str = "pricetag"
    color: str = "#6B7280"
    type: TransactionType
    is_default: bool = False
    created_at: datetime
