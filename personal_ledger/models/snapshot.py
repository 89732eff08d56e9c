"""
Ledger snapshot model.

Each row holds one complete serialized ledger state. Rows are
append-only; the newest row is the state to load at startup.
"""

from datetime import datetime

from sqlalchemy import String, DateTime, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from personal_ledger.models.base import Base


class LedgerSnapshot(Base):
    __tablename__ = "ledger_snapshots"

    id: Mapped[int] = mapped_column(primary_key=True)
    version: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    reason: Mapped[str] = mapped_column(String(100), nullable=False)
    payload: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow, index=True
    )

    def __repr__(self) -> str:
        return f"<LedgerSnapshot {self.id} ({self.reason})>"
