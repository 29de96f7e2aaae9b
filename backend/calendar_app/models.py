from __future__ import annotations
from datetime import datetime

from sqlalchemy import Integer, String, Text, DateTime
from sqlalchemy.orm import Mapped, mapped_column

from .db import Base

class Event(Base):
    __tablename__ = "events"

    id:         Mapped[int]      = mapped_column(Integer, primary_key=True, index=True)
    title:      Mapped[str]      = mapped_column(String(200), nullable=False)
    start_at:   Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, index=True)
    end_at:     Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    memo:       Mapped[str]      = mapped_column(Text, nullable=False, default="")
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
