"""
KeyValueEntry — the persistence store behind the dashboard.

One row per storage key. The whole snapshot document is serialised as
JSON into `value` and overwritten on every save (last write wins).
"""
from datetime import datetime
from sqlalchemy import String, Text, DateTime, func
from sqlalchemy.orm import Mapped, mapped_column

from ltos.db.base import Base


class KeyValueEntry(Base):
    __tablename__ = "kv_store"

    key: Mapped[str] = mapped_column(String(128), primary_key=True)
    value: Mapped[str] = mapped_column(
        Text, nullable=False,
        comment="JSON document, camelCase keys, timestamps in epoch ms",
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )
