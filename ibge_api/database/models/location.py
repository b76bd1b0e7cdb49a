"""
Location SQLAlchemy model for IBGE municipalities.
"""
from datetime import datetime

from sqlalchemy import String, func
from sqlalchemy.orm import Mapped, mapped_column

from ibge_api.database.connection import Base


class Location(Base):
    """
    IBGE municipality record.

    The primary key is the 7-digit IBGE code, which never changes once the
    record is created. City/state pairs are not unique.
    """

    __tablename__ = "locations"

    id: Mapped[str] = mapped_column(String(7), primary_key=True)
    state: Mapped[str] = mapped_column(String(2), index=True)
    city: Mapped[str] = mapped_column(String(80), index=True)

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        default=func.now(), onupdate=func.now()
    )

    def __repr__(self) -> str:
        return f"<Location(id={self.id}, city='{self.city}', state='{self.state}')>"
