"""SQLAlchemy ORM models for the album catalog."""

from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy import ForeignKey, Integer, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


def utc_now() -> datetime:
    """Get current UTC time."""
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass


class StudioRecord(Base):
    """Curated studio. Rows are only created explicitly, never by imports."""

    __tablename__ = "studios"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    intro: Mapped[Optional[str]] = mapped_column(String(1024), nullable=True)
    cover_url: Mapped[Optional[str]] = mapped_column(String(512), nullable=True)
    created_at: Mapped[datetime] = mapped_column(default=utc_now, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(default=utc_now, onupdate=utc_now, nullable=False)

    albums: Mapped[List["AlbumRecord"]] = relationship(back_populates="studio")


class ModelRecord(Base):
    """Performer shown in albums. Created on demand during imports."""

    __tablename__ = "models"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    created_at: Mapped[datetime] = mapped_column(default=utc_now, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(default=utc_now, onupdate=utc_now, nullable=False)

    albums: Mapped[List["AlbumRecord"]] = relationship(back_populates="model")


class AlbumRecord(Base):
    """Imported album. Its ID names the storage directory."""

    __tablename__ = "albums"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(1024), nullable=False, index=True)
    studio_id: Mapped[int] = mapped_column(
        ForeignKey("studios.id", ondelete="RESTRICT"), nullable=False, index=True
    )
    model_id: Mapped[Optional[int]] = mapped_column(
        ForeignKey("models.id", ondelete="SET NULL"), nullable=True, index=True
    )
    resource_url: Mapped[str] = mapped_column(String(512), nullable=False, unique=True)
    source_page_url: Mapped[Optional[str]] = mapped_column(String(512), nullable=True)
    created_at: Mapped[datetime] = mapped_column(default=utc_now, nullable=False)

    studio: Mapped[StudioRecord] = relationship(back_populates="albums")
    model: Mapped[Optional[ModelRecord]] = relationship(back_populates="albums")
