"""Public contact-us submissions."""

from __future__ import annotations

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from rentaride.core.extensions import db

from .base import PKMixin, ReprMixin, TimestampMixin


class ContactMessage(PKMixin, ReprMixin, TimestampMixin, db.Model):
    __tablename__ = "contact_messages"

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(String(254), nullable=False)
    title: Mapped[str] = mapped_column(String(30), nullable=False)
    body: Mapped[str] = mapped_column(String(100), nullable=False)
