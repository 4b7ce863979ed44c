"""Sandbox environment model: an isolated namespace of emulated endpoints."""

import uuid
from datetime import datetime
from sqlalchemy import Integer, String, Text, Boolean, ForeignKey, DateTime, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship
from replyhub.db.postgres import Base


class SandboxEnvironment(Base):
    __tablename__ = "sandbox_environments"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    # Null for the shared demo environment
    user_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True
    )

    name: Mapped[str] = mapped_column(String(255))
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    owner: Mapped["User | None"] = relationship("User", back_populates="sandbox_environments")
    endpoints: Mapped[list["SandboxApiEndpoint"]] = relationship(
        "SandboxApiEndpoint",
        back_populates="environment",
        cascade="all, delete-orphan",
        order_by="SandboxApiEndpoint.id",
    )
    logs: Mapped[list["SandboxLog"]] = relationship(
        "SandboxLog",
        back_populates="environment",
        cascade="all, delete-orphan",
    )
