"""Emulated API endpoint model."""

from datetime import datetime
from sqlalchemy import Integer, String, Text, ForeignKey, DateTime, Index
from sqlalchemy.orm import Mapped, mapped_column, relationship
from replyhub.db.postgres import Base


class SandboxApiEndpoint(Base):
    """An (api_type, path template, method) triple inside one environment."""
    __tablename__ = "sandbox_api_endpoints"
    __table_args__ = (
        Index("ix_sandbox_api_endpoints_lookup", "environment_id", "api_type", "method", "path"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    environment_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("sandbox_environments.id", ondelete="CASCADE"), index=True
    )

    api_type: Mapped[str] = mapped_column(String(50))  # app_store_connect, google_play_developer, openai
    # Path template, e.g. /v1/apps/{app_id}/reviews
    path: Mapped[str] = mapped_column(String(1000))
    method: Mapped[str] = mapped_column(String(10), default="GET")
    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    environment: Mapped["SandboxEnvironment"] = relationship("SandboxEnvironment", back_populates="endpoints")
    scenarios: Mapped[list["SandboxTestScenario"]] = relationship(
        "SandboxTestScenario",
        back_populates="endpoint",
        cascade="all, delete-orphan",
        order_by="SandboxTestScenario.id",
    )
