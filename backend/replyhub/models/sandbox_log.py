"""Append-only log of emulated API calls."""

from datetime import datetime
from typing import Any
from sqlalchemy import Integer, String, ForeignKey, DateTime
from sqlalchemy.orm import Mapped, mapped_column, relationship
from replyhub.db.postgres import Base, JSONDocument


class SandboxLog(Base):
    __tablename__ = "sandbox_logs"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    environment_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("sandbox_environments.id", ondelete="CASCADE"), index=True
    )
    endpoint_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("sandbox_api_endpoints.id", ondelete="SET NULL"), nullable=True
    )
    scenario_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("sandbox_test_scenarios.id", ondelete="SET NULL"), nullable=True
    )

    # Request details
    request_method: Mapped[str] = mapped_column(String(10))
    request_path: Mapped[str] = mapped_column(String(2000))
    request_headers: Mapped[dict | None] = mapped_column(JSONDocument, nullable=True)
    request_body: Mapped[Any] = mapped_column(JSONDocument, nullable=True)

    # Response details
    response_status: Mapped[int] = mapped_column(Integer)
    response_body: Mapped[Any] = mapped_column(JSONDocument, nullable=True)

    duration: Mapped[int] = mapped_column(Integer, default=0)  # ms
    timestamp: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, index=True)

    # Relationships
    environment: Mapped["SandboxEnvironment"] = relationship("SandboxEnvironment", back_populates="logs")
