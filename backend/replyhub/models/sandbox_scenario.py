"""Test scenario model: one canned behavior of an emulated endpoint."""

from datetime import datetime
from sqlalchemy import Integer, String, Text, Boolean, ForeignKey, DateTime
from sqlalchemy.orm import Mapped, mapped_column, relationship
from replyhub.db.postgres import Base, JSONDocument


class SandboxTestScenario(Base):
    __tablename__ = "sandbox_test_scenarios"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    endpoint_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("sandbox_api_endpoints.id", ondelete="CASCADE"), index=True
    )

    name: Mapped[str] = mapped_column(String(255))
    type: Mapped[str] = mapped_column(String(20))  # success, error, timeout, rate_limit
    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Stored for the UI; not evaluated during resolution
    request_conditions: Mapped[dict | None] = mapped_column(JSONDocument, nullable=True)

    # Response template handed to the customizer
    response_data: Mapped[dict] = mapped_column(JSONDocument, default=dict)
    status_code: Mapped[int] = mapped_column(Integer, default=200)
    delay_ms: Mapped[int] = mapped_column(Integer, default=0)

    # At most one default per endpoint (see scenario_store)
    is_default: Mapped[bool] = mapped_column(Boolean, default=False)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    endpoint: Mapped["SandboxApiEndpoint"] = relationship("SandboxApiEndpoint", back_populates="scenarios")
