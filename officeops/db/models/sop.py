"""Sop (standard operating procedure document) model."""
from datetime import datetime, timezone as tz
from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.orm import relationship

from officeops.db.base import Base


class Sop(Base):
    __tablename__ = "sops"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(255), nullable=False)
    # version/file_url mirror the latest sop_files entry
    version = Column(String(20), nullable=True)
    file_url = Column(String(500), nullable=True)
    wing_id = Column(Integer, nullable=True, index=True)
    subw_id = Column(Integer, nullable=True, index=True)
    visibility = Column(String(20), nullable=False, default="public")
    created_by = Column(Integer, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(tz.utc))
    updated_at = Column(DateTime(timezone=True), nullable=True)

    # Relationships
    files = relationship("SopFile", back_populates="sop", cascade="all, delete-orphan")
