"""SopFile model (append-only version lineage entry)."""
from datetime import datetime, timezone as tz
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Index
from sqlalchemy.orm import relationship

from officeops.db.base import Base


class SopFile(Base):
    __tablename__ = "sop_files"

    id = Column(Integer, primary_key=True, autoincrement=True)
    sop_id = Column(Integer, ForeignKey("sops.id", ondelete="CASCADE"), nullable=False)
    title = Column(String(255), nullable=False)
    file_url = Column(String(500), nullable=False)
    version = Column(String(20), nullable=False)
    timestamp = Column(Integer, nullable=False)  # epoch seconds
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(tz.utc))

    # Relationships
    sop = relationship("Sop", back_populates="files")

    __table_args__ = (Index("idx_sop_files_sop", "sop_id", "timestamp"),)
