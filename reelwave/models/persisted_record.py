"""
Persisted Record Model for durable client-side state
Stores named JSON documents (preferences, movie details cache) with a schema version
"""
from sqlalchemy import Column, Integer, String, JSON, DateTime
from sqlalchemy.sql import func
from reelwave.database import Base


class PersistedRecord(Base):
    """
    One named persisted document

    Attributes:
        name: Record name ("preferences", "movie-details")
        schema_version: Version of the payload layout, checked on load
        payload: JSON document
        updated_at: Timestamp of the last write
    """
    __tablename__ = "persisted_records"

    name = Column(String(100), primary_key=True)
    schema_version = Column(Integer, nullable=False, default=1)
    payload = Column(JSON, nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    def __repr__(self):
        return f"<PersistedRecord(name='{self.name}', schema_version={self.schema_version})>"
