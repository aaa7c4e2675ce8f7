
from sqlalchemy import Column, String, Text, DateTime, func
from app.database import Base

class KeyValueEntry(Base):
    __tablename__ = "kv_entries"

    key = Column(String(64), primary_key=True)
    value = Column(Text, nullable=False)
    updated_at = Column(DateTime(timezone=False), server_default=func.now(), onupdate=func.now(), nullable=False)
