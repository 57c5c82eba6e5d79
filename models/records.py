from sqlalchemy import Column, String, JSON, DateTime
from sqlalchemy.sql import func
from database import Base

class RecordCollection(Base):
    __tablename__ = "record_collections"

    name = Column(String(50), primary_key=True, index=True)   # Example: "students", "teachers", "results"
    payload = Column(JSON, nullable=False, default=list)      # Poori list ek saath store hoti hai
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())
