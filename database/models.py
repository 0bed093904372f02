# School Fee Tracker - key-value table
from sqlalchemy import Column, String, JSON
from sqlalchemy.orm import declarative_base


Base = declarative_base()


class KVEntry(Base):
    """One record: an opaque string key and a JSON document."""
    __tablename__ = "kv_store"
    key = Column(String(255), primary_key=True)
    value = Column(JSON, nullable=False)

    def __repr__(self):
        return f"<KVEntry(key={self.key})>"
