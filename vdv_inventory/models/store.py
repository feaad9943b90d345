from sqlalchemy import Column, String, Text, DateTime
from sqlalchemy.orm import relationship
from vdv_inventory.models.base import Base
from datetime import datetime
import uuid


class Store(Base):
    __tablename__ = "stores"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    store_id = Column(String, unique=True, nullable=False)  # external venue code, e.g. "S1"
    name = Column(String, nullable=False)
    address = Column(Text, nullable=True)
    contact_name = Column(String, nullable=True)
    contact_phone = Column(String, nullable=True)
    contact_email = Column(String, nullable=True)
    access_notes = Column(Text, nullable=True)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Weak reference: deleting a store unassigns machines, never deletes them
    machines = relationship("Machine", back_populates="store", passive_deletes=True)
