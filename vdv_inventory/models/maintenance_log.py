from sqlalchemy import Column, String, Text, DateTime, Numeric, ForeignKey, Index, Enum
from sqlalchemy.orm import relationship
from datetime import datetime
import json
import uuid

from vdv_inventory.models.base import Base
from vdv_inventory.core.constants import MaintenanceType


class MaintenanceLog(Base):
    __tablename__ = "maintenance_logs"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    machine_id = Column(String, ForeignKey("machines.id", ondelete="CASCADE"), nullable=False)
    date = Column(DateTime, nullable=False, default=datetime.utcnow)
    technician = Column(String, nullable=False)
    type = Column(Enum(MaintenanceType, native_enum=False, length=20), nullable=False)
    description = Column(Text, nullable=False)
    parts_replaced_json = Column("parts_replaced", Text, nullable=True)  # JSON: ["belt", "bill validator"]
    cost = Column(Numeric(12, 2), nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    machine = relationship("Machine", back_populates="maintenance_logs", lazy="selectin")

    __table_args__ = (
        Index("idx_maintenance_machine", "machine_id"),
        Index("idx_maintenance_date", "date"),
    )

    @property
    def parts_replaced(self):
        return json.loads(self.parts_replaced_json) if self.parts_replaced_json else []

    @parts_replaced.setter
    def parts_replaced(self, value):
        self.parts_replaced_json = json.dumps(list(value)) if value else None
