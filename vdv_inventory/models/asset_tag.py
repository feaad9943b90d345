from sqlalchemy import Column, String, DateTime, ForeignKey, Enum, CheckConstraint
from sqlalchemy.orm import relationship
from datetime import datetime
import uuid

from vdv_inventory.models.base import Base
from vdv_inventory.core.constants import TagStatus
from vdv_inventory.services.qr import scan_url


class AssetTag(Base):
    __tablename__ = "asset_tags"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    token = Column(String, unique=True, nullable=False, index=True)  # QR payload / URL segment
    status = Column(
        Enum(TagStatus, native_enum=False, length=20),
        nullable=False,
        default=TagStatus.unlinked,
    )
    # Unique: one tag per machine at a time
    machine_id = Column(String, ForeignKey("machines.id", ondelete="SET NULL"), unique=True, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    linked_at = Column(DateTime, nullable=True)

    machine = relationship("Machine", back_populates="asset_tag", lazy="selectin")

    __table_args__ = (
        CheckConstraint(
            "(status = 'linked' AND machine_id IS NOT NULL) OR "
            "(status = 'unlinked' AND machine_id IS NULL)",
            name="ck_asset_tags_link_state",
        ),
    )

    @property
    def scan_url(self):
        return scan_url(self.token)
