from sqlalchemy import Column, String, Text, DateTime, Date, Numeric, ForeignKey, Index, Enum
from sqlalchemy.orm import relationship
from datetime import datetime
import json
import uuid

from vdv_inventory.models.base import Base
from vdv_inventory.core.constants import MachineStatus, DEFAULT_LOCATION
from vdv_inventory.utils.security import encrypt_secret, decrypt_secret
from vdv_inventory.services.qr import scan_url


class Machine(Base):
    __tablename__ = "machines"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    machine_id = Column(String, unique=True, nullable=False)  # human-assigned, e.g. "M1"
    display_name = Column(String, nullable=True)
    gambino_machine_id = Column(String, nullable=True)

    serial_number = Column(String, nullable=True)
    manufacturer = Column(String, nullable=True)
    model = Column(String, nullable=True)
    purchase_date = Column(Date, nullable=True)
    purchase_price = Column(Numeric(12, 2), nullable=True)
    rom_version = Column(String, nullable=True)
    software_version = Column(String, nullable=True)
    dip_switch_json = Column("dip_switch_config", Text, nullable=True)  # JSON object
    credentials_encrypted = Column(Text, nullable=True)  # Fernet token of a JSON object

    current_location = Column(String, nullable=False, default=DEFAULT_LOCATION)
    store_id = Column(String, ForeignKey("stores.id", ondelete="SET NULL"), nullable=True)
    hub_id = Column(String, nullable=True)
    status = Column(
        Enum(MachineStatus, native_enum=False, length=20),
        nullable=False,
        default=MachineStatus.storage,
    )
    game_type = Column(String, nullable=True)
    game_title = Column(String, nullable=True)
    notes = Column(Text, nullable=True)

    qr_token = Column(String, unique=True, nullable=True)
    qr_generated_at = Column(DateTime, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    store = relationship("Store", back_populates="machines", lazy="selectin")
    asset_tag = relationship("AssetTag", back_populates="machine", uselist=False, lazy="selectin")
    maintenance_logs = relationship("MaintenanceLog", back_populates="machine", passive_deletes=True)

    __table_args__ = (
        Index("idx_machines_store", "store_id"),
        Index("idx_machines_hub", "hub_id"),
        Index("idx_machines_status", "status"),
    )

    @property
    def credentials(self):
        if not self.credentials_encrypted:
            return None
        plain = decrypt_secret(self.credentials_encrypted)
        return json.loads(plain) if plain else None

    @credentials.setter
    def credentials(self, value):
        if not value:
            self.credentials_encrypted = None
        else:
            self.credentials_encrypted = encrypt_secret(json.dumps(value))

    @property
    def dip_switch_config(self):
        return json.loads(self.dip_switch_json) if self.dip_switch_json else None

    @dip_switch_config.setter
    def dip_switch_config(self, value):
        self.dip_switch_json = json.dumps(value) if value is not None else None

    @property
    def venue_name(self):
        return self.store.name if self.store else None

    @property
    def asset_tag_token(self):
        return self.asset_tag.token if self.asset_tag else None

    @property
    def qr_url(self):
        return scan_url(self.qr_token) if self.qr_token else None
