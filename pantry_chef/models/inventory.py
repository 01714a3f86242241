from sqlalchemy import Column, String, Integer, DateTime

from pantry_chef.database import Base, IdMixin, utcnow


class InventoryItem(IdMixin, Base):
    __tablename__ = "inventory_items"

    name = Column(String, nullable=False, index=True)
    quantity = Column(Integer, nullable=False)
    unit = Column(String, nullable=False)
    category = Column(String, nullable=False, index=True)
    expiry_date = Column(DateTime(timezone=True), nullable=False)
    added_date = Column(DateTime(timezone=True), default=utcnow, nullable=False)
