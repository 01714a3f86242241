from sqlalchemy import Column, String, Float, Boolean, DateTime

from pantry_chef.database import Base, IdMixin


class ShoppingListItem(IdMixin, Base):
    __tablename__ = "shopping_list_items"

    name = Column(String, nullable=False, index=True)
    quantity = Column(Float, nullable=False)
    unit = Column(String, nullable=False)
    category = Column(String, nullable=False)
    purchased = Column(Boolean, nullable=False, default=False)
    expiry_date = Column(DateTime(timezone=True))
