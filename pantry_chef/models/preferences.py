from sqlalchemy import Column, String, Integer, Boolean, Text

from pantry_chef.database import Base, IdMixin, TimestampMixin


class UserPreferences(IdMixin, TimestampMixin, Base):
    __tablename__ = "user_preferences"

    user_id = Column(String, nullable=False, unique=True, default="default-user")

    # JSON-encoded string lists
    dietary_restrictions = Column(Text, nullable=False, default="[]")
    allergies = Column(Text, nullable=False, default="[]")
    favorite_cuisines = Column(Text, nullable=False, default="[]")
    disliked_ingredients = Column(Text, nullable=False, default="[]")

    servings_default = Column(Integer, nullable=False, default=4)

    shopping_day = Column(String, nullable=False, default="Sunday")
    low_stock_threshold = Column(Integer, nullable=False, default=20)  # percent, 0-100
    expiry_warning_days = Column(Integer, nullable=False, default=3)

    expiry_alerts = Column(Boolean, nullable=False, default=True)
    low_stock_alerts = Column(Boolean, nullable=False, default=True)
    shopping_reminders = Column(Boolean, nullable=False, default=True)
    recipe_suggestions = Column(Boolean, nullable=False, default=True)
