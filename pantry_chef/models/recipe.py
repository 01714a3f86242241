from sqlalchemy import Column, String, Integer, Boolean, Text

from pantry_chef.database import Base, IdMixin, TimestampMixin


class Recipe(IdMixin, TimestampMixin, Base):
    __tablename__ = "recipes"

    name = Column(String, nullable=False)
    # Newline-delimited; decoded by services.recipe_codec
    ingredients = Column(Text, nullable=False)
    instructions = Column(Text, nullable=False)
    prep_time = Column(Integer, nullable=False)
    cook_time = Column(Integer, nullable=False)
    servings = Column(Integer, nullable=False)
    calories = Column(Integer, nullable=False)
    category = Column(String, nullable=False, index=True)
    cuisine = Column(String, nullable=False, default="Unknown")
    source = Column(String, nullable=False)
    is_saved = Column(Boolean, nullable=False, default=False)
