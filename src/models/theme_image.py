"""Theme image model."""

from sqlalchemy import Column, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from src.database import Base
from src.models.mixins import CreatedAtMixin


class ThemeImage(Base, CreatedAtMixin):
    """An uploaded image offered as a blog theme."""

    __tablename__ = "theme_images"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False, default="")
    image_url = Column(String(512), nullable=False)  # e.g. /uploads/1700000000000-3fa2c1d9.png
    uploaded_by = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    # Relationships
    uploader = relationship("User", backref="theme_images")
