"""Category model."""

from sqlalchemy import Column, Integer, String

from pocketbook.database import Base
from pocketbook.models.mixins import TimestampMixin


class Category(Base, TimestampMixin):
    """Category model; transactions reference it by `type` value."""

    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, index=True)
    type = Column(String(255), unique=True, nullable=False, index=True)
    color = Column(String(50), nullable=False)
