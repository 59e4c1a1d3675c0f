"""User model and recipe ownership."""

from sqlalchemy import Column, ForeignKey, Integer, String, UniqueConstraint

from cookbook.database import Base
from cookbook.models.mixins import TimestampMixin


class User(Base, TimestampMixin):
    """User model for recipe ownership."""

    __tablename__ = "users"
    __table_args__ = (
        UniqueConstraint("username", name="users_username_key"),
        UniqueConstraint("email", name="users_email_key"),
    )

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False)
    hashed_password = Column(String(255), nullable=False)


class UserRecipe(Base):
    """Ownership link between a user and a recipe."""

    __tablename__ = "user_recipe"

    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)
    recipe_id = Column(Integer, ForeignKey("recipes.id", ondelete="CASCADE"), primary_key=True)
