"""User model for the database."""

import enum

from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship

from components.core.database import Base


class UserRole(str, enum.Enum):
    STUDENT = "student"
    STAFF = "staff"
    ADMIN = "admin"


class User(Base):
    """User model representing a borrower in the system."""
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    email = Column(String(255), unique=True, nullable=False)
    password = Column(String(255), nullable=False)  # Hashed password
    role = Column(String(20), nullable=False, default=UserRole.STUDENT.value)

    # Relationship with BorrowRequests
    borrow_requests = relationship("BorrowRequest", back_populates="user")
