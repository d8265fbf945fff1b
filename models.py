from sqlalchemy import Boolean, Column, Date, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship
from database import Base

class User(Base):
    __tablename__ = "users"
    id = Column(Integer, primary_key=True, index=True)
    email = Column(String, unique=True, index=True)
    hashed_password = Column(String)
    profile = relationship("Profile", back_populates="owner", uselist=False)

class Profile(Base):
    __tablename__ = "profiles"
    # One profile per user: the owner's id is the document key
    owner_id = Column(Integer, ForeignKey("users.id"), primary_key=True, index=True)
    email = Column(String, nullable=True)

    # Personal
    full_name = Column(String, nullable=False)
    date_of_birth = Column(Date, nullable=False)
    gender = Column(String, nullable=False)
    height = Column(String, nullable=True) # e.g., '5ft6in'
    marital_status = Column(String, nullable=True)
    mother_tongue = Column(String, nullable=True)

    # Location
    country = Column(String, nullable=True)
    state = Column(String, nullable=True)
    city = Column(String, nullable=True, index=True)

    # Education & Career
    education = Column(String, nullable=True)
    occupation = Column(String, nullable=True)
    income = Column(String, nullable=True) # band in lakhs, e.g., '5-7'

    # Family & Religion
    religion = Column(String, nullable=True, index=True)
    caste = Column(String, nullable=True)
    family_type = Column(String, nullable=True)
    family_status = Column(String, nullable=True)

    # Lifestyle
    diet = Column(String, nullable=True)
    smoking = Column(String, nullable=True)
    drinking = Column(String, nullable=True)
    horoscope_match = Column(Boolean, nullable=True)

    about = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False)

    owner = relationship("User", back_populates="profile")

class RevokedToken(Base):
    """JWT ids invalidated by logout."""
    __tablename__ = "revoked_tokens"
    jti = Column(String, primary_key=True)
    revoked_at = Column(DateTime(timezone=True), nullable=False)
