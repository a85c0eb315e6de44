from sqlalchemy import Column, Integer, String, DateTime, func, ForeignKey
from sqlalchemy.orm import relationship
from database import Base


class User(Base):
    __tablename__ = "users"
    id = Column(Integer, primary_key=True, index=True)
    full_name = Column(String, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    hashed_password = Column(String, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)


class UrlMapping(Base):
    __tablename__ = "urls"
    id = Column(Integer, primary_key=True, index=True)
    short_id = Column(String, unique=True, index=True, nullable=False)
    original_url = Column(String, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)
    # access log, append-only, oldest first
    visits = relationship("AccessRecord", back_populates="url", order_by="AccessRecord.id", lazy="raise")


class AccessRecord(Base):
    __tablename__ = "url_visits"
    id = Column(Integer, primary_key=True)
    url_id = Column(Integer, ForeignKey("urls.id"), index=True, nullable=False)
    visited_at = Column(DateTime(timezone=True), nullable=False)
    url = relationship("UrlMapping", back_populates="visits")
