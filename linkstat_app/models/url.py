from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from linkstat_app.database.connection import Base


class URL(Base):
    """
    Short URL record.

    ``alias`` carries the UNIQUE constraint that makes insert the atomic
    check-and-set for alias uniqueness. Click events live in their own
    table so each click is a single-row INSERT.
    """
    __tablename__ = "urls"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    # unique=True also creates the index
    alias = Column(String(64), unique=True, nullable=False, index=True)
    long_url = Column(Text, nullable=False)
    topic = Column(String(255), nullable=True, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    click_events = relationship(
        "ClickEvent",
        back_populates="url",
        order_by="ClickEvent.id",
        lazy="selectin",
    )


class ClickEvent(Base):
    """One redirect of a short URL. Append-only."""
    __tablename__ = "click_events"

    id = Column(Integer, primary_key=True, autoincrement=True)
    url_id = Column(Integer, ForeignKey("urls.id"), nullable=False, index=True)
    # ISO-8601 string, compared by its date prefix
    timestamp = Column(String(40), nullable=False)
    ip = Column(String(64))
    os = Column(String(128))
    device = Column(String(64))
    browser = Column(String(128))

    url = relationship("URL", back_populates="click_events")
