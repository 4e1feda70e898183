from datetime import datetime, timezone

from database import Base
from sqlalchemy import Column, DateTime, Integer, String


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ShortLink(Base):
    __tablename__ = "short_links"

    id = Column(Integer, primary_key=True, index=True)
    original_url = Column(String(2048), nullable=False, index=True)
    short_code = Column(String(64), unique=True, index=True, nullable=False)
    clicks = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    last_accessed = Column(DateTime(timezone=True), nullable=True)

    def __repr__(self) -> str:
        return f"<ShortLink {self.short_code} -> {self.original_url}>"
