from datetime import datetime

from sqlalchemy import Column, DateTime, String

from .database import Base


class ConsumedToken(Base):
    """A redeemed magic link, keyed by its ``jti`` claim so it can be redeemed only once."""

    __tablename__ = "consumed_tokens"

    jti = Column(String, primary_key=True)
    email = Column(String, nullable=False, index=True)
    consumed_at = Column(DateTime, default=datetime.utcnow, nullable=False)
