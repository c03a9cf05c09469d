"""SQLAlchemy models for expensetrack database."""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    String,
    DateTime,
    Date,
    Boolean,
    Index,
    create_engine,
)
from sqlalchemy.orm import declarative_base, sessionmaker, Session
from sqlalchemy.pool import StaticPool

Base = declarative_base()


class Expense(Base):
    """Expense model."""

    __tablename__ = "expenses"

    id = Column(String(32), primary_key=True)
    title = Column(String, nullable=False)
    # Decimal text, stored as given so reloads match exactly
    amount = Column(String, nullable=False)
    category = Column(String, nullable=False)
    date = Column(Date, nullable=False)
    is_archived = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    __table_args__ = (Index("ix_expenses_archived_date", "is_archived", "date"),)


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    if database_url in ("sqlite://", "sqlite:///:memory:"):
        # Keep a single connection so the in-memory database outlives sessions
        engine = create_engine(
            database_url,
            echo=False,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    else:
        engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine, expire_on_commit=False)
