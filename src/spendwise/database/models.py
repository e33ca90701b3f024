"""SQLAlchemy models for the spendwise database."""

from datetime import datetime, UTC
from sqlalchemy import (
    JSON,
    Column,
    Date,
    DateTime,
    Integer,
    Numeric,
    String,
    create_engine,
)
from sqlalchemy.orm import declarative_base, sessionmaker, Session

Base = declarative_base()


class Category(Base):
    """Category model. Transactions refer to it by ``value``, not by key."""

    __tablename__ = "categories"

    id = Column(Integer, primary_key=True)
    value = Column(String, unique=True, nullable=False)
    label = Column(String, nullable=False)
    emoji = Column(String, nullable=False, default="")
    color = Column(String, nullable=False, default="")
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


class Transaction(Base):
    """Transaction model."""

    __tablename__ = "transactions"

    id = Column(String, primary_key=True)
    amount = Column(Numeric(12, 2), nullable=False)
    description = Column(String, nullable=False, default="")
    category = Column(String, nullable=False, index=True)
    date = Column(Date, nullable=False, index=True)
    time = Column(String(5), nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


class Budget(Base):
    """Budget for one ``MM_YYYY`` or ``YYYY`` period.

    ``category_budgets`` holds amounts as strings to keep them exact.
    """

    __tablename__ = "budgets"

    period = Column(String, primary_key=True)
    category_budgets = Column(JSON, nullable=False, default=dict)
    income = Column(Numeric(12, 2), nullable=True)
    goals = Column(JSON, nullable=False, default=list)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)
    updated_at = Column(
        DateTime,
        default=lambda: datetime.now(UTC),
        onupdate=lambda: datetime.now(UTC),
        nullable=False,
    )


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
