"""SQLAlchemy models for forexledger database."""

import uuid
from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    ForeignKey,
    DateTime,
    Date,
    Numeric,
    UniqueConstraint,
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

from forexledger.utils.money import FOREIGN_AMOUNT_PLACES

Base = declarative_base()


def _new_id() -> str:
    return uuid.uuid4().hex


class Book(Base):
    """Foreign-currency book model."""

    __tablename__ = "books"

    id = Column(String(32), primary_key=True, default=_new_id)
    name = Column(String, nullable=False)
    bank = Column(String, nullable=False)
    currency_type = Column(String(3), nullable=False)
    balance = Column(Numeric(18, FOREIGN_AMOUNT_PLACES), default=0, nullable=False)
    remaining_twd_fund = Column(Integer, default=0, nullable=False)
    twd_profit = Column(Integer, nullable=True)
    profit_rate = Column(Numeric(12, 6), nullable=True)
    creator = Column(String, nullable=False, index=True)
    created_time = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    entries = relationship("Entry", back_populates="book", foreign_keys="Entry.book_id")


class Entry(Base):
    """Entry model. Rows are only ever inserted."""

    __tablename__ = "entries"

    id = Column(String(32), primary_key=True, default=_new_id)
    book_id = Column(String(32), ForeignKey("books.id"), nullable=False, index=True)
    transaction_type = Column(String, nullable=False)
    transaction_date = Column(Date, nullable=False)
    foreign_amount = Column(Numeric(18, FOREIGN_AMOUNT_PLACES), nullable=False)
    twd_amount = Column(Integer, nullable=True)
    related_book_id = Column(String(32), ForeignKey("books.id"), nullable=True)
    related_book_foreign_amount = Column(Numeric(18, FOREIGN_AMOUNT_PLACES), nullable=True)
    creator = Column(String, nullable=False)
    created_time = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    book = relationship("Book", back_populates="entries", foreign_keys=[book_id])


class ExchangeRate(Base):
    """Latest rate quoted by a bank for a currency."""

    __tablename__ = "exchange_rates"

    id = Column(Integer, primary_key=True)
    bank = Column(String, nullable=False)
    currency_type = Column(String(3), nullable=False)
    buying_rate = Column(Numeric(12, 6), nullable=False)
    selling_rate = Column(Numeric(12, 6), nullable=True)
    updated_time = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    __table_args__ = (UniqueConstraint("bank", "currency_type", name="uq_bank_currency"),)


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
