"""SQLAlchemy models for ledgerkit database."""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    ForeignKey,
    DateTime,
    Date,
    Numeric,
    Boolean,
    UniqueConstraint,
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()


def _now() -> datetime:
    return datetime.now(UTC)


class Entity(Base):
    """Reporting entity model."""

    __tablename__ = "entities"

    id = Column(Integer, primary_key=True)
    name = Column(String, unique=True, nullable=False)
    # Home currency; currencies also point back at their entity
    currency_id = Column(Integer, nullable=True)
    year_start = Column(Integer, default=1, nullable=False)
    created_at = Column(DateTime, default=_now, nullable=False)

    # Relationships
    reporting_periods = relationship(
        "ReportingPeriod", back_populates="entity", cascade="all, delete-orphan"
    )


class Currency(Base):
    """Currency model."""

    __tablename__ = "currencies"

    id = Column(Integer, primary_key=True)
    entity_id = Column(Integer, ForeignKey("entities.id"), nullable=True)
    currency_code = Column(String(3), nullable=False)
    name = Column(String, nullable=False)
    created_at = Column(DateTime, default=_now, nullable=False)

    __table_args__ = (
        UniqueConstraint("entity_id", "currency_code", name="uq_entity_currency_code"),
    )

    # Relationships
    exchange_rates = relationship(
        "ExchangeRate", back_populates="currency", cascade="all, delete-orphan"
    )


class ExchangeRate(Base):
    """Exchange rate model."""

    __tablename__ = "exchange_rates"

    id = Column(Integer, primary_key=True)
    currency_id = Column(Integer, ForeignKey("currencies.id"), nullable=False)
    valid_from = Column(Date, nullable=False)
    rate = Column(Numeric(18, 6), nullable=False)
    created_at = Column(DateTime, default=_now, nullable=False)

    # Relationships
    currency = relationship("Currency", back_populates="exchange_rates")


class ReportingPeriod(Base):
    """Reporting period (fiscal year) model."""

    __tablename__ = "reporting_periods"

    id = Column(Integer, primary_key=True)
    entity_id = Column(Integer, ForeignKey("entities.id"), nullable=False)
    calendar_year = Column(Integer, nullable=False)
    status = Column(String, default="OPEN", nullable=False)
    created_at = Column(DateTime, default=_now, nullable=False)

    __table_args__ = (
        UniqueConstraint("entity_id", "calendar_year", name="uq_entity_calendar_year"),
    )

    # Relationships
    entity = relationship("Entity", back_populates="reporting_periods")


class Category(Base):
    """Account category model."""

    __tablename__ = "categories"

    id = Column(Integer, primary_key=True)
    entity_id = Column(Integer, ForeignKey("entities.id"), nullable=False)
    name = Column(String, nullable=False)
    category_type = Column(String, nullable=False)
    created_at = Column(DateTime, default=_now, nullable=False)

    # Relationships
    accounts = relationship("Account", back_populates="category")


class Account(Base):
    """Financial account model."""

    __tablename__ = "accounts"

    id = Column(Integer, primary_key=True)
    entity_id = Column(Integer, ForeignKey("entities.id"), nullable=False)
    name = Column(String, nullable=False)
    account_type = Column(String, nullable=False)
    code = Column(Integer, nullable=False)
    currency_id = Column(Integer, ForeignKey("currencies.id"), nullable=False)
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=True)
    description = Column(String, nullable=True)
    created_at = Column(DateTime, default=_now, nullable=False)
    updated_at = Column(DateTime, default=_now, onupdate=_now, nullable=False)
    deleted_at = Column(DateTime, nullable=True)

    # Codes are numbered per account type within an entity
    __table_args__ = (
        UniqueConstraint("entity_id", "account_type", "code", name="uq_entity_type_code"),
    )

    # Relationships
    category = relationship("Category", back_populates="accounts")
    currency = relationship("Currency")
    balances = relationship("Balance", back_populates="account", cascade="all, delete-orphan")


class Balance(Base):
    """Opening balance snapshot model."""

    __tablename__ = "balances"

    id = Column(Integer, primary_key=True)
    account_id = Column(Integer, ForeignKey("accounts.id"), nullable=False)
    reporting_period_id = Column(Integer, ForeignKey("reporting_periods.id"), nullable=False)
    exchange_rate_id = Column(Integer, ForeignKey("exchange_rates.id"), nullable=False)
    amount = Column(Numeric(18, 4), nullable=False)
    balance_type = Column(String(1), nullable=False)
    created_at = Column(DateTime, default=_now, nullable=False)

    # Relationships
    account = relationship("Account", back_populates="balances")
    exchange_rate = relationship("ExchangeRate")


class Transaction(Base):
    """Posted transaction model."""

    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True)
    entity_id = Column(Integer, ForeignKey("entities.id"), nullable=False)
    transaction_type = Column(String(2), nullable=False)
    transaction_date = Column(Date, nullable=False)
    account_id = Column(Integer, ForeignKey("accounts.id"), nullable=False)
    exchange_rate_id = Column(Integer, ForeignKey("exchange_rates.id"), nullable=False)
    credited = Column(Boolean, default=True, nullable=False)
    narration = Column(String, nullable=True)
    reference = Column(String, nullable=True)
    created_at = Column(DateTime, default=_now, nullable=False)

    # Relationships
    line_items = relationship(
        "LineItem", back_populates="transaction", cascade="all, delete-orphan"
    )
    ledgers = relationship("Ledger", back_populates="transaction", cascade="all, delete-orphan")


class LineItem(Base):
    """Transaction line item model."""

    __tablename__ = "line_items"

    id = Column(Integer, primary_key=True)
    transaction_id = Column(Integer, ForeignKey("transactions.id"), nullable=False)
    account_id = Column(Integer, ForeignKey("accounts.id"), nullable=False)
    amount = Column(Numeric(18, 4), nullable=False)
    narration = Column(String, nullable=True)

    # Relationships
    transaction = relationship("Transaction", back_populates="line_items")


class Ledger(Base):
    """Ledger posting model."""

    __tablename__ = "ledgers"

    id = Column(Integer, primary_key=True)
    transaction_id = Column(Integer, ForeignKey("transactions.id"), nullable=False)
    account_id = Column(Integer, ForeignKey("accounts.id"), nullable=False)
    entry_type = Column(String(1), nullable=False)
    amount = Column(Numeric(18, 4), nullable=False)
    rate = Column(Numeric(18, 6), nullable=False)
    posting_date = Column(Date, nullable=False)

    # Relationships
    transaction = relationship("Transaction", back_populates="ledgers")


class Assignment(Base):
    """Clearing assignment model."""

    __tablename__ = "assignments"

    id = Column(Integer, primary_key=True)
    transaction_id = Column(Integer, ForeignKey("transactions.id"), nullable=False)
    cleared_id = Column(Integer, ForeignKey("transactions.id"), nullable=False)
    amount = Column(Numeric(18, 4), nullable=False)
    assignment_date = Column(Date, nullable=False)
    created_at = Column(DateTime, default=_now, nullable=False)


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
