"""SQLAlchemy models for moneyboard database."""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    ForeignKey,
    DateTime,
    Date,
    UniqueConstraint,
    create_engine,
    event,
)
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()


class Category(Base):
    """Spending category model."""

    __tablename__ = "categories"

    id = Column(Integer, primary_key=True)
    name = Column(String, unique=True, nullable=False)
    # Casefolded name; enforces case-insensitive uniqueness beyond ASCII
    name_key = Column(String, unique=True, nullable=False)
    color_hex = Column(String, nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    transactions = relationship("Transaction", back_populates="category")
    mappings = relationship("Mapping", back_populates="category")


class Transaction(Base):
    """Transaction model."""

    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True)
    usage_date = Column(Date, nullable=False, index=True)
    usage_name = Column(String, nullable=False, index=True)
    amount = Column(Integer, nullable=False)
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=True)
    imported_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    category = relationship("Category", back_populates="transactions")


class Mapping(Base):
    """Learned usage name to category mapping model."""

    __tablename__ = "mappings"

    id = Column(Integer, primary_key=True)
    usage_name = Column(String, unique=True, nullable=False)
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=False)

    # Relationships
    category = relationship("Category", back_populates="mappings")


class ImportHistory(Base):
    """Import history model, one row per imported month."""

    __tablename__ = "import_history"

    id = Column(Integer, primary_key=True)
    year = Column(Integer, nullable=False)
    month = Column(Integer, nullable=False)
    file_hash = Column(String, nullable=False)
    imported_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)
    transaction_count = Column(Integer, nullable=False)

    # Unique constraint on year + month
    __table_args__ = (UniqueConstraint("year", "month", name="uq_import_history_period"),)


def category_name_key(name: str) -> str:
    """Return the lookup key of a category name (trimmed and casefolded)."""
    return name.strip().casefold()


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine: Engine = create_engine(database_url, echo=False)
    if engine.dialect.name == "sqlite":
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
