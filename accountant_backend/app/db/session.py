"""
Database session configuration.

This module handles database engine creation and session management
using SQLAlchemy with async support for PostgreSQL, plus the transaction
boundary used by every multi-row write.
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.orm import declarative_base

from accountant_backend.app.core.config import settings
from accountant_backend.app.core.exceptions import AppException, PersistenceError
from accountant_backend.app.core.observability import logger

# Create async engine
engine = create_async_engine(
    settings.database_url,
    echo=settings.db_echo,
    pool_size=settings.db_pool_size,
    max_overflow=settings.db_max_overflow,
    future=True,
)

# Create async session factory
AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autocommit=False,
    autoflush=False,
)

# Create declarative base for models
Base = declarative_base()


async def get_db():
    """
    FastAPI dependency for database sessions.

    Yields an async database session and ensures it's properly closed.
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
        finally:
            await session.close()


@asynccontextmanager
async def atomic(db: AsyncSession, operation: str = "write") -> AsyncIterator[AsyncSession]:
    """
    All-or-nothing unit of work on an existing session.

    Everything flushed inside the block is committed together when the block
    exits cleanly. Any exception rolls the whole batch back before it
    propagates; driver/ORM failures are re-raised as PersistenceError.

    Usage:
        async with atomic(db, "verify_payment"):
            invoice.status = InvoiceStatus.PAID
            await LedgerStore.add_entry(db, ...)
    """
    try:
        yield db
        await db.commit()
    except AppException as exc:
        await db.rollback()
        logger.warning(
            "Rolled back %s: %s", operation, exc.message,
            extra={"operation": operation, "error_code": exc.error_code}
        )
        raise
    except SQLAlchemyError as exc:
        await db.rollback()
        logger.warning(
            "Rolled back %s after persistence failure", operation,
            extra={"operation": operation, "exception": type(exc).__name__}
        )
        raise PersistenceError(f"{operation} failed: {exc.__class__.__name__}") from exc
    except Exception:
        await db.rollback()
        raise
