import asyncio
from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.db.repository import Repository
from app.db.session import Base, build_engine, is_memory_sqlite
from app.models import Budget


def test_memory_urls_share_one_connection():
    assert is_memory_sqlite("sqlite+aiosqlite://")
    assert is_memory_sqlite("sqlite+aiosqlite:///:memory:")
    assert not is_memory_sqlite("sqlite+aiosqlite:///./expenzo.db")
    assert not is_memory_sqlite("postgresql+asyncpg://u:p@localhost/expenzo")

    assert isinstance(build_engine("sqlite+aiosqlite://").pool, StaticPool)
    assert not isinstance(build_engine("sqlite+aiosqlite:///./expenzo.db").pool, StaticPool)


def test_file_database_sessions_do_not_share_a_transaction(tmp_path):
    async def scenario():
        engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'expenzo.db'}")
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

        make_session = sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)

        async with make_session() as writer, make_session() as reader:
            writer.add(Budget(user_id="u1", category="Food", limit=Decimal("100"), period="monthly", spent=Decimal("0")))
            await writer.flush()

            seen_by_reader = await Repository(reader, Budget).count()
            await reader.commit()
            await writer.rollback()

        async with make_session() as fresh:
            stored = await Repository(fresh, Budget).count()

        await engine.dispose()
        return seen_by_reader, stored

    assert asyncio.run(scenario()) == (0, 0)
