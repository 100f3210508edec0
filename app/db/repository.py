from typing import Generic, List, Optional, Type, TypeVar
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

ModelT = TypeVar("ModelT")


class Repository(Generic[ModelT]):
    """
    Thin storage wrapper used by the services: list / get / insert / update / delete.

    Writes are flushed, not committed. The service decides when a unit of
    work is complete and commits the session itself.
    """

    def __init__(self, db: AsyncSession, model: Type[ModelT]):
        self.db = db
        self.model = model

    async def list(self, *clauses, order_by=None, **filters) -> List[ModelT]:
        q = select(self.model).where(*clauses).filter_by(**filters)
        if order_by is not None:
            q = q.order_by(order_by)
        elif hasattr(self.model, "seq"):
            q = q.order_by(self.model.seq)
        res = await self.db.execute(q)
        return list(res.scalars().unique().all())

    async def get(self, obj_id) -> Optional[ModelT]:
        q = select(self.model).where(self.model.id == obj_id)
        res = await self.db.execute(q)
        return res.scalars().unique().one_or_none()

    async def insert(self, obj: ModelT) -> ModelT:
        self.db.add(obj)
        await self.db.flush()
        return obj

    async def update(self, obj: ModelT, **changes) -> ModelT:
        for key, value in changes.items():
            setattr(obj, key, value)
        await self.db.flush()
        return obj

    async def delete(self, obj: ModelT) -> None:
        await self.db.delete(obj)
        await self.db.flush()

    async def count(self, *clauses) -> int:
        q = select(func.count()).select_from(self.model).where(*clauses)
        res = await self.db.execute(q)
        return res.scalar_one()
