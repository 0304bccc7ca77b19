# hospital/services/v1/record_store.py
"""
CRUD adapter over the four named collections.

Every call is a single attempt: no retry, no pagination, no queueing.
Store failures surface as DatabaseError and missing ids as
RecordNotFoundError; callers report them and stop.
"""

from typing import Any, Optional, Sequence, Type
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from common import get_app_logger
from common.api_error import DatabaseError, RecordNotFoundError
from hospital.db.models import Appointment, DbBaseModel, Doctor, Patient, Service

logger = get_app_logger(__name__)

COLLECTIONS: dict[str, Type[DbBaseModel]] = {
    "doctors": Doctor,
    "services": Service,
    "patients": Patient,
    "appointments": Appointment,
}

# Written once at creation, never by update()
_IMMUTABLE_FIELDS = frozenset({"id", "created_at"})


class RecordStore:
    def __init__(self, db: AsyncSession):
        self.db = db

    @staticmethod
    def model_for(collection: str) -> Type[DbBaseModel]:
        try:
            return COLLECTIONS[collection]
        except KeyError:
            raise ValueError(
                f"Unknown collection '{collection}'. Expected one of: {sorted(COLLECTIONS)}"
            ) from None

    async def list(
        self,
        collection: str,
        *,
        order_by: Optional[str] = None,
        descending: bool = False,
    ) -> Sequence[Any]:
        """
        Fetch the entire collection.

        Order is unspecified unless `order_by` names a column.
        """
        model = self.model_for(collection)
        query = select(model).execution_options(
            logging_token=f"RecordStore.list:{collection}"
        )
        if order_by is not None:
            column = getattr(model, order_by)
            query = query.order_by(column.desc() if descending else column.asc())

        try:
            result = await self.db.execute(query)
        except SQLAlchemyError as e:
            logger.error("List failed", collection=collection, error=str(e))
            raise DatabaseError(f"Failed to load {collection}") from e
        return result.scalars().all()

    async def get(self, collection: str, record_id: str) -> Any:
        model = self.model_for(collection)
        try:
            record = await self.db.get(model, record_id)
        except SQLAlchemyError as e:
            logger.error("Get failed", collection=collection, record_id=record_id, error=str(e))
            raise DatabaseError(f"Failed to load {collection}") from e

        if record is None:
            raise RecordNotFoundError(collection, record_id)
        return record

    async def create(self, collection: str, data: dict[str, Any]) -> Any:
        model = self.model_for(collection)
        record = model(**data)
        self.db.add(record)
        await self._commit(collection, "create")
        logger.info("Record created", collection=collection, record_id=record.id)
        return record

    async def update(
        self,
        collection: str,
        record_id: str,
        partial_data: dict[str, Any],
    ) -> Any:
        """
        Write only the given fields. id and created_at are never rewritten.
        """
        record = await self.get(collection, record_id)
        for field, value in partial_data.items():
            if field in _IMMUTABLE_FIELDS:
                continue
            if not hasattr(type(record), field):
                raise ValueError(f"{collection} has no field '{field}'")
            setattr(record, field, value)

        await self._commit(collection, "update")
        logger.info(
            "Record updated",
            collection=collection,
            record_id=record_id,
            fields=sorted(set(partial_data) - _IMMUTABLE_FIELDS),
        )
        return record

    async def delete(self, collection: str, record_id: str) -> None:
        record = await self.get(collection, record_id)
        await self.db.delete(record)
        await self._commit(collection, "delete")
        logger.info("Record deleted", collection=collection, record_id=record_id)

    async def _commit(self, collection: str, operation: str) -> None:
        try:
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(
                "Write failed",
                collection=collection,
                operation=operation,
                error=str(e),
            )
            raise DatabaseError(f"Failed to {operation} {collection} record") from e


__all__ = ["RecordStore", "COLLECTIONS"]
