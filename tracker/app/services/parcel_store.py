"""
Parcel persistence.

Translates parcel operations into single SQL statements against the
``parcel`` table and maps rows to ParcelRead schemas. The session is
supplied by the caller; the store never opens, closes or configures it.
"""

import logging
from typing import List, Protocol

from sqlalchemy import select, update, delete
from sqlalchemy.ext.asyncio import AsyncSession

from tracker.app.core.exceptions import ParcelNotFoundError, storage_errors
from tracker.app.core.observability import track_operation
from tracker.app.models.parcel import Parcel
from tracker.app.schemas.parcel import ParcelCreate, ParcelRead

logger = logging.getLogger("tracker.store")


class ParcelStoreProtocol(Protocol):
    """Anything able to persist parcels, whatever engine sits behind it."""

    async def add(self, parcel: ParcelCreate) -> int: ...

    async def get(self, number: int) -> ParcelRead: ...

    async def delete(self, number: int) -> None: ...

    async def set_address(self, number: int, address: str) -> None: ...

    async def set_status(self, number: int, status: str) -> None: ...

    async def get_by_client(self, client: int) -> List[ParcelRead]: ...


class ParcelStore:
    """
    SQLAlchemy-backed parcel store.

    Every write is one statement committed immediately. Writes against a
    number that does not exist touch zero rows and are not errors.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def add(self, parcel: ParcelCreate) -> int:
        """
        Insert a new parcel.

        Returns:
            The number assigned by the database

        Raises:
            StorageError: If the insert fails
        """
        with track_operation(logger, "add", client=parcel.client) as log_data:
            record = Parcel(**parcel.model_dump(mode="json"))
            async with storage_errors(self.db, "add"):
                self.db.add(record)
                await self.db.commit()
                await self.db.refresh(record)
            log_data["number"] = record.number
            return record.number

    async def get(self, number: int) -> ParcelRead:
        """
        Fetch one parcel by number.

        Raises:
            ParcelNotFoundError: If no row has this number
            StorageError: If the query fails
        """
        with track_operation(logger, "get", number=number):
            # populate_existing so rows updated by UPDATE statements are never stale
            stmt = (
                select(Parcel)
                .where(Parcel.number == number)
                .execution_options(populate_existing=True)
            )
            async with storage_errors(self.db, "get"):
                result = await self.db.execute(stmt)
                record = result.scalar_one_or_none()

            if record is None:
                raise ParcelNotFoundError(number)
            return ParcelRead.model_validate(record)

    async def delete(self, number: int) -> None:
        with track_operation(logger, "delete", number=number) as log_data:
            async with storage_errors(self.db, "delete"):
                result = await self.db.execute(
                    delete(Parcel).where(Parcel.number == number)
                )
                await self.db.commit()
            log_data["rowcount"] = result.rowcount

    async def set_address(self, number: int, address: str) -> None:
        await self._update(number, "set_address", address=address)

    async def set_status(self, number: int, status: str) -> None:
        # No transition check here; ParcelService owns the lifecycle
        await self._update(number, "set_status", status=getattr(status, "value", status))

    async def get_by_client(self, client: int) -> List[ParcelRead]:
        """Return every parcel of a client in no particular order."""
        with track_operation(logger, "get_by_client", client=client) as log_data:
            stmt = (
                select(Parcel)
                .where(Parcel.client == client)
                .execution_options(populate_existing=True)
            )
            async with storage_errors(self.db, "get_by_client"):
                result = await self.db.execute(stmt)
                records = result.scalars().all()

            log_data["count"] = len(records)
            return [ParcelRead.model_validate(r) for r in records]

    async def _update(self, number: int, operation: str, **values) -> None:
        with track_operation(logger, operation, number=number) as log_data:
            async with storage_errors(self.db, operation):
                result = await self.db.execute(
                    update(Parcel).where(Parcel.number == number).values(**values)
                )
                await self.db.commit()
            log_data["rowcount"] = result.rowcount
