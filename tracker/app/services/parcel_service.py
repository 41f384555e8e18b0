"""
Parcel lifecycle service.

Business rules on top of any ParcelStoreProtocol implementation:
registration, status progression and the registered-only restrictions
on changing the address and deleting.
"""

import logging
from datetime import datetime, timezone
from typing import List

from tracker.app.core.exceptions import ParcelStateError
from tracker.app.models.parcel_enums import ParcelStatus
from tracker.app.schemas.parcel import ParcelCreate, ParcelRead
from tracker.app.services.parcel_store import ParcelStoreProtocol

logger = logging.getLogger("tracker.service")


def rfc3339_now() -> str:
    """Current UTC time in RFC3339 with seconds precision."""
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


class ParcelService:

    def __init__(self, store: ParcelStoreProtocol):
        self.store = store

    async def register(self, client: int, address: str) -> ParcelRead:
        """
        Register a new parcel for a client.

        The parcel starts in REGISTERED with the current time as created_at.
        """
        parcel = ParcelCreate(
            client=client,
            status=ParcelStatus.REGISTERED.value,
            address=address,
            created_at=rfc3339_now(),
        )
        number = await self.store.add(parcel)
        logger.info(
            "Parcel registered",
            extra={"number": number, "client": client, "created_at": parcel.created_at},
        )
        return ParcelRead(number=number, **parcel.model_dump())

    async def client_parcels(self, client: int) -> List[str]:
        """Describe every parcel of a client, one line each."""
        parcels = await self.store.get_by_client(client)
        lines = []
        for parcel in parcels:
            line = (
                f"Parcel #{parcel.number} to {parcel.address} from client {parcel.client}, "
                f"registered at {parcel.created_at}, status {parcel.status}"
            )
            logger.info(line)
            lines.append(line)
        return lines

    async def next_status(self, number: int) -> ParcelStatus:
        """
        Advance the parcel to its next lifecycle stage.

        A delivered parcel stays delivered.

        Raises:
            ParcelNotFoundError: If the parcel does not exist
            ValueError: If the stored status is not a known ParcelStatus
        """
        parcel = await self.store.get(number)
        current = ParcelStatus(parcel.status)
        following = current.next()
        if following is None:
            logger.info("Parcel already delivered", extra={"number": number})
            return current

        await self.store.set_status(number, following.value)
        logger.info(
            "Parcel status changed",
            extra={"number": number, "from_status": current.value, "to_status": following.value},
        )
        return following

    async def change_address(self, number: int, address: str) -> None:
        """
        Raises:
            ParcelNotFoundError: If the parcel does not exist
            ParcelStateError: If the parcel has already left REGISTERED
        """
        await self._require_registered(number, "change address of")
        await self.store.set_address(number, address)
        logger.info("Parcel address changed", extra={"number": number})

    async def delete(self, number: int) -> None:
        """
        Raises:
            ParcelNotFoundError: If the parcel does not exist
            ParcelStateError: If the parcel has already left REGISTERED
        """
        await self._require_registered(number, "delete")
        await self.store.delete(number)
        logger.info("Parcel deleted", extra={"number": number})

    async def _require_registered(self, number: int, action: str) -> None:
        parcel = await self.store.get(number)
        if parcel.status != ParcelStatus.REGISTERED.value:
            raise ParcelStateError(number, parcel.status, action)
