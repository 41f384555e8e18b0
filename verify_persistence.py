import asyncio
import sys

from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession

from tracker.app.core.config import settings
from tracker.app.core.exceptions import ParcelNotFoundError
from tracker.app.core.observability import configure_logging
from tracker.app.db.session import init_db
from tracker.app.services.parcel_service import ParcelService
from tracker.app.services.parcel_store import ParcelStore


def open_sessions():
    engine = create_async_engine(settings.database_url, echo=settings.db_echo)
    return engine, async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def run_verification():
    print(f"Testing persistence against: {settings.database_url}")

    # 1. First engine: create schema and register a parcel
    print("\n--- [Step 1] Registering Parcel ---")
    engine, sessions = open_sessions()
    await init_db(bind=engine)
    async with sessions() as session:
        service = ParcelService(ParcelStore(session))
        parcel = await service.register(1000, "verify persistence")
        await service.next_status(parcel.number)
        print(f"✅ Parcel #{parcel.number} registered and sent")
    await engine.dispose()

    # 2. Second engine: the parcel must still be there
    print("\n--- [Step 2] Reopening Database ---")
    engine, sessions = open_sessions()
    try:
        async with sessions() as session:
            store = ParcelStore(session)
            stored = await store.get(parcel.number)
            if stored.status != "sent" or stored.address != parcel.address:
                print(f"❌ Parcel changed across restart: {stored}")
                return False
            print("✅ Parcel Persisted!")

            # 3. Cleanup
            print("\n--- [Step 3] Cleaning Up ---")
            await store.delete(parcel.number)
            try:
                await store.get(parcel.number)
                print("❌ Parcel still present after delete")
                return False
            except ParcelNotFoundError:
                print("✅ Parcel Deleted")
    finally:
        await engine.dispose()
    return True


if __name__ == "__main__":
    configure_logging()
    sys.exit(0 if asyncio.run(run_verification()) else 1)
