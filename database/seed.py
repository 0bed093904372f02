# School Fee Tracker - seed database with sample data and demo accounts
# Run: python -m database.seed
import asyncio
import logging

from auth import create_identity
from config import get_settings
from fees.errors import ValidationError
from fees.sample_data import seed_sample_data
from server.data_access import link_students_by_guardian_email
from .store import RecordStore

logger = logging.getLogger(__name__)

# email, password, name, role
DEMO_ACCOUNTS = [
    ("admin@school.test", "admin123", "Admin", "admin"),
    ("bursar@school.test", "staff123", "Grace Moyo", "staff"),
    ("linda.chen@email.com", "parent123", "Linda Chen", "parent"),
]


async def seed(database_url: str | None = None) -> None:
    store = RecordStore(database_url or get_settings().database_url)
    await store.init()
    try:
        await seed_sample_data(store)
        for email, password, name, role in DEMO_ACCOUNTS:
            try:
                profile = await create_identity(store, email, password, name, role)
            except ValidationError:
                logger.info("%s already registered. Skip.", email)
                continue
            if role == "parent":
                await link_students_by_guardian_email(store, profile.id, email)
    finally:
        await store.close()
    logger.info("Seed completed.")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    asyncio.run(seed())
