"""Seed a sample organization hierarchy."""
import logging

from orgunits.core.database import SessionLocal, init_db
from orgunits.core.exceptions import OrganizationNotFound
from orgunits.core.hierarchy import HierarchyEngine, ROOT_SENTINEL
from orgunits.core.repository import OrganizationRepository

logger = logging.getLogger(__name__)

# Parents are listed before their children
SAMPLE_ORGANIZATIONS = [
    {"id": "GHQ", "description": "Global Headquarters", "parent_id": ROOT_SENTINEL,
     "active": True, "tz": "UTC", "currency": "USD", "locale": "en-US"},
    {"id": "EUHQ", "description": "Europe HQ", "parent_id": "GHQ",
     "tz": "Europe/Brussels", "currency": "EUR", "locale": "en-GB"},
    {"id": "USHQ", "description": "Americas HQ", "parent_id": "GHQ",
     "tz": "America/New_York", "currency": "USD", "locale": "en-US"},
    {"id": "APHQ", "description": "Asia Pacific HQ", "parent_id": "GHQ",
     "tz": "Asia/Singapore", "currency": "SGD", "locale": "en-SG"},
    {"id": "DEHQ", "description": "Germany HQ", "parent_id": "EUHQ",
     "tz": "Europe/Berlin", "currency": "EUR", "locale": "de-DE"},
    {"id": "FRHQ", "description": "France HQ", "parent_id": "EUHQ",
     "tz": "Europe/Paris", "currency": "EUR", "locale": "fr-FR"},
    {"id": "CAHQ", "description": "Canada HQ", "parent_id": "USHQ",
     "tz": "America/Toronto", "currency": "CAD", "locale": "en-CA"},
    {"id": "JPHQ", "description": "Japan HQ", "parent_id": "APHQ",
     "tz": "Asia/Tokyo", "currency": "JPY", "locale": "ja-JP"},
]


def seed_organizations(engine: HierarchyEngine) -> int:
    """Create sample organizations that do not exist yet. Returns the number created."""
    created = 0
    for data in SAMPLE_ORGANIZATIONS:
        try:
            engine.get_by_id(data["id"])
            continue
        except OrganizationNotFound:
            pass
        engine.create(data)
        created += 1
    return created


def main():
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
    )
    init_db()
    db = SessionLocal()
    try:
        created = seed_organizations(HierarchyEngine(OrganizationRepository(db)))
        logger.info("Seeded %d organization(s)", created)
    finally:
        db.close()


if __name__ == "__main__":
    main()
