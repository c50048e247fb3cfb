import sys

from streamshelf.core.logging import setup_logging
from streamshelf.core.settings import settings
from streamshelf.db.base import Base
from streamshelf.db.context import get_db_session
from streamshelf.db.session import engine
from streamshelf.services.sections import SectionService
import streamshelf.models  # noqa: F401


def seed(owner_id: str):
    print(f"--- SEEDING DEFAULT SECTIONS FOR {owner_id} ---")
    Base.metadata.create_all(bind=engine)

    with get_db_session() as db:
        created = SectionService(db).seed_default_sections(owner_id)

    if not created:
        print("Nothing to do, every default section exists.")
    for s in created:
        print(f"   Created {s.slug} (order={s.order})")


if __name__ == "__main__":
    setup_logging(level=settings.log_level, structured=settings.log_structured)
    seed(sys.argv[1] if len(sys.argv) > 1 else settings.admin_owner_id)
