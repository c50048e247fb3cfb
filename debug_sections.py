from streamshelf.core.settings import settings
from streamshelf.db.context import get_db_session
from streamshelf.services.sections import SectionService

OWNER_ID = settings.admin_owner_id

with get_db_session() as db:
    sections = SectionService(db).list_sections(OWNER_ID)
    print(f"{'Order':<6} | {'Slug':<20} | {'Active':<6} | {'Items':<5} | {'Title'}")
    print("-" * 80)
    for s in sections:
        print(f"{s.order:<6} | {s.slug:<20} | {str(s.is_active):<6} | {len(s.items):<5} | {s.title}")
        for item in s.items:
            star = "*" if item.is_featured else " "
            print(f"    {star} {item.order:<4} {item.video.status:<11} {item.video.title}")
