from jobnexus.config import settings
from jobnexus.services.seed import seed_demo_data
from jobnexus.services.storage import build_storage
from jobnexus.utils.logging_config import setup_logging


def seed_db():
    # The in-memory backend would forget everything on exit, so always seed the database.
    storage = build_storage("sql", settings.database_url)
    created = seed_demo_data(storage)
    print(f"Seeded {settings.database_url}:")
    for kind, count in created.items():
        print(f"  {kind}: {count}")


if __name__ == "__main__":
    setup_logging(settings.log_level)
    seed_db()
