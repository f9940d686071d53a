"""Create the rental schema on the configured database.

Alembic revisions under ``migrations/versions`` are the source of truth for
deployed databases; this script is for local development and demos.
"""

import sys
from pathlib import Path

# Add project root to path
PROJECT_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(PROJECT_ROOT))

from rentdesk.core.config import get_config
from rentdesk.database.db import get_engine
from rentdesk.models import Base


def create_schema():
    config = get_config()
    engine = get_engine()
    print(f"Creating tables on {config.DATABASE_URL.split('://', 1)[0]} database...")
    Base.metadata.create_all(bind=engine)
    print(f"Tables ready: {', '.join(sorted(Base.metadata.tables))}")


if __name__ == "__main__":
    create_schema()
