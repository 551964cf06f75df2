"""
Seed the database with a demo author and post, then print the post list
read both ways (ORM population and explicit join).

Run this from the project root:

    (.venv) python seed_demo_data.py

It uses DATABASE_URL, like the API itself.
"""

import json

from user_api.core.config import get_settings
from user_api.core.logging import setup_logging
from user_api.db.init_db import init_db, seed_initial_data
from user_api.db.session import build_engine, build_session_factory
from user_api.services.post_service import STRATEGIES, list_posts


def main() -> None:
    settings = get_settings()
    setup_logging(settings.log_level)

    engine = build_engine(settings.database_url)
    init_db(engine)
    db = build_session_factory(engine)()
    try:
        inserted = seed_initial_data(db)
        print(f"[INFO] Inserted {inserted} rows into {engine.url.get_backend_name()}")

        for strategy in STRATEGIES:
            posts = list_posts(db, strategy)
            print(f"[INFO] Posts via {strategy}:")
            print(json.dumps([p.model_dump(by_alias=True, mode="json") for p in posts], indent=2))
    finally:
        db.close()
        engine.dispose()


if __name__ == "__main__":
    main()
