"""
Utility script to clear test data.

Usage (dev/test only):
    python -m app.migrations.reset_test_data

This will, in one transaction:
    - Remove every saved movie (each removal is written to deletion_logs)
    - Remove every mood entry
    - Delete users whose username starts with "testuser"
    - Empty the movie catalog
"""

import logging
from typing import Dict

from sqlalchemy.orm import Session

from app.database import get_db_session
from app.models import User, Movie, UserMovie, UserMood

logger = logging.getLogger(__name__)

TEST_USERNAME_PREFIX = "testuser"


def reset_test_data(db: Session, username_prefix: str = TEST_USERNAME_PREFIX) -> Dict[str, int]:
    """
    Clear associations, moods, test users and the catalog.

    Rows are deleted one by one through the session (no bulk Query.delete)
    so each association removal fires the deletion log hook.
    """
    counts = {"user_movies": 0, "user_moods": 0, "users": 0, "movies": 0}
    try:
        for link in db.query(UserMovie).all():
            db.delete(link)
            counts["user_movies"] += 1
        for mood in db.query(UserMood).all():
            db.delete(mood)
            counts["user_moods"] += 1
        db.flush()

        for user in db.query(User).filter(User.username.startswith(username_prefix, autoescape=True)).all():
            db.delete(user)
            counts["users"] += 1
        for movie in db.query(Movie).all():
            db.delete(movie)
            counts["movies"] += 1

        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.info(f"Cleared test data: {counts}")
    return counts


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s [%(name)s] %(message)s")
    db = get_db_session()
    try:
        reset_test_data(db)
    finally:
        db.close()
