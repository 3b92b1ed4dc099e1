"""
Provision the movie_recommendation_app schema and seed the catalog.

DESTRUCTIVE: movies and user_movies are dropped and recreated on every run.
Never point this at production data.

Usage (dev/test only):
    python -m app.migrations.provision_schema

This will:
    - Create the database if it does not exist (MySQL)
    - Create users, user_moods and deletion_logs if absent
    - Drop and recreate movies and user_movies
    - Insert the three fixture movies
"""

import logging
from typing import List

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import Session

from app.database import Base, DATABASE_URL, create_db_engine, get_db_session
from app.models import User, Movie, UserMovie, UserMood, DeletionLog
from app.migrations.reset_test_data import reset_test_data

logger = logging.getLogger(__name__)

SEED_MOVIES = [
    {
        "title": "The Shawshank Redemption",
        "tmdb_id": 278,
        "overview": "Two imprisoned men bond over a number of years.",
        "poster_path": "/path/to/poster1.jpg",
        "vote_average": 9.3,
    },
    {
        "title": "The Godfather",
        "tmdb_id": 238,
        "overview": "The aging patriarch of an organized crime dynasty.",
        "poster_path": "/path/to/poster2.jpg",
        "vote_average": 9.2,
    },
    {
        "title": "The Dark Knight",
        "tmdb_id": 155,
        "overview": "Batman raises the stakes in his war on crime.",
        "poster_path": "/path/to/poster3.jpg",
        "vote_average": 9.0,
    },
]


def create_database_if_missing(url=DATABASE_URL) -> None:
    """CREATE DATABASE IF NOT EXISTS on a server-level connection (MySQL only)"""
    url = make_url(url)
    if url.get_backend_name() == "sqlite" or not url.database:
        return

    server_engine = create_engine(url.set(database=None))
    try:
        with server_engine.begin() as conn:
            conn.execute(text(f"CREATE DATABASE IF NOT EXISTS `{url.database}`"))
        logger.info(f"Database {url.database} is ready")
    finally:
        server_engine.dispose()


def provision_schema(bind: Engine) -> None:
    """Create missing tables and rebuild the catalog tables from scratch"""
    Base.metadata.create_all(bind=bind, tables=[User.__table__], checkfirst=True)

    # Association table first, it references movies
    UserMovie.__table__.drop(bind=bind, checkfirst=True)
    Movie.__table__.drop(bind=bind, checkfirst=True)
    Base.metadata.create_all(bind=bind, tables=[Movie.__table__, UserMovie.__table__])

    Base.metadata.create_all(
        bind=bind,
        tables=[UserMood.__table__, DeletionLog.__table__],
        checkfirst=True
    )
    logger.info("Tables ready: users, movies, user_movies, user_moods, deletion_logs")


def seed_movies(db: Session) -> List[Movie]:
    """Insert the fixture movies and return them in insertion order"""
    movies = [Movie(**data) for data in SEED_MOVIES]
    db.add_all(movies)
    db.commit()
    for movie in movies:
        db.refresh(movie)
    logger.info(f"Inserted movies: {[(m.id, m.title) for m in movies]}")
    return movies


def setup_test_database(url=DATABASE_URL) -> bool:
    """Provision, reset and seed a database; False on failure"""
    url = make_url(url)
    logger.info(f"Connecting to {url.render_as_string(hide_password=True)}")
    engine = None
    db = None
    try:
        create_database_if_missing(url)
        engine = create_db_engine(url)
        provision_schema(engine)

        db = get_db_session(bind=engine)
        reset_test_data(db)
        seed_movies(db)
        logger.info("Database setup completed successfully")
        return True
    except Exception as e:
        if db is not None:
            db.rollback()
        logger.error(f"Database setup failed: {e}", exc_info=True)
        return False
    finally:
        if db is not None:
            db.close()
        if engine is not None:
            engine.dispose()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s [%(name)s] %(message)s")
    raise SystemExit(0 if setup_test_database() else 1)
