from sqlalchemy import create_engine, pool, event
from sqlalchemy.engine import URL, Engine, make_url
from sqlalchemy.orm import declarative_base, sessionmaker
import os
from dotenv import load_dotenv
import logging

load_dotenv()
logger = logging.getLogger(__name__)

DB_HOST = os.getenv("DB_HOST", "localhost")
DB_USER = os.getenv("DB_USER", "root")
DB_PASSWORD = os.getenv("DB_PASSWORD", "")
DB_PORT = int(os.getenv("DB_PORT", "3306"))
DB_NAME = os.getenv("DB_NAME", "movie_recommendation_app")


def build_database_url() -> URL:
    """Build the MySQL URL from the DB_* settings (DATABASE_URL wins when set)."""
    if explicit_url := os.getenv("DATABASE_URL"):
        return make_url(explicit_url)
    return URL.create(
        "mysql+pymysql",
        username=DB_USER,
        password=DB_PASSWORD or None,
        host=DB_HOST,
        port=DB_PORT,
        database=DB_NAME,
    )


DATABASE_URL = build_database_url()


def create_db_engine(url=None) -> Engine:
    """
    Create an engine for the given URL (defaults to the configured database).

    SQLite URLs get a plain engine; anything else gets a QueuePool sized
    from the DB_POOL_* environment variables.
    """
    url = make_url(url or DATABASE_URL)
    if url.get_backend_name() == "sqlite":
        return create_engine(url, connect_args={"check_same_thread": False})

    # Connection pooling configuration
    return create_engine(
        url,
        poolclass=pool.QueuePool,
        pool_size=int(os.getenv("DB_POOL_SIZE", 5)),
        max_overflow=int(os.getenv("DB_MAX_OVERFLOW", 10)),
        pool_timeout=int(os.getenv("DB_POOL_TIMEOUT", 30)),
        pool_recycle=int(os.getenv("DB_POOL_RECYCLE", 3600)),
        pool_pre_ping=True,  # Test connections before using them
        echo=os.getenv("DB_ECHO", "false").lower() == "true"
    )


# SQLite ignores foreign keys unless asked per connection
@event.listens_for(Engine, "connect")
def receive_connect(dbapi_conn, connection_record):
    """Enable foreign key enforcement on SQLite connections"""
    if type(dbapi_conn).__module__.startswith("sqlite3"):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()
    logger.debug("Database connection established")


engine = create_db_engine()

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()

# Dependency for FastAPI routes
def get_db():
    """
    Database session dependency for FastAPI.
    Automatically handles session creation and cleanup.

    Usage:
        @router.get("/endpoint")
        def endpoint(db: Session = Depends(get_db)):
            # Use db here
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

# Utility function for manual session management
def get_db_session(bind=None):
    """
    Get a database session for manual management.
    Remember to close the session after use!

    Usage:
        db = get_db_session()
        try:
            # Use db here
            db.commit()
        except Exception as e:
            db.rollback()
            raise
        finally:
            db.close()
    """
    if bind is not None:
        return sessionmaker(autocommit=False, autoflush=False, bind=bind)()
    return SessionLocal()
