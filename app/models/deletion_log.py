from sqlalchemy import Column, Integer, DateTime
from sqlalchemy.sql import func
from app.database import Base


class DeletionLog(Base):
    """
    Append-only audit trail of removed user/movie associations.
    No foreign keys: log rows outlive the user and movie they mention.
    """
    __tablename__ = "deletion_logs"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, nullable=False, index=True)
    movie_id = Column(Integer, nullable=False)
    deleted_at = Column(DateTime(timezone=True), server_default=func.now())

    def __repr__(self):
        return f"<DeletionLog(user_id={self.user_id}, movie_id={self.movie_id}, deleted_at={self.deleted_at})>"
