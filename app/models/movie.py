from sqlalchemy import Column, Integer, String, Text, Numeric, DateTime
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from app.database import Base

class Movie(Base):
    __tablename__ = "movies"

    id = Column(Integer, primary_key=True, index=True)
    tmdb_id = Column(Integer, unique=True, index=True)
    title = Column(String(255), nullable=False)
    overview = Column(Text)
    poster_path = Column(String(255))
    vote_average = Column(Numeric(3, 1))
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    # Relationships
    user_links = relationship("UserMovie", back_populates="movie", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<Movie(id={self.id}, tmdb_id={self.tmdb_id}, title={self.title})>"
