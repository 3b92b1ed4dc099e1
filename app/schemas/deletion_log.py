from pydantic import BaseModel, ConfigDict
from datetime import datetime
from typing import Optional


class DeletionLogResponse(BaseModel):
    id: int
    user_id: int
    movie_id: int
    deleted_at: Optional[datetime] = None
    model_config = ConfigDict(from_attributes=True)
