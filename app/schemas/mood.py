from pydantic import BaseModel, Field, ConfigDict
from datetime import datetime
from typing import Optional


class MoodCreate(BaseModel):
    mood: str = Field(..., min_length=1, max_length=50, description="Free-text mood label")


class MoodResponse(BaseModel):
    id: int
    user_id: int
    mood: str
    created_at: Optional[datetime] = None
    model_config = ConfigDict(from_attributes=True)
