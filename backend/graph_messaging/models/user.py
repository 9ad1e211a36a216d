from pydantic import BaseModel, Field
from typing import Optional


class UserNode(BaseModel):
    id: str = Field(..., alias="_id")
    email: Optional[str] = None
    username: str = ""

    class Config:
        populate_by_name = True

    @property
    def display_name(self) -> str:
        return self.username or self.id
