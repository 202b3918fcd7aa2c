"""Response envelopes shared by the account routes"""

from typing import Optional

from pydantic import BaseModel

from src.app.use_cases.users import UserProfile
from src.app.use_cases.users.dtos import CamelModel


class MessageResponse(BaseModel):
    success: bool = True
    message: str


class UserData(CamelModel):
    user: UserProfile


class UserResponse(BaseModel):
    success: bool = True
    message: Optional[str] = None
    data: UserData
