from typing import Optional

from pydantic import BaseModel


class ActivityLogOut(BaseModel):
    id: int
    title: str
    description: str
    ip_address: Optional[str] = None
    created_at: Optional[str] = None
