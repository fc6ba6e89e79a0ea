"""Order model served by the demo endpoints."""

from pydantic import BaseModel


class Order(BaseModel):
    id: int
    name: str
