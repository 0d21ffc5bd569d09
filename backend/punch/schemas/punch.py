from typing import Literal

from pydantic import BaseModel


class PunchRequest(BaseModel):
    direction: Literal["in", "out"]


class NextDirectionResponse(BaseModel):
    next_direction: Literal["in", "out"]
