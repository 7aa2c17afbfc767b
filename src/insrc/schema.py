from __future__ import annotations

from typing import List

from pydantic import BaseModel


class WhereReportDTO(BaseModel):
    target: str
    arg_types: List[str]
    implementation: str
    via: str
    origin_path: str
    boundary: str
    inside: bool
