from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Project:
    project_id: str
    name: str
    client_id: str
    color: str
    description: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "id": self.project_id,
            "name": self.name,
            "clientId": self.client_id,
            "color": self.color,
            "description": self.description,
        }
