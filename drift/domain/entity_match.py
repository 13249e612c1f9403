from dataclasses import dataclass
from typing import Optional


@dataclass
class EntityMatch:
    name: str
    description: Optional[str] = None
    detailed_description: Optional[str] = None
    url: Optional[str] = None
    image: Optional[str] = None
    score: Optional[float] = None

    @classmethod
    def from_platform(cls, payload: dict) -> "EntityMatch":
        entity = payload.get("result") or {}
        detailed = entity.get("detailedDescription") or {}
        return cls(
            name=entity.get("name", ""),
            description=entity.get("description"),
            detailed_description=detailed.get("articleBody"),
            url=detailed.get("url"),
            image=(entity.get("image") or {}).get("contentUrl"),
            score=payload.get("resultScore"),
        )
