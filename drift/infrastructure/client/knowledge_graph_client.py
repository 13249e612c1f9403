from typing import Optional

from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from config.settings import KnowledgeGraphSettings
from drift.application.port.entity_lookup_port import EntityLookupPort
from drift.domain.entity_match import EntityMatch


class KnowledgeGraphClient(EntityLookupPort):
    def __init__(self, settings: KnowledgeGraphSettings, service=None):
        self.settings = settings
        self.service = service

    def lookup(self, query: str) -> Optional[EntityMatch]:
        service = self.service or build(
            "kgsearch",
            "v1",
            developerKey=self.settings.api_key,
            cache_discovery=False,
        )
        try:
            response = service.entities().search(query=query, limit=1).execute()
        except HttpError as exc:
            raise RuntimeError(f"Knowledge Graph search failed: {exc}") from exc

        items = response.get("itemListElement", [])
        if not items:
            return None
        return EntityMatch.from_platform(items[0])
