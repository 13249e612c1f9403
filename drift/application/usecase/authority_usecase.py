from datetime import datetime, timezone

from drift.application.port.entity_lookup_port import EntityLookupPort


class AuthorityUseCase:
    def __init__(self, entity_lookup: EntityLookupPort):
        self.entity_lookup = entity_lookup

    def check(self, query: str) -> dict:
        """
        브랜드/엔티티가 Knowledge Graph에 등록되어 있는지 확인한다.
        """
        match = self.entity_lookup.lookup(query)
        checked_at = datetime.now(timezone.utc)
        if match is None:
            return {"found": False, "checked_at": checked_at}
        return {
            "found": True,
            "entity": {
                "name": match.name,
                "description": match.description,
                "detailed_description": match.detailed_description,
                "url": match.url,
                "image": match.image,
            },
            "score": match.score,
            "checked_at": checked_at,
        }
