from typing import Optional

from pydantic import BaseModel, Field


class PercentilesSchema(BaseModel):
    # CLS p75는 문자열("0.05")로 내려오므로 float로 변환해 받는다.
    p75: Optional[float] = None


class CruxMetricSchema(BaseModel):
    percentiles: Optional[PercentilesSchema] = None


class CruxDateSchema(BaseModel):
    year: int
    month: int
    day: Optional[int] = None

    def year_month(self) -> str:
        return f"{self.year}-{self.month:02d}"


class CollectionPeriodSchema(BaseModel):
    first_date: CruxDateSchema = Field(alias="firstDate")
    last_date: CruxDateSchema = Field(alias="lastDate")


class CruxRecordSchema(BaseModel):
    metrics: dict[str, CruxMetricSchema] = Field(default_factory=dict)
    collection_period: Optional[CollectionPeriodSchema] = Field(default=None, alias="collectionPeriod")

    def p75(self, metric: str) -> Optional[float]:
        entry = self.metrics.get(metric)
        if entry is None or entry.percentiles is None:
            return None
        return entry.percentiles.p75


class CruxResponse(BaseModel):
    record: Optional[CruxRecordSchema] = None
