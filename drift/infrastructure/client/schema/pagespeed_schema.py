from typing import Optional

from pydantic import BaseModel, Field


class BoundingRectSchema(BaseModel):
    top: float = 0.0
    left: float = 0.0
    width: float = 0.0
    height: float = 0.0


class AuditNodeSchema(BaseModel):
    bounding_rect: Optional[BoundingRectSchema] = Field(default=None, alias="boundingRect")
    snippet: Optional[str] = None


class AuditItemSchema(BaseModel):
    node: Optional[AuditNodeSchema] = None
    # Lighthouse 10+ 는 list 타입 details 안에 table을 한 번 더 감싼다.
    items: list[dict] = Field(default_factory=list)


class AuditDetailsSchema(BaseModel):
    items: list[AuditItemSchema] = Field(default_factory=list)


class AuditSchema(BaseModel):
    display_value: Optional[str] = Field(default=None, alias="displayValue")
    details: Optional[AuditDetailsSchema] = None


class CategorySchema(BaseModel):
    score: Optional[float] = None


class CategoriesSchema(BaseModel):
    performance: Optional[CategorySchema] = None
    seo: Optional[CategorySchema] = None
    accessibility: Optional[CategorySchema] = None
    best_practices: Optional[CategorySchema] = Field(default=None, alias="best-practices")


class LighthouseResultSchema(BaseModel):
    categories: CategoriesSchema = Field(default_factory=CategoriesSchema)
    # 사용하는 audit만 개별 검증하므로 원본 dict 그대로 둔다.
    audits: dict[str, dict] = Field(default_factory=dict)
    final_url: Optional[str] = Field(default=None, alias="finalUrl")
    fetch_time: Optional[str] = Field(default=None, alias="fetchTime")
    lighthouse_version: Optional[str] = Field(default=None, alias="lighthouseVersion")


class PageSpeedResponse(BaseModel):
    lighthouse_result: Optional[LighthouseResultSchema] = Field(default=None, alias="lighthouseResult")
