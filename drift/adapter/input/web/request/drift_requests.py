from pydantic import BaseModel, Field


# 필수값 누락은 422 대신 400 + 사유 문자열로 응답하기 위해 Optional로 받고 유스케이스에서 검증한다.
class DriftRunRequest(BaseModel):
    url: str | None = Field(default=None, description="Target page URL; https:// is assumed when no scheme")


class DriftStatusRequest(BaseModel):
    domain: str | None = Field(default=None, description="Domain to inspect, e.g. example.com")


class AuthorityRequest(BaseModel):
    query: str | None = Field(default=None, description="Brand or entity name")
