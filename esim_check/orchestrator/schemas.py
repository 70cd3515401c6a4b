"""Pydantic models for provider payloads, API input and API output.

Split into: catalog (provider) shapes, frontend requests, and final responses.
"""

from __future__ import annotations

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


# ═══════════════ CATALOG PROVIDER ═══════════════

class SearchResult(BaseModel):
    """One device suggestion returned by the catalog search."""
    model_config = ConfigDict(extra="ignore")

    id: str
    name: str
    thumbnail: str | None = Field(default=None, validation_alias=AliasChoices("thumbnail", "img"))
    brand: str | None = None

    @field_validator("id", mode="before")
    @classmethod
    def _id_as_text(cls, value):
        # Some catalog mirrors send numeric ids
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value


class SpecEntry(BaseModel):
    """A single ``name: value`` line of a specification section."""
    name: str | None = None
    value: str | list[str] | None = None

    @field_validator("value", mode="before")
    @classmethod
    def _stringify(cls, value):
        if isinstance(value, list):
            return [str(v) for v in value]
        if value is None or isinstance(value, str):
            return value
        return str(value)


class SpecSection(BaseModel):
    model_config = ConfigDict(extra="ignore")

    category: str | None = Field(default=None, validation_alias=AliasChoices("category", "name"))
    specifications: list[SpecEntry] = Field(default_factory=list)

    @field_validator("specifications", mode="before")
    @classmethod
    def _drop_malformed_entries(cls, value):
        return _objects_only(value)


class DeviceDetail(BaseModel):
    """Full device page from the catalog provider."""
    model_config = ConfigDict(extra="ignore")

    name: str | None = None
    thumbnail: str | None = Field(default=None, validation_alias=AliasChoices("thumbnail", "img"))
    detail_spec: list[SpecSection] = Field(
        default_factory=list,
        validation_alias=AliasChoices("detailSpec", "detail_spec"),
    )

    @field_validator("detail_spec", mode="before")
    @classmethod
    def _drop_malformed_sections(cls, value):
        return _objects_only(value)


def _objects_only(value) -> list:
    """Keep the dict items of a provider list; anything else counts as empty."""
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, (dict, BaseModel))]


# ═══════════════ FRONTEND REQUESTS ═══════════════

class SearchDevicesRequest(BaseModel):
    query: str | None = None


class CheckEsimRequest(BaseModel):
    query: str | None = None
    deviceId: str | None = None


# ═══════════════ API RESPONSES ═══════════════

class DeviceSuggestion(BaseModel):
    """Public shape of a search suggestion."""
    id: str
    name: str
    image: str | None = None
    brand: str | None = None

    @classmethod
    def from_result(cls, result: SearchResult) -> DeviceSuggestion:
        return cls(id=result.id, name=result.name, image=result.thumbnail, brand=result.brand)


class SearchDevicesResponse(BaseModel):
    results: list[DeviceSuggestion] = Field(default_factory=list)


class SimInfo(BaseModel):
    """Spec extractor output. ``supportsEsim`` is None when undetermined."""
    simRaw: str | None = None
    supportsEsim: bool | None = None


class AnswerPayload(BaseModel):
    """Final eSIM verdict returned to the frontend and cached."""
    model_config = ConfigDict(frozen=True)

    found: bool
    message: str
    deviceName: str | None = None
    deviceId: str | None = None
    simRaw: str | None = None
    supportsEsim: bool | None = None

    def to_response(self, from_cache: bool = False) -> dict:
        if self.found:
            data = self.model_dump()
        else:
            data = {"found": False, "message": self.message}
        if from_cache:
            data["fromCache"] = True
        return data
