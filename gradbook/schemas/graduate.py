"""Graduate Schemas: Pydantic models for graduate and report endpoints.

Invariants:
    - GraduateInput accepts every field as optional: admission rules run in
      core/enforce_record.py so ALL violations are reported together
    - fullName, company, position are stripped (matches the form's trimming)
    - Wire names are camelCase (fullName), identical to the persisted layout

Design Decisions:
    - year accepts int or str: JSON clients send either; the record stores a string
    - field_validator for side-effect-free transforms (strip), keeps models pure
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator


class GraduateInput(BaseModel):
    """Candidate graduate record read from a request body."""
    model_config = ConfigDict(populate_by_name=True)

    id: str | None = None
    full_name: str | None = Field(None, alias="fullName")
    year: str | int | None = None
    major: str | None = None
    company: str | None = None
    position: str | None = None
    status: str | None = None

    @field_validator("full_name", "company", "position")
    @classmethod
    def strip_text(cls, v: str | None) -> str | None:
        return v.strip() if isinstance(v, str) else v

    def to_candidate(self) -> dict:
        """Record-shaped dict (camelCase keys) for GraduateRepository.upsert."""
        return self.model_dump(by_alias=True, exclude_none=True)


class GraduateResponse(BaseModel):
    """A stored graduate record."""
    model_config = ConfigDict(populate_by_name=True)

    id: str
    full_name: str = Field(alias="fullName")
    year: str
    major: str
    company: str = ""
    position: str = ""
    status: str = ""


class GraduateList(BaseModel):
    """Full collection plus non-fatal notices (e.g. storage reset)."""
    items: list[GraduateResponse]
    notices: list[str] = []


class ReportEntry(BaseModel):
    key: str
    count: int


class ReportsResponse(BaseModel):
    """The three standard reports."""
    year: list[ReportEntry]
    major: list[ReportEntry]
    status: list[ReportEntry]
    notices: list[str] = []
