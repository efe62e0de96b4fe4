from pydantic import BaseModel, ConfigDict, Field


class HunkHeader(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
    )

    old_start: int = Field(ge=0)
    old_count: int = Field(default=1, ge=0)
    new_start: int = Field(ge=0)
    new_count: int = Field(default=1, ge=0)
    suffix: str = ""


class LineCounts(BaseModel):
    model_config = ConfigDict(
        extra="forbid",
    )

    context: int = Field(default=0, ge=0)
    additions: int = Field(default=0, ge=0)
    deletions: int = Field(default=0, ge=0)

    @property
    def old_count(self) -> int:
        return self.context + self.deletions

    @property
    def new_count(self) -> int:
        return self.context + self.additions


class ChangeRecord(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
    )

    hunk_index: int = Field(ge=1)
    old_range: str
    new_range: str

    @property
    def changed(self) -> bool:
        return self.old_range != self.new_range


class ProcessResult(BaseModel):
    model_config = ConfigDict(
        extra="forbid",
    )

    lines: list[str] = Field(default_factory=list)
    changes: list[ChangeRecord] = Field(default_factory=list)

    @property
    def any_changed(self) -> bool:
        return any(change.changed for change in self.changes)
