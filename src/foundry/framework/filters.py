"""Name filters shared by operation settings."""

from pydantic import BaseModel, ConfigDict, Field


class NameFilter(BaseModel):
    """Match names that equal, contain, or start with any of the given strings."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    equaling: list[str] = Field(default_factory=list)
    containing: list[str] = Field(default_factory=list)
    starting_with: list[str] = Field(default_factory=list)

    def is_empty(self) -> bool:
        return not (self.equaling or self.containing or self.starting_with)

    def matches(self, name: str) -> bool:
        return (
            any(name == s for s in self.equaling)
            or any(s in name for s in self.containing)
            or any(name.startswith(s) for s in self.starting_with)
        )


class Include(NameFilter):
    """Names to include; an empty include filter includes everything."""


class Exclude(NameFilter):
    """Names to exclude."""
