"""Job configuration model for input planning and record reading."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from symlink_input.core.domain.types import InputFormatKind


class JobConfig(BaseModel):
    """Explicit configuration passed into every input format entry point.

    An empty ``input_paths`` list is accepted here on purpose: the
    input validator reports it with its own fixed message when planning
    starts.
    """

    input_paths: list[str] = Field(default_factory=list)
    input_format: InputFormatKind = "symlink"

    # Split sizing
    desired_split_count: int = Field(default=1, ge=0)
    min_split_size: int = Field(default=1, ge=1)
    max_split_size: int | None = Field(default=None, ge=1)
    split_slop: float = Field(default=1.1, ge=1.0)

    # Reading
    encoding: str = Field(default="utf-8", min_length=1)

    # Listing
    list_status_threads: int = Field(default=1, ge=1)
    skip_hidden: bool = True

    model_config = ConfigDict(extra="forbid", frozen=True)

    @classmethod
    def from_json_obj(cls, job_obj: dict[str, Any]) -> JobConfig:
        """Create a JobConfig instance from a JSON-compatible object."""
        return cls.model_validate(job_obj)

    @model_validator(mode="after")
    def validate_split_bounds(self) -> JobConfig:
        """Reject a maximum split size below the minimum."""
        if self.max_split_size is not None and self.max_split_size < self.min_split_size:
            raise ValueError("max_split_size must be >= min_split_size")
        return self

    def with_input_paths(self, *paths: str) -> JobConfig:
        """Return a copy of this configuration reading from ``paths``."""
        return self.model_copy(update={"input_paths": list(paths)})
