"""Strict schema baselines with forbidden extras by default."""

from pydantic import BaseModel, ConfigDict


class StrictModel(BaseModel):
    """Neutral strict base for result DTOs."""

    model_config = ConfigDict(extra="forbid", validate_assignment=True)


class SnapshotModel(BaseModel):
    """Immutable read-only snapshot handed to the engine; validates from ORM rows."""

    model_config = ConfigDict(extra="ignore", frozen=True, from_attributes=True)
