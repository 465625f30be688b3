from __future__ import annotations

from datetime import datetime
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from smokeapp.db.models.day_record import MAX_COUNT


class DailyLimit(BaseModel):
    """Constant ceiling of smokes per day starting at `from`."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    kind: Literal["day_limit"] = "day_limit"
    from_date: datetime = Field(alias="from")
    max_smokes: int = Field(ge=0, le=MAX_COUNT)

    @property
    def day_value(self) -> int:
        return self.max_smokes


class QuitSchedule(BaseModel):
    """Ceiling decreasing linearly from `initial_limit` to 0 over `total_days`."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    kind: Literal["quit_time"] = "quit_time"
    from_date: datetime = Field(alias="from")
    total_days: int = Field(ge=1, le=MAX_COUNT)
    initial_limit: int = Field(ge=0, le=MAX_COUNT)

    @property
    def day_value(self) -> int:
        return self.initial_limit


Target = Annotated[Union[DailyLimit, QuitSchedule], Field(discriminator="kind")]

TargetAdapter: TypeAdapter[Target] = TypeAdapter(Target)


def encode_target(target: Target) -> str:
    return TargetAdapter.dump_json(target, by_alias=True).decode("utf-8")


def decode_target(blob: str) -> Target:
    return TargetAdapter.validate_json(blob)
