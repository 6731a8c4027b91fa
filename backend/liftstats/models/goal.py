"""
Goal definitions as supplied by the Goal Store.

Goal documents use camelCase keys and store the target under a
type-specific name (targetWeight, target, targetCount, targetDays,
targetWeeks). They are validated here once so the strategies can work
on a single shape.
"""
from datetime import date
from enum import Enum
from typing import Any, List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator

from liftstats.core.dates import to_day
from liftstats.models.stats import PeriodType


class GoalType(str, Enum):
    STRENGTH = "strength"
    VOLUME = "volume"
    FREQUENCY = "frequency"
    STREAK = "streak"


class VolumeType(str, Enum):
    TOTAL = "total"
    EXERCISE = "exercise"
    MUSCLE_GROUP = "muscle_group"


class FrequencyType(str, Enum):
    TOTAL = "total"
    MUSCLE_GROUP = "muscle_group"


class StreakType(str, Enum):
    DAILY = "daily"
    WEEKLY = "weekly"


class GoalDefinition(BaseModel):
    """Validated goal document."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: Optional[str] = None
    type: GoalType
    target_value: float = Field(
        ...,
        gt=0,
        validation_alias=AliasChoices(
            "target_value",
            "targetValue",
            "targetWeight",
            "target",
            "targetCount",
            "targetDays",
            "targetWeeks",
        ),
    )
    current_value: float = Field(
        0.0,
        validation_alias=AliasChoices("current_value", "currentValue", "currentWeight"),
    )

    exercise_name: Optional[str] = Field(None, alias="exerciseName")
    muscle_group: Optional[str] = Field(None, alias="muscleGroup")

    start_date: Optional[date] = Field(None, alias="startDate")
    deadline: Optional[date] = None

    # Volume / frequency goals
    period: PeriodType = PeriodType.WEEK
    volume_type: VolumeType = Field(VolumeType.TOTAL, alias="volumeType")
    frequency_type: FrequencyType = Field(FrequencyType.TOTAL, alias="frequencyType")

    # Streak goals
    streak_type: StreakType = Field(StreakType.DAILY, alias="streakType")
    allow_rest_days: bool = Field(False, alias="allowRestDays")
    max_rest_days_per_week: int = Field(0, ge=0, alias="maxRestDaysPerWeek")

    reached_milestones: List[int] = Field(
        default_factory=list,
        validation_alias=AliasChoices("reached_milestones", "reachedMilestones", "milestonesReached"),
    )

    @field_validator("start_date", "deadline", mode="before")
    @classmethod
    def _parse_day(cls, value: Any) -> Optional[date]:
        if value is None or value == "":
            return None
        return to_day(value)

    @field_validator("volume_type", "frequency_type", mode="before")
    @classmethod
    def _normalize_kind(cls, value: Any) -> Any:
        # Stored documents spell it "muscle-group"
        if isinstance(value, str):
            return value.replace("-", "_")
        return value

    @model_validator(mode="after")
    def _check_subject(self) -> "GoalDefinition":
        needs_exercise = self.type == GoalType.STRENGTH or (
            self.type == GoalType.VOLUME and self.volume_type == VolumeType.EXERCISE
        )
        if needs_exercise and not self.exercise_name:
            raise ValueError(f"{self.type.value} goal requires exerciseName")

        needs_muscle_group = (
            self.type == GoalType.VOLUME and self.volume_type == VolumeType.MUSCLE_GROUP
        ) or (
            self.type == GoalType.FREQUENCY and self.frequency_type == FrequencyType.MUSCLE_GROUP
        )
        if needs_muscle_group and not self.muscle_group:
            raise ValueError(f"{self.type.value} goal requires muscleGroup")

        return self
