"""
Weekly schedule documents as supplied by the Schedule Store.
"""
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

DAY_NAMES = ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")


class DaySchedule(BaseModel):
    """One day of a week schedule. A day without template is a rest day."""

    model_config = ConfigDict(populate_by_name=True)

    template_id: Optional[str] = Field(None, alias="templateId")
    template_name: Optional[str] = Field(None, alias="templateName")
    muscle_groups: List[str] = Field(default_factory=list, alias="muscleGroups")
    completed: bool = False
    workout_id: Optional[str] = Field(None, alias="workoutId")

    @property
    def is_planned(self) -> bool:
        return bool(self.template_id)


class WeekSchedule(BaseModel):
    """Schedule of one ISO week keyed by lowercase day name."""

    model_config = ConfigDict(populate_by_name=True)

    week_id: str = Field(..., alias="id")
    days: Dict[str, DaySchedule] = Field(default_factory=dict)

    @classmethod
    def empty(cls, week_id: str) -> "WeekSchedule":
        """Week with seven rest days."""
        return cls(week_id=week_id, days={name: DaySchedule() for name in DAY_NAMES})
