"""Schemas Catálogo / Catalog schemas."""

from pydantic import BaseModel, ConfigDict

from lab_scheduler.catalog import Shift


class GradeRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: int
    name: str
    classes: list[str]
    shift: Shift


class TimeSlotRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: int
    start: str
    end: str
    shift: Shift


class EquipmentRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: int
    name: str


class BreakWindowRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    start: str
    end: str
    label: str
    grade_ids: list[int]
    shift: Shift
