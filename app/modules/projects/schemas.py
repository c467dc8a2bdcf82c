from pydantic import BaseModel, ConfigDict, Field, model_validator
from decimal import Decimal
from typing import Optional, List
from datetime import date
from enum import Enum


class ProjectStatus(str, Enum):
    ACTIVE = "active"
    COMPLETED = "completed"
    DELAYED = "delayed"
    PENDING = "pending"


class ProjectCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    client: Optional[str] = Field(None, max_length=200)
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    status: ProjectStatus = ProjectStatus.PENDING
    budget: Decimal = Field(Decimal("0"), ge=0)
    expenses: Decimal = Field(Decimal("0"), ge=0)
    progress: int = Field(0, ge=0, le=100)

    @model_validator(mode='after')
    def validate_dates(self):
        if self.start_date and self.end_date and self.end_date < self.start_date:
            raise ValueError('La fecha de fin no puede ser anterior a la de inicio')
        return self


class ProjectOut(ProjectCreate):
    id: str

    model_config = ConfigDict(from_attributes=True)


class ProjectList(BaseModel):
    projects: List[ProjectOut]
    total: int
