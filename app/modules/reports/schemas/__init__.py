"""
Pydantic schemas for Reports module

Defines response models for all report endpoints.
"""

from decimal import Decimal
from typing import List

from pydantic import BaseModel, Field


# Project Report Schemas
class ProjectSummaryResponse(BaseModel):
    """Response for project summary report"""
    total_projects: int
    active_count: int = Field(description="Projects currently active")
    average_progress: int = Field(description="Mean progress of active projects (0-100)")
    total_budget: Decimal
    total_expenses: Decimal
    budget_usage: Decimal = Field(description="Expenses / budget ratio")


# Invoice Report Schemas
class InvoiceStatusBucket(BaseModel):
    status: str
    count: int
    total_amount: Decimal


class InvoiceStatusResponse(BaseModel):
    """Response for invoices by status report"""
    total_invoices: int
    final_total_amount: Decimal = Field(description="Total billed on final invoices")
    statuses: List[InvoiceStatusBucket]
