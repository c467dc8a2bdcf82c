"""
Project Reports Service

Avance y ejecución presupuestaria de las obras.
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict, List

from .base import BaseReportService
from app.modules.projects.schemas import ProjectStatus

ZERO = Decimal("0")


def _amount(value) -> Decimal:
    return Decimal(str(value)) if value is not None else ZERO


class ProjectReportService(BaseReportService):
    """Service for generating project reports"""

    async def get_project_summary(self) -> Dict[str, Any]:
        """
        Summary over all projects.

        Average progress only considers active projects; budget usage is
        expenses / budget (0 when there is no budget).
        """
        projects = await self._fetch("projects")

        active = [p for p in projects if p.get("status") == ProjectStatus.ACTIVE.value]
        average_progress = 0
        if active:
            mean = Decimal(sum(int(p.get("progress") or 0) for p in active)) / len(active)
            average_progress = int(mean.quantize(Decimal("1"), ROUND_HALF_UP))

        total_budget = sum((_amount(p.get("budget")) for p in projects), ZERO)
        total_expenses = sum((_amount(p.get("expenses")) for p in projects), ZERO)
        budget_usage = ZERO
        if total_budget > 0:
            budget_usage = (total_expenses / total_budget).quantize(Decimal("0.0001"), ROUND_HALF_UP)

        return {
            "total_projects": len(projects),
            "active_count": len(active),
            "average_progress": average_progress,
            "total_budget": total_budget,
            "total_expenses": total_expenses,
            "budget_usage": budget_usage,
        }

    async def get_projects_detail(self) -> List[Dict[str, Any]]:
        """One row per project with its own budget usage"""
        rows = []
        for p in await self._fetch("projects", order_by="name"):
            budget = _amount(p.get("budget"))
            expenses = _amount(p.get("expenses"))
            rows.append({
                "name": p.get("name"),
                "client": p.get("client"),
                "status": p.get("status"),
                "progress": p.get("progress") or 0,
                "budget": budget,
                "expenses": expenses,
                "budget_usage": (expenses / budget).quantize(Decimal("0.0001"), ROUND_HALF_UP) if budget > 0 else ZERO,
            })
        return rows
