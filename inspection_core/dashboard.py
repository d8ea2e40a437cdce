"""
Dashboard statistics: request contracts and response shapes.

Counts and percentages are computed by the statistics collaborator; this
module only fixes field names and types.
"""

from datetime import date
from typing import Annotated

from pydantic import Field

from inspection_core.models import Contract, TargetPeriod, TimePeriod
from inspection_core.responses import Response
from inspection_core.rules import Integer, Numeric, number_range


# --- Requests ---

class DashboardStatsQuery(Contract):
    """Query-string filters shared by the dashboard endpoints."""
    period: TimePeriod | None = None
    start_date: date | None = Field(None, alias="startDate")
    end_date: date | None = Field(None, alias="endDate")
    branch: str | None = None
    year: Numeric | None = None
    month: Annotated[Numeric, number_range(1, 12)] | None = None


class SetInspectionTargetRequest(Contract):
    period: TargetPeriod
    target_value: Annotated[Integer, number_range(minimum=0)] = Field(alias="targetValue")


# --- Responses ---

class MainStats(Response):
    total_orders: int
    need_review: int
    approved: int
    archived: int
    fail_archive: int
    deactivated: int


class InspectionStatsPeriod(Response):
    total: int
    approved: int
    need_review: int
    percentage_reviewed: str  # e.g. "75%"


class InspectionStats(Response):
    all_time: InspectionStatsPeriod
    this_month: InspectionStatsPeriod
    this_week: InspectionStatsPeriod
    today: InspectionStatsPeriod


class BranchDistributionItem(Response):
    branch: str
    count: int
    percentage: str
    change: str


class BranchDistribution(Response):
    data: list[BranchDistributionItem]


class InspectorPerformanceItem(Response):
    inspector: str
    total_inspections: int
    monthly_inspections: int
    weekly_inspections: int
    daily_inspections: int


class InspectorPerformance(Response):
    data: list[InspectorPerformanceItem]


class BlockchainStatus(Response):
    minted_to_blockchain: int
    pending_mint: int
    failed_mint: int
