"""Pydantic schemas for API request/response validation"""

from datetime import datetime
from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, Field


# Requests

class SnapshotRequest(BaseModel):
    """Request body carrying a calculation snapshot"""

    snapshot: Dict[str, Any] = Field(..., description="Snapshot document (customerInfo + fees)")


class FxTierAdjustRequest(SnapshotRequest):
    """Request body for POST /v1/fx-tiers/adjust"""

    tier: int = Field(..., ge=1, le=3, description="FX tier being moved")
    percent: float = Field(..., ge=0, le=100, description="New share of FX volume for the tier")


class CurrencyRequest(SnapshotRequest):
    """Request body for POST /v1/currency"""

    currency: str = Field(..., min_length=3, max_length=3, description="Target currency code")


class FieldUpdateRequest(SnapshotRequest):
    """Request body for POST /v1/fields"""

    path: str = Field(..., min_length=1, description="Dotted field path, e.g. paymentTypeDistribution.localPercent")
    value: Union[float, str, None] = None
    provider: Optional[str] = Field(None, description="tungsten or currentProvider for fee fields")


class SplitAdjustRequest(SnapshotRequest):
    """Request body for POST /v1/splits"""

    split: Literal["type", "method"] = Field(..., description="type = local/cross-border, method = rail/card")
    percent: float = Field(..., ge=0, le=100, description="New local (type) or rail (method) percentage")


class SaveCalculationRequest(SnapshotRequest):
    """Request body for POST /v1/calculations"""

    name: Optional[str] = Field(None, max_length=200)


# Responses

class SnapshotResponse(BaseModel):
    snapshot: Dict[str, Any]


class ValidationResponse(BaseModel):
    valid: bool
    errors: List[str]


class SegmentSchema(BaseModel):
    value: float
    count: int
    percent: Optional[float] = None


class MethodSplitSchema(BaseModel):
    rail: SegmentSchema
    card: SegmentSchema


class TypeSplitSchema(BaseModel):
    local: SegmentSchema
    cross_border: SegmentSchema


class BreakdownSchema(BaseModel):
    method: MethodSplitSchema
    type: TypeSplitSchema
    rails: TypeSplitSchema


class FxAmountsSchema(BaseModel):
    tier1: float
    tier2: float
    tier3: float
    total: float


class ProviderCostsSchema(BaseModel):
    local_rail: float
    cross_border_rail: float
    rails: float
    card_rebate: float
    fx: FxAmountsSchema
    total: float
    cost_per_transaction: float
    effective_rate: float


class CostSavingsSchema(BaseModel):
    local_rail: float
    cross_border_rail: float
    rails: float
    fx: float
    total: float


class CostSummarySchema(BaseModel):
    current: float
    tungsten: float
    savings: CostSavingsSchema
    savings_percentage: float


class IncentiveSummarySchema(BaseModel):
    current: float
    tungsten: float
    differential: float
    increase_percentage: float


class DetailedCostsSchema(BaseModel):
    current: ProviderCostsSchema
    tungsten: ProviderCostsSchema


class ResultsResponse(BaseModel):
    """Response for POST /v1/calculate"""

    breakdown: BreakdownSchema
    fx_volumes: FxAmountsSchema
    average_transaction_size: float
    costs: CostSummarySchema
    incentives: IncentiveSummarySchema
    total_annual_benefit: float
    freed_working_capital: float
    detailed_costs: DetailedCostsSchema
    currency: str
    currency_symbol: str
    snapshot: Dict[str, Any]


class ReportRowSchema(BaseModel):
    label: str
    current: float
    alternative: float
    savings: float
    percent_saved: float
    note: Optional[str] = None


class ReportResponse(BaseModel):
    """Response for POST /v1/report"""

    currency: str
    currency_symbol: str
    cost_rows: List[ReportRowSchema]
    cost_total: ReportRowSchema
    incentive_row: ReportRowSchema
    total_annual_benefit: float
    cost_savings_total: float
    incentive_differential: float
    benefit_summary: str


class CalculationSummary(BaseModel):
    """Saved calculation without its snapshot"""

    id: str
    name: str
    created_at: datetime
    updated_at: datetime


class SavedCalculationResponse(CalculationSummary):
    storage_version: str
    snapshot: Dict[str, Any]


class SavedCalculationList(BaseModel):
    calculations: List[CalculationSummary]


class ClearCalculationsResponse(BaseModel):
    """Response for DELETE /v1/calculations"""

    removed: int


class CurrentCalculationResponse(BaseModel):
    """Response for GET/PUT /v1/calculations/current"""

    storage_version: Optional[str] = None
    snapshot: Optional[Dict[str, Any]] = None
    updated_at: Optional[datetime] = None
