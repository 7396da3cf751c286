"""View-model types produced by the statistics pipeline."""

from typing import Literal, Optional

from pydantic import BaseModel, Field

from dayrank.models.entry import Entry

SortMode = Literal["score", "date"]
TrendRange = Literal["30", "90", "all"]


class HeaderSummary(BaseModel):
    """Count, mean and best score over all entries."""

    count: int = Field(..., ge=0, description="Number of entries")
    average: float = Field(..., description="Mean score (0 when empty)")
    best: Optional[int] = Field(default=None, description="Highest score, None when empty")

    model_config = {"frozen": True}


class WindowAverages(BaseModel):
    """Mean score over calendar windows; None means no entries in the window."""

    all_time: Optional[float] = Field(default=None, description="All entries")
    week: Optional[float] = Field(default=None, description="Current Monday-start week")
    month: Optional[float] = Field(default=None, description="Current calendar month")
    year: Optional[float] = Field(default=None, description="Current calendar year")

    model_config = {"frozen": True}


class Band(BaseModel):
    """A fixed score range with its qualitative label."""

    label: str = Field(..., description="Qualitative label")
    low: int = Field(..., ge=0, le=100, description="Inclusive lower bound")
    high: int = Field(..., ge=0, le=100, description="Inclusive upper bound")

    model_config = {"frozen": True}

    @property
    def range_label(self) -> str:
        return f"{self.low}–{self.high}"

    def contains(self, score: int) -> bool:
        return self.low <= score <= self.high


class Bucket(BaseModel):
    """One histogram bar of the score distribution."""

    band: Band = Field(..., description="Score band of this bucket")
    count: int = Field(..., ge=0, description="Entries in the band")
    ratio: float = Field(..., ge=0, le=1, description="Count relative to the largest bucket")

    model_config = {"frozen": True}

    @property
    def percent(self) -> int:
        """Bar width as a whole percentage."""
        return round(self.ratio * 100)


class TrendPoint(BaseModel):
    """One chart point: a date's score and its trailing average."""

    date: str = Field(..., description="Calendar date as YYYY-MM-DD")
    raw_score: int = Field(..., ge=0, le=100, description="Score logged for the date")
    rolling_avg: float = Field(..., description="Trailing rolling average")

    model_config = {"frozen": True}


class TrendSeries(BaseModel):
    """Chart-ready score series with its caption data."""

    points: list[TrendPoint] = Field(default_factory=list, description="Chronological points")
    range: TrendRange = Field(default="30", description="Display range used")

    model_config = {"frozen": True}

    @property
    def is_empty(self) -> bool:
        return not self.points

    @property
    def count(self) -> int:
        return len(self.points)

    @property
    def first_date(self) -> Optional[str]:
        return self.points[0].date if self.points else None

    @property
    def last_date(self) -> Optional[str]:
        return self.points[-1].date if self.points else None


class ViewOptions(BaseModel):
    """Display state that shapes the dashboard without touching the data."""

    sort: SortMode = Field(default="score", description="List sort mode")
    query: str = Field(default="", description="Case-insensitive notes filter")
    trend_range: TrendRange = Field(default="30", description="Trend chart range")

    model_config = {"frozen": True}


class Dashboard(BaseModel):
    """Every derived view, recomputed from the full collection after each mutation."""

    header: HeaderSummary
    entries: list[Entry] = Field(default_factory=list, description="Filtered, sorted list")
    top: list[Entry] = Field(default_factory=list, description="Ranked top entries")
    top_label: str = Field(default="No data", description="Caption for the top list")
    best: Optional[Entry] = None
    worst: Optional[Entry] = None
    buckets: list[Bucket] = Field(default_factory=list, description="Score distribution")
    streak: int = Field(default=0, ge=0, description="Consecutive logged days")
    averages: WindowAverages = Field(default_factory=WindowAverages)
    trend: TrendSeries = Field(default_factory=TrendSeries)
    view: ViewOptions = Field(default_factory=ViewOptions)

    model_config = {"frozen": True}
