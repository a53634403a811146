"""Domain models for derived ledger values."""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal

from finledger.domain.models.ledger import AccountType, CardBrand, PaymentMethod
from finledger.utils.decimal_utils import round_whole

_HUNDRED = Decimal("100")


@dataclass(frozen=True)
class AccountWithBalance:
    """Account enriched with its derived current balance."""

    guid: str
    name: str
    bank: str
    account_type: AccountType
    initial_balance: Decimal
    current_balance: Decimal


@dataclass(frozen=True)
class CardWithUsage:
    """Card enriched with its derived usage."""

    guid: str
    name: str
    brand: CardBrand
    credit_limit: Decimal
    close_day: int
    due_day: int
    current_usage: Decimal

    @property
    def available_limit(self) -> Decimal:
        """Return the unused limit, negative when over the limit."""
        return self.credit_limit - self.current_usage

    @property
    def utilization_percent(self) -> Decimal:
        """Return usage over limit as a percentage clamped to [0, 100]."""
        if self.credit_limit <= 0:
            return _HUNDRED if self.current_usage > 0 else Decimal("0")
        percent = self.current_usage / self.credit_limit * _HUNDRED
        return min(max(percent, Decimal("0")), _HUNDRED)


@dataclass(frozen=True)
class CardPortfolio:
    """Totals across every card of a user."""

    cards: list[CardWithUsage]
    total_limit: Decimal
    total_usage: Decimal

    @property
    def total_available(self) -> Decimal:
        return self.total_limit - self.total_usage


@dataclass(frozen=True)
class CategoryTotal:
    """Expense total for a single category."""

    category_guid: str
    category_name: str
    total: Decimal


@dataclass(frozen=True)
class PeriodSummary:
    """Income and expense totals over an inclusive date range.

    Attributes:
        start_date: First day included, None when unbounded.
        end_date: Last day included, None when unbounded.
        by_category: Expense totals per category, zero categories omitted.
    """

    start_date: date | None
    end_date: date | None
    total_income: Decimal
    total_expenses: Decimal
    by_category: list[CategoryTotal] = field(default_factory=list)

    @property
    def net(self) -> Decimal:
        """Return total_income minus total_expenses."""
        return self.total_income - self.total_expenses


@dataclass(frozen=True)
class DashboardSummary:
    total_income: Decimal
    total_expenses: Decimal
    total_balance: Decimal
    monthly_savings: Decimal
    transactions_by_category: list[CategoryTotal]


@dataclass(frozen=True)
class MonthlyTrendPoint:
    month: str
    income: Decimal
    expenses: Decimal

    @property
    def balance(self) -> Decimal:
        return self.income - self.expenses


@dataclass(frozen=True)
class PaymentMethodTotal:
    payment_method: PaymentMethod
    total: Decimal


@dataclass(frozen=True)
class PeriodReport:
    """Detailed report for a filtered period."""

    summary: PeriodSummary
    transaction_count: int
    monthly_trend: list[MonthlyTrendPoint]
    payment_methods: list[PaymentMethodTotal]


@dataclass(frozen=True)
class BaselineRates:
    """Average monthly flows over the trailing history window."""

    window_start: date
    window_end: date
    average_income: Decimal
    average_expenses: Decimal


@dataclass(frozen=True)
class ForecastPeriod:
    """Full precision projection for one calendar month.

    Attributes:
        month: First day of the projected month.
        balance: Running balance at the end of the month.
    """

    month: date
    label: str
    income: Decimal
    expenses: Decimal
    balance: Decimal

    @property
    def net_flow(self) -> Decimal:
        return self.income - self.expenses


@dataclass(frozen=True)
class ForecastPoint:
    """Projection for one month rounded to whole currency units."""

    month: date
    label: str
    balance: Decimal
    income: Decimal
    expenses: Decimal
    net_flow: Decimal

    @classmethod
    def from_period(cls, period: ForecastPeriod) -> "ForecastPoint":
        return cls(
            month=period.month,
            label=period.label,
            balance=round_whole(period.balance),
            income=round_whole(period.income),
            expenses=round_whole(period.expenses),
            net_flow=round_whole(period.net_flow),
        )


@dataclass(frozen=True)
class ForecastProjection:
    """Projected trajectory plus the inputs it was derived from."""

    starting_balance: Decimal
    baseline: BaselineRates
    points: list[ForecastPoint]

    @property
    def projected_growth(self) -> Decimal:
        """Return the final rounded balance minus the starting balance."""
        if not self.points:
            return Decimal("0")
        return self.points[-1].balance - self.starting_balance

    @property
    def first_negative_point(self) -> ForecastPoint | None:
        for point in self.points:
            if point.balance < 0:
                return point
        return None


@dataclass(frozen=True)
class OverlaidPeriod:
    """Base and simulated figures for one forecast month."""

    month: date
    label: str
    base_income: Decimal
    base_expenses: Decimal
    base_balance: Decimal
    simulated_income: Decimal
    simulated_expenses: Decimal
    simulated_balance: Decimal

    @property
    def base_net_flow(self) -> Decimal:
        return self.base_income - self.base_expenses

    @property
    def simulated_net_flow(self) -> Decimal:
        return self.simulated_income - self.simulated_expenses

    @property
    def difference(self) -> Decimal:
        return self.simulated_balance - self.base_balance


@dataclass(frozen=True)
class SimulationOverlay:
    """Side by side base and simulated trajectories."""

    simulation_guids: list[str]
    periods: list[OverlaidPeriod]

    @property
    def total_impact(self) -> Decimal:
        """Return the final simulated balance minus the final base balance."""
        if not self.periods:
            return Decimal("0")
        return self.periods[-1].difference

    @property
    def average_impact(self) -> Decimal:
        if not self.periods:
            return Decimal("0")
        return self.total_impact / len(self.periods)


__all__ = [
    "AccountWithBalance",
    "CardWithUsage",
    "CardPortfolio",
    "CategoryTotal",
    "PeriodSummary",
    "DashboardSummary",
    "MonthlyTrendPoint",
    "PaymentMethodTotal",
    "PeriodReport",
    "BaselineRates",
    "ForecastPeriod",
    "ForecastPoint",
    "ForecastProjection",
    "OverlaidPeriod",
    "SimulationOverlay",
]
