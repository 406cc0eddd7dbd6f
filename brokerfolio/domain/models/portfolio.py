"""Domain models for portfolio aggregates."""

from dataclasses import dataclass, field
from decimal import Decimal

from brokerfolio.domain.models.income import Income
from brokerfolio.domain.models.instrument import Category
from brokerfolio.domain.models.money import Money
from brokerfolio.domain.models.paper import Paper


@dataclass(frozen=True)
class ConversionWarning:
    """A value left out of a total because no conversion rate was available.

    Attributes:
        subject: What was excluded (ticker or ``cash``).
        currency: Currency of the excluded value.
        target_currency: Reporting currency that was requested.
    """

    subject: str
    currency: str
    target_currency: str

    @property
    def message(self) -> str:
        return (
            f"No {self.currency}->{self.target_currency} rate: "
            f"{self.subject} is excluded from totals"
        )


@dataclass(frozen=True)
class Asset:
    """Positions of one instrument category with aggregate valuation.

    Attributes:
        category: Instrument category of every paper.
        papers: Papers in the order the API returned them.
        total_value: Market value converted to the reporting currency.
        total_income: Income of total_value against cost_basis.
        cost_basis: Amount paid, converted to the reporting currency.
        dividends: Net dividends and coupons in the reporting currency.
        fees: Fees in the reporting currency.
        value_by_currency: Unconverted market value per paper currency.
        warnings: Papers excluded from the totals for lack of a rate.
    """

    category: Category
    papers: tuple[Paper, ...]
    total_value: Money
    total_income: Income
    cost_basis: Money
    dividends: Money
    fees: Money
    value_by_currency: dict[str, Money] = field(default_factory=dict)
    warnings: tuple[ConversionWarning, ...] = ()

    @property
    def currency(self) -> str:
        return self.total_value.currency

    @property
    def name(self) -> str:
        return self.category.label

    def aggregated(self) -> Paper:
        """Collapse the papers into one synthetic paper of category totals."""
        return Paper(
            instrument_id="",
            ticker=self.category.value.upper(),
            name=f"{self.category.label} total",
            quantity=Decimal("1"),
            average_price=self.cost_basis,
            current_price=self.total_value,
            income=self.total_income,
            dividends_and_coupons=self.dividends,
            taxes=Money.zero(self.currency),
            fees=self.fees,
        )

    def detail(self, aggregate: bool = False) -> tuple[Paper, ...]:
        """Return the papers to display, or the synthetic total paper."""
        if aggregate:
            return (self.aggregated(),)
        return self.papers


@dataclass(frozen=True)
class Portfolio:
    """Read-only snapshot of every asset category plus cash.

    Attributes:
        assets: Non-empty assets keyed by category.
        cash_balances: Cash balances as supplied by the broker.
        total_value: Assets plus convertible cash in the reporting currency.
        total_income: Income of total_value against cost_basis.
        cost_basis: Asset cost bases plus convertible cash.
        dividends: Net dividends and coupons across assets.
        fees: Fees across assets.
        reporting_currency: Currency of every total.
        warnings: Values excluded from totals for lack of a rate.
    """

    assets: dict[Category, Asset]
    cash_balances: tuple[Money, ...]
    total_value: Money
    total_income: Income
    cost_basis: Money
    dividends: Money
    fees: Money
    reporting_currency: str
    warnings: tuple[ConversionWarning, ...] = ()

    def asset(self, category: Category) -> Asset | None:
        return self.assets.get(category)


__all__ = ["ConversionWarning", "Asset", "Portfolio"]
