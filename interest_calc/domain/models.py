"""Domain models - pure Python types describing periods, fields and rate tables"""

from dataclasses import dataclass, field
from enum import Enum
from fractions import Fraction
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Protocol

# Reserved rate-table key for the home currency, never substituted
HOME_CURRENCY_CODE = "00"


class Period(str, Enum):
    """Compounding period a rate is expressed over"""

    DAILY = "daily"
    MONTHLY = "monthly"
    YEARLY = "yearly"
    FIVE_YEAR = "yearly_5"
    TEN_YEAR = "yearly_10"

    @property
    def exponent(self) -> float:
        """Power that turns a yearly rate into a rate for this period"""
        return float(PERIOD_EXPONENTS[self])

    @property
    def inverse_exponent(self) -> float:
        """Power that turns a rate for this period back into a yearly rate"""
        return float(1 / PERIOD_EXPONENTS[self])


# Exact fractions so the inverse of 1/365 is exactly 365
PERIOD_EXPONENTS: Dict[Period, Fraction] = {
    Period.DAILY: Fraction(1, 365),
    Period.MONTHLY: Fraction(1, 12),
    Period.YEARLY: Fraction(1),
    Period.FIVE_YEAR: Fraction(5),
    Period.TEN_YEAR: Fraction(10),
}


class FieldKind(str, Enum):
    AMOUNT = "amount"
    RATE = "rate"
    GAIN = "gain"
    DISPLAY = "display"


class FieldId(str, Enum):
    """Identifiers of every field shown by the calculator, in display order"""

    AMOUNT = "amount"
    CALCULATED_AMOUNT = "calculated_amount"
    DAILY = "daily"
    DAILY_AMOUNT = "daily_amount"
    MONTHLY = "monthly"
    MONTHLY_AMOUNT = "monthly_amount"
    YEARLY = "yearly"
    YEARLY_AMOUNT = "yearly_amount"
    YEARLY_5 = "yearly_5"
    YEARLY_5_AMOUNT = "yearly_5_amount"
    YEARLY_10 = "yearly_10"
    YEARLY_10_AMOUNT = "yearly_10_amount"


@dataclass(frozen=True)
class FieldSpec:
    """Static description of a field: what it shows and how edits map back"""

    field_id: FieldId
    label: str
    description: str
    kind: FieldKind
    period: Optional[Period] = None

    @property
    def editable(self) -> bool:
        return self.kind != FieldKind.DISPLAY

    @property
    def percent(self) -> bool:
        """Rate fields are shown and typed as percentages"""
        return self.kind == FieldKind.RATE


FIELD_CATALOGUE: List[FieldSpec] = [
    FieldSpec(FieldId.AMOUNT, "Amount", "Amount to multiply by the interest", FieldKind.AMOUNT),
    FieldSpec(FieldId.CALCULATED_AMOUNT, "Calculated amount", "Calculate value of the amount", FieldKind.DISPLAY),
    FieldSpec(FieldId.DAILY, "Daily", "Daily interest rate in %", FieldKind.RATE, Period.DAILY),
    FieldSpec(FieldId.DAILY_AMOUNT, "Daily amount", "Amount earned in a day.", FieldKind.GAIN, Period.DAILY),
    FieldSpec(FieldId.MONTHLY, "Monthly", "Monthly interest rate in %", FieldKind.RATE, Period.MONTHLY),
    FieldSpec(FieldId.MONTHLY_AMOUNT, "Monthly amount", "Amount earned in a month.", FieldKind.GAIN, Period.MONTHLY),
    FieldSpec(FieldId.YEARLY, "Yearly", "Yearly interest rate in %", FieldKind.RATE, Period.YEARLY),
    FieldSpec(FieldId.YEARLY_AMOUNT, "Yearly amount", "Amount earned in a year.", FieldKind.GAIN, Period.YEARLY),
    FieldSpec(FieldId.YEARLY_5, "5 years", "5 years interest rate in %", FieldKind.RATE, Period.FIVE_YEAR),
    FieldSpec(FieldId.YEARLY_5_AMOUNT, "5 years amount", "Amount earned in 5 years.", FieldKind.GAIN, Period.FIVE_YEAR),
    FieldSpec(FieldId.YEARLY_10, "10 years", "10 years interest rate in %", FieldKind.RATE, Period.TEN_YEAR),
    FieldSpec(FieldId.YEARLY_10_AMOUNT, "10 years amount", "Amount earned in 10 years.", FieldKind.GAIN, Period.TEN_YEAR),
]


@dataclass
class FieldView:
    """What the UI renders for one field"""

    field_id: FieldId
    label: str
    description: str
    display_text: str
    is_error: bool
    focused: bool
    editable: bool
    percent: bool


@dataclass(frozen=True)
class RateTable:
    """Immutable snapshot of currency code -> numeric literal (as text)"""

    rates: Mapping[str, str] = field(default_factory=dict)
    base_currency: Optional[str] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "rates", MappingProxyType(dict(self.rates)))

    def substitutable_codes(self) -> List[str]:
        """Codes eligible for substitution (everything but the home marker)"""
        return [code for code in self.rates if code and code != HOME_CURRENCY_CODE]

    def __len__(self) -> int:
        return len(self.rates)


class SettingsStore(Protocol):
    """Synchronous string key/value store used for the persisted sources of truth"""

    def get(self, key: str) -> Optional[str]:
        ...

    def set(self, key: str, value: str) -> None:
        ...
