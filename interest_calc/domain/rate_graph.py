"""Rate graph - keeps amount, period rates and gains consistent after any edit"""

from enum import Enum
from typing import Dict, List, Optional, Union

from interest_calc.domain.compounding import amount_from_gain, gain, inverse_rate, period_rate
from interest_calc.domain.exceptions import (
    CorruptedSettingError,
    DegenerateConversionError,
    ReadOnlyFieldError,
    UnknownFieldError,
)
from interest_calc.domain.fields import EditableField
from interest_calc.domain.models import (
    FIELD_CATALOGUE,
    FieldId,
    FieldKind,
    FieldView,
    Period,
    RateTable,
    SettingsStore,
)
from interest_calc.utils.number_format import format_number, parse_number

AMOUNT_KEY = "amount"
YEARLY_KEY = "yearly"

# Forward pass order: sources, then rates, then gains, then display-only fields
_PROPAGATION_ORDER = (FieldKind.AMOUNT, FieldKind.RATE, FieldKind.GAIN, FieldKind.DISPLAY)


class EditOutcome(str, Enum):
    ACCEPTED = "accepted"
    INVALID = "invalid"  # text did not evaluate, nothing changed
    DEGENERATE = "degenerate"  # conversion had no finite answer, nothing changed


class RateGraph:
    """
    Calculator session state.

    Amount and the yearly rate are the only sources of truth; both are loaded
    from the settings store at construction and written back on every accepted
    change. Every other field is recomputed from them in one synchronous
    forward pass after each edit.
    """

    def __init__(
        self,
        store: SettingsStore,
        default_amount: float = 100.0,
        default_yearly: float = 1.07,
        rate_table: Optional[RateTable] = None,
    ):
        self.store = store
        self.rate_table = rate_table or RateTable()
        self.amount = self._load(AMOUNT_KEY, default_amount)
        self.yearly = self._load(YEARLY_KEY, default_yearly)
        self.fields: Dict[FieldId, EditableField] = {spec.field_id: EditableField(spec) for spec in FIELD_CATALOGUE}
        self._propagate()

    def _load(self, key: str, default: float) -> float:
        raw = self.store.get(key)
        if raw is None:
            return default
        try:
            return parse_number(raw)
        except ValueError:
            raise CorruptedSettingError(key, raw) from None

    def field(self, field_id: Union[FieldId, str]) -> EditableField:
        try:
            return self.fields[FieldId(field_id)]
        except ValueError:
            raise UnknownFieldError(f"Unknown field: {field_id}") from None

    def focus(self, field_id: Union[FieldId, str]) -> None:
        """Focus one field; at most one field holds focus at a time"""
        field = self.field(field_id)
        field.focus()
        for other in self.fields.values():
            if other is not field and other.focused:
                other.blur()

    def blur(self, field_id: Union[FieldId, str]) -> None:
        self.field(field_id).blur()

    def input(self, field_id: Union[FieldId, str], raw_text: str) -> EditOutcome:
        """Handle one keystroke's worth of text for a field"""
        field = self.field(field_id)
        self.focus(field.spec.field_id)
        value = field.accept_text(raw_text, self.rate_table)
        if value is None:
            return EditOutcome.INVALID
        return self.edit(field.spec.field_id, value)

    def edit(self, field_id: Union[FieldId, str], value: float) -> EditOutcome:
        """
        Apply a canonical value to a field and re-derive everything else.

        Flow:
        1. Classify the edited field
        2. Update the source of truth it controls (amount or yearly rate)
        3. Recompute every field forward from the sources
        """
        spec = self.field(field_id).spec

        if spec.kind == FieldKind.AMOUNT:
            self._set_amount(value)
        elif spec.kind == FieldKind.RATE:
            self._set_yearly(inverse_rate(spec.period, value))
        elif spec.kind == FieldKind.GAIN:
            try:
                amount = amount_from_gain(spec.period, self.yearly, value)
            except DegenerateConversionError:
                return EditOutcome.DEGENERATE
            self._set_amount(amount)
        else:
            raise ReadOnlyFieldError(f"Field {spec.field_id.value} is display only")

        self._propagate()
        return EditOutcome.ACCEPTED

    def set_rate_table(self, rate_table: RateTable) -> None:
        """Install a new rate snapshot and re-evaluate the text being edited"""
        self.rate_table = rate_table
        for field in self.fields.values():
            if not field.focused:
                continue
            value = field.reevaluate(rate_table)
            if value is not None:
                self.edit(field.spec.field_id, value)

    def views(self) -> List[FieldView]:
        return [self.fields[spec.field_id].view() for spec in FIELD_CATALOGUE]

    def rate(self, period: Period) -> float:
        return period_rate(period, self.yearly)

    def _set_amount(self, amount: float) -> None:
        self.amount = amount
        self.store.set(AMOUNT_KEY, format_number(amount))

    def _set_yearly(self, yearly: float) -> None:
        self.yearly = yearly
        self.store.set(YEARLY_KEY, format_number(yearly))

    def _propagate(self) -> None:
        # Writes here go straight to the canonical cells, never back through edit()
        for kind in _PROPAGATION_ORDER:
            for spec in FIELD_CATALOGUE:
                if spec.kind != kind:
                    continue
                field = self.fields[spec.field_id]
                if kind == FieldKind.RATE:
                    field.value = period_rate(spec.period, self.yearly)
                elif kind == FieldKind.GAIN:
                    field.value = gain(spec.period, self.yearly, self.amount)
                else:
                    field.value = self.amount
