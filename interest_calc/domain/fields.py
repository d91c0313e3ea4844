"""Field reconciliation - focus-aware buffering of raw text against canonical values"""

import math
from enum import Enum
from typing import Optional

from interest_calc.domain.compounding import from_percent, to_percent
from interest_calc.domain.currency import substitute
from interest_calc.domain.exceptions import EvaluationError, ReadOnlyFieldError
from interest_calc.domain.expression import evaluate
from interest_calc.domain.models import FieldSpec, FieldView, RateTable
from interest_calc.utils.number_format import format_number


class FocusState(str, Enum):
    UNFOCUSED = "unfocused"
    FOCUSED = "focused"


class EditableField:
    """
    One calculator field: a canonical value plus the text the user is typing.

    While unfocused the field shows its canonical value, formatted. While
    focused it shows exactly what the user typed, so recomputation never
    rewrites the text under the cursor. Percent fields hold a growth factor
    (1.07) but display and accept percentages (7).
    """

    def __init__(self, spec: FieldSpec, value: float = 0.0):
        self.spec = spec
        self.value = value
        self.state = FocusState.UNFOCUSED
        self.raw_text = ""
        self.error: Optional[str] = None

    @property
    def focused(self) -> bool:
        return self.state == FocusState.FOCUSED

    def formatted_value(self) -> str:
        shown = to_percent(self.value) if self.spec.percent else self.value
        return format_number(shown)

    def display_text(self) -> str:
        return self.raw_text if self.focused else self.formatted_value()

    def is_error(self) -> bool:
        if self.focused:
            return self.error is not None
        return not math.isfinite(self.value)

    def focus(self) -> None:
        if not self.spec.editable:
            raise ReadOnlyFieldError(f"Field {self.spec.field_id.value} is display only")
        if self.focused:
            return
        self.state = FocusState.FOCUSED
        self.raw_text = self.formatted_value()
        self.error = None

    def blur(self) -> None:
        self.state = FocusState.UNFOCUSED
        self.raw_text = ""
        self.error = None

    def accept_text(self, raw_text: str, rate_table: RateTable) -> Optional[float]:
        """
        Store a keystroke and evaluate it.

        Returns the candidate canonical value (a growth factor for percent
        fields) or None when the text does not evaluate; in that case the
        error is kept for display and the canonical value is untouched.
        Text typed into an unfocused field focuses it first.
        """
        if not self.focused:
            self.focus()
        self.raw_text = raw_text
        return self.reevaluate(rate_table)

    def reevaluate(self, rate_table: RateTable) -> Optional[float]:
        """Evaluate the current raw buffer against `rate_table`"""
        try:
            result = evaluate(substitute(self.raw_text, rate_table))
        except EvaluationError as e:
            self.error = str(e)
            return None

        self.error = None
        return from_percent(result) if self.spec.percent else result

    def view(self) -> FieldView:
        return FieldView(
            field_id=self.spec.field_id,
            label=self.spec.label,
            description=self.spec.description,
            display_text=self.display_text(),
            is_error=self.is_error(),
            focused=self.focused,
            editable=self.spec.editable,
            percent=self.spec.percent,
        )
