"""Currency-code substitution and rate document parsing"""

import re
from typing import Any, Dict, Optional

from pydantic import BaseModel, ValidationError

from interest_calc.domain.exceptions import RateSourceError
from interest_calc.domain.models import HOME_CURRENCY_CODE, RateTable


class _RatesData(BaseModel):
    currency: Optional[str] = None
    rates: Dict[str, str]


class _RatesDocument(BaseModel):
    data: _RatesData


def substitute(expr_text: str, rate_table: RateTable) -> str:
    """
    Replace every currency code in expr_text with its parenthesized rate.

    Requirements:
    - Every code in the table except the home marker "00" is replaced
    - Replacement text is never scanned again, so a rate literal can't be
      rewritten by a later code
    - Where codes overlap at the same position, the longest code wins
    - No character of a "00" run is ever rewritten, whatever codes the
      table holds ("0", "A0", ...)

    Example:
        substitute("100 * EUR", {"EUR": "0.9"}) -> "100 * (0.9)"
    """
    codes = [code for code in rate_table.substitutable_codes() if HOME_CURRENCY_CODE not in code]
    if not codes:
        return expr_text

    # Longest first so "USDC" is not consumed as "USD" + "C"
    alternatives = []
    for code in sorted(codes, key=len, reverse=True):
        # A code ending in "0" must not eat the first zero of a run
        alternatives.append(re.escape(code) + ("(?!0)" if code.endswith("0") else ""))
    pattern = re.compile(f"(?P<home>0{{2,}})|{'|'.join(alternatives)}")

    def replace(match: re.Match) -> str:
        if match.group("home") is not None:
            return match.group(0)
        return f"({rate_table.rates[match.group(0)]})"

    return pattern.sub(replace, expr_text)


def parse_rate_document(payload: Any) -> RateTable:
    """
    Build a RateTable from the exchange-rate JSON document.

    Expected shape: {"data": {"currency": "USD", "rates": {"EUR": "0.9", ...}}}

    Raises:
        RateSourceError: If the document does not match the expected shape
    """
    try:
        document = _RatesDocument.model_validate(payload)
    except ValidationError as e:
        raise RateSourceError(f"Invalid rate document: {e.error_count()} validation error(s)") from e

    return RateTable(rates=document.data.rates, base_currency=document.data.currency)
