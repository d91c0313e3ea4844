"""/v1/rates - exchange-rate snapshot used for currency substitution"""

from fastapi import APIRouter, Depends

from interest_calc.api.v1.schemas import RatesResponse
from interest_calc.api.dependencies import get_rates_refresher
from interest_calc.domain.models import RateTable
from interest_calc.infrastructure.clients.rates import RateTableRefresher

router = APIRouter()


def _to_response(table: RateTable, refresher: RateTableRefresher) -> RatesResponse:
    return RatesResponse(
        base_currency=table.base_currency,
        rates=dict(table.rates),
        refresh_in_flight=refresher.in_flight,
    )


@router.get("/rates", response_model=RatesResponse)
async def get_rates(refresher: RateTableRefresher = Depends(get_rates_refresher)):
    """Current rate-table snapshot (empty until the first successful refresh)"""
    return _to_response(refresher.snapshot, refresher)


@router.post("/rates/refresh", response_model=RatesResponse)
async def refresh_rates(refresher: RateTableRefresher = Depends(get_rates_refresher)):
    """
    Fetch fresh rates, or wait for the refresh already in flight.

    A failed fetch is not an error here: the previous snapshot is returned.
    """
    table = await refresher.refresh()
    return _to_response(table, refresher)
