"""Dependency injection for FastAPI endpoints"""

from fastapi import Depends, Request
from interest_calc.config import settings
from interest_calc.domain.models import SettingsStore
from interest_calc.domain.rate_graph import RateGraph
from interest_calc.infrastructure.clients.rates import RatesClient, RateTableRefresher
from interest_calc.infrastructure.database.repositories import SettingsRepository
from interest_calc.infrastructure.database.session import SessionLocal


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_settings_store() -> SettingsStore:
    """Provide the persisted settings store"""
    return SettingsRepository(SessionLocal)


def get_rates_client() -> RatesClient:
    """Provide exchange-rate API client instance"""
    return RatesClient()


def get_rate_graph(request: Request, store: SettingsStore = Depends(get_settings_store)) -> RateGraph:
    """Provide the calculator session, restoring it from the store on first use"""
    graph = getattr(request.app.state, "rate_graph", None)
    if graph is None:
        graph = RateGraph(
            store,
            default_amount=settings.default_amount,
            default_yearly=settings.default_yearly_rate,
        )
        request.app.state.rate_graph = graph
    return graph


def get_rates_refresher(
    request: Request,
    graph: RateGraph = Depends(get_rate_graph),
    client: RatesClient = Depends(get_rates_client),
) -> RateTableRefresher:
    """Provide the rate-table refresher feeding the calculator session"""
    refresher = getattr(request.app.state, "rates_refresher", None)
    if refresher is None:
        refresher = RateTableRefresher(client, on_update=graph.set_rate_table)
        request.app.state.rates_refresher = refresher
    return refresher
