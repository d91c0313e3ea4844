"""Integration tests for API endpoints"""

import httpx
import pytest
from fastapi.testclient import TestClient
from interest_calc.api.dependencies import get_rates_client
from interest_calc.domain.compounding import gain, to_percent
from interest_calc.domain.models import Period
from interest_calc.infrastructure.clients.rates import RatesClient
from interest_calc.infrastructure.database.repositories import SettingsRepository
from interest_calc.utils.number_format import format_number


def fields_by_id(payload: dict) -> dict:
    return {field["field_id"]: field for field in payload["fields"]}


def test_health_endpoint(client: TestClient):
    """Test health check endpoint"""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_metrics_endpoint(client: TestClient):
    """Test Prometheus metrics endpoint"""
    response = client.get("/metrics")
    assert response.status_code == 200
    assert "interest_calc_field_edits_total" in response.text


def test_request_id_header(client: TestClient):
    response = client.get("/health", headers={"X-Request-ID": "abc-123"})
    assert response.headers["X-Request-ID"] == "abc-123"


def test_list_fields_uses_defaults(client: TestClient):
    """Test GET /v1/fields on a fresh store"""
    response = client.get("/v1/fields")

    assert response.status_code == 200
    fields = fields_by_id(response.json())
    assert len(fields) == 12
    assert fields["amount"]["display_text"] == "100"
    assert fields["calculated_amount"]["editable"] is False
    assert fields["yearly"]["display_text"] == format_number(to_percent(1.07))
    assert fields["yearly"]["percent"] is True
    assert fields["yearly_amount"]["display_text"] == format_number(gain(Period.YEARLY, 1.07, 100.0))
    assert not any(field["is_error"] for field in fields.values())


def test_fields_restored_from_store(client: TestClient, settings_repository: SettingsRepository):
    settings_repository.set("amount", "250")
    settings_repository.set("yearly", "1.5")

    fields = fields_by_id(client.get("/v1/fields").json())

    assert fields["amount"]["display_text"] == "250"
    assert fields["yearly"]["display_text"] == "50"
    assert fields["yearly_amount"]["display_text"] == "125"


def test_corrupted_store_value_returns_500(client: TestClient, settings_repository: SettingsRepository):
    """Unreadable persisted data is reported, not replaced with defaults"""
    settings_repository.set("amount", "one hundred")

    response = client.get("/v1/fields")

    assert response.status_code == 500
    assert "amount" in response.json()["detail"]


def test_input_updates_every_field(client: TestClient, settings_repository: SettingsRepository):
    """Test POST /v1/fields/{field_id}/input with a valid expression"""
    response = client.post("/v1/fields/amount/input", json={"raw_text": "2 * 100"})

    assert response.status_code == 200
    data = response.json()
    assert data["outcome"] == "accepted"
    assert data["error"] is None

    fields = fields_by_id(data)
    assert fields["amount"]["display_text"] == "2 * 100"
    assert fields["amount"]["focused"] is True
    assert fields["calculated_amount"]["display_text"] == "200"
    assert fields["yearly_amount"]["display_text"] == format_number(gain(Period.YEARLY, 1.07, 200.0))
    assert settings_repository.get("amount") == "200"


def test_invalid_input_flags_only_that_field(client: TestClient, settings_repository: SettingsRepository):
    client.post("/v1/fields/amount/input", json={"raw_text": "200"})

    response = client.post("/v1/fields/amount/input", json={"raw_text": "200 *"})

    data = response.json()
    assert data["outcome"] == "invalid"
    assert data["error"]
    fields = fields_by_id(data)
    assert fields["amount"]["is_error"] is True
    assert fields["amount"]["display_text"] == "200 *"
    assert fields["calculated_amount"]["display_text"] == "200"
    assert [f for f in fields.values() if f["is_error"]] == [fields["amount"]]
    assert settings_repository.get("amount") == "200"


def test_blur_reverts_to_last_valid_value(client: TestClient):
    client.post("/v1/fields/amount/focus")
    client.post("/v1/fields/amount/input", json={"raw_text": "300"})
    client.post("/v1/fields/amount/input", json={"raw_text": "300 +"})

    response = client.post("/v1/fields/amount/blur")

    assert response.status_code == 200
    amount = fields_by_id(response.json())["amount"]
    assert amount["display_text"] == "300"
    assert amount["is_error"] is False
    assert amount["focused"] is False


def test_percent_input_sets_yearly_rate(client: TestClient, settings_repository: SettingsRepository):
    response = client.post("/v1/fields/yearly/input", json={"raw_text": "50"})

    fields = fields_by_id(response.json())
    assert fields["yearly_amount"]["display_text"] == "50"
    assert settings_repository.get("yearly") == "1.5"


def test_gain_input_without_growth_is_degenerate(client: TestClient, settings_repository: SettingsRepository):
    client.post("/v1/fields/yearly/input", json={"raw_text": "0"})

    response = client.post("/v1/fields/daily_amount/input", json={"raw_text": "5"})

    assert response.json()["outcome"] == "degenerate"
    assert fields_by_id(response.json())["calculated_amount"]["display_text"] == "100"
    assert settings_repository.get("amount") is None


def test_unknown_field_returns_404(client: TestClient):
    response = client.post("/v1/fields/weekly/input", json={"raw_text": "1"})
    assert response.status_code == 404

    assert client.post("/v1/fields/weekly/focus").status_code == 404
    assert client.post("/v1/fields/weekly/blur").status_code == 404


def test_display_only_field_returns_409(client: TestClient):
    assert client.post("/v1/fields/calculated_amount/focus").status_code == 409
    response = client.post("/v1/fields/calculated_amount/input", json={"raw_text": "1"})
    assert response.status_code == 409


def test_rates_empty_before_refresh(client: TestClient):
    response = client.get("/v1/rates")

    assert response.status_code == 200
    assert response.json()["rates"] == {}


def test_refresh_rates_enables_currency_input(client: TestClient):
    """Test POST /v1/rates/refresh followed by an expression using a currency code"""
    response = client.post("/v1/rates/refresh")

    assert response.status_code == 200
    data = response.json()
    assert data["base_currency"] == "USD"
    assert data["rates"]["EUR"] == "0.9"
    assert data["refresh_in_flight"] is False

    response = client.post("/v1/fields/amount/input", json={"raw_text": "100 * EUR"})

    assert response.json()["outcome"] == "accepted"
    calculated = fields_by_id(response.json())["calculated_amount"]["display_text"]
    assert float(calculated) == pytest.approx(90.0)
    assert client.get("/v1/rates").json()["rates"]["GBP"] == "0.75"


def test_refresh_reevaluates_focused_field(client: TestClient):
    first = client.post("/v1/fields/amount/input", json={"raw_text": "10 * GBP"})
    assert first.json()["outcome"] == "invalid"

    client.post("/v1/rates/refresh")

    fields = fields_by_id(client.get("/v1/fields").json())
    assert float(fields["calculated_amount"]["display_text"]) == pytest.approx(7.5)
    assert fields["amount"]["is_error"] is False


def test_shutdown_cancels_rate_refresher(client: TestClient):
    with client:
        client.post("/v1/rates/refresh")
        refresher = client.app.state.rates_refresher
        assert refresher.cancelled is False

    assert refresher.cancelled is True


def test_failed_refresh_keeps_empty_table(client: TestClient):
    """Rate source outage is not an API error"""
    failing = RatesClient(
        url="https://rates.test/v2/exchange-rates",
        transport=httpx.MockTransport(lambda request: httpx.Response(503)),
    )
    client.app.dependency_overrides[get_rates_client] = lambda: failing

    response = client.post("/v1/rates/refresh")

    assert response.status_code == 200
    assert response.json()["rates"] == {}
