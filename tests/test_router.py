"""Tests for tool dispatch and the tool envelope."""

import json

import httpx
import pytest

from shared.errors import ValidationError
from shared.models import ToolDefinition, ToolResultStatus
from domains.base import BaseAdapter
from domains.mortgage import HomeSliceClient, register_mortgage_domain
from homeslice_server.router import ToolRouter

from conftest import CALCULATION_PAYLOAD, RecordingTransport


def make_router(settings, transport) -> ToolRouter:
    router = ToolRouter()
    register_mortgage_domain(router, HomeSliceClient(settings, transport=transport))
    return router


VALID_CALCULATION = {
    "home_price": 300000,
    "down_payment_amt": 20,
    "down_payment_type": "percent",
    "state": "FL",
}


class TestCatalog:
    """Tests for the advertised tool list."""

    def test_lists_two_tools_in_order(self, settings, rates_transport):
        """Test tool names and order."""
        router = make_router(settings, rates_transport)

        tools = router.list_tools()

        assert [t.name for t in tools] == ["get_mortgage_rates", "calculate_mortgage"]
        assert all(t.description for t in tools)

    def test_calculate_mortgage_schema(self, settings, rates_transport):
        """Test required fields, enums and defaults."""
        router = make_router(settings, rates_transport)
        schema = router.list_tools()[1].inputSchema

        assert schema["type"] == "object"
        assert schema["required"] == [
            "home_price", "down_payment_amt", "down_payment_type", "state"
        ]
        assert schema["properties"]["down_payment_type"]["enum"] == ["percent", "amount"]
        assert schema["properties"]["down_payment_type"]["default"] == "percent"
        assert schema["properties"]["loan_term"]["enum"] == [15, 20, 30, 40]
        assert schema["properties"]["loan_term"]["default"] == 30
        assert schema["properties"]["monthly_pmi"]["type"] == "number"


class TestGetMortgageRates:
    """Tests for the get_mortgage_rates tool."""

    @pytest.mark.asyncio
    async def test_rates_are_renamed_not_changed(self, settings, rates_transport):
        """Test the output vocabulary and source label."""
        router = make_router(settings, rates_transport)

        result = await router.call_tool("get_mortgage_rates", {"state": "fl"})

        assert not result.isError
        output = json.loads(result.content[0].text)
        assert output["state"] == "FL"
        assert output["event_datetime"] == "2025-01-15T14:30:00Z"
        assert output["source"] == "HomeSlice API"
        assert output["rates"] == {
            "30_year_fixed": 6.875,
            "30_year_fixed_fha": 6.25,
            "30_year_fixed_va": 6.125,
            "20_year_fixed": 6.75,
            "15_year_fixed": 6.0,
            "10_year_fixed": 5.875,
            "7_year_arm": 6.5,
            "5_year_arm": 6.375,
        }

    @pytest.mark.asyncio
    async def test_missing_products_are_null(self, settings):
        """Test a provider response without some products."""
        transport = RecordingTransport(lambda request: httpx.Response(
            200, json={"state": "ak", "thirty_year_fixed": 7}
        ))
        router = make_router(settings, transport)

        result = await router.call_tool("get_mortgage_rates", {"state": "AK"})

        output = json.loads(result.content[0].text)
        assert output["rates"]["30_year_fixed"] == 7
        assert output["rates"]["5_year_arm"] is None
        assert output["event_datetime"] is None

    @pytest.mark.asyncio
    @pytest.mark.parametrize("arguments", [
        {},
        {"state": ""},
        {"state": "F"},
        {"state": "FLA"},
        {"state": "Florida"},
        {"state": 12},
        {"state": None},
    ])
    async def test_invalid_state_makes_no_request(self, settings, rates_transport, arguments):
        """Test that bad states are rejected before any HTTP call."""
        router = make_router(settings, rates_transport)

        result = await router.call_tool("get_mortgage_rates", arguments)

        assert result.isError
        assert result.content[0].text == (
            "Error: Failed to fetch rates: State must be a 2-letter code (e.g., FL, CA, TX)"
        )
        assert rates_transport.requests == []

    @pytest.mark.asyncio
    async def test_http_500(self, settings):
        """Test that a dependency failure is reported with its status."""
        transport = RecordingTransport(lambda request: httpx.Response(500))
        router = make_router(settings, transport)

        result = await router.call_tool("get_mortgage_rates", {"state": "FL"})

        assert result.isError
        assert "500" in result.content[0].text
        assert result.content[0].text.startswith("Error: Failed to fetch rates: ")

    @pytest.mark.asyncio
    async def test_network_failure(self, settings):
        """Test that a timeout is reported, not raised."""
        def time_out(request):
            raise httpx.ReadTimeout("timed out", request=request)

        router = make_router(settings, httpx.MockTransport(time_out))

        result = await router.call_tool("get_mortgage_rates", {"state": "FL"})

        assert result.isError
        assert "timed out" in result.content[0].text


class TestCalculateMortgage:
    """Tests for the calculate_mortgage tool."""

    @pytest.mark.asyncio
    async def test_scenario_lower_case_state(self, settings, calculate_transport):
        """Test the outbound body and verbatim forwarding."""
        router = make_router(settings, calculate_transport)

        result = await router.call_tool("calculate_mortgage", {
            "home_price": 300000,
            "down_payment_amt": 20,
            "down_payment_type": "percent",
            "state": "fl",
        })

        assert not result.isError
        assert json.loads(result.content[0].text) == CALCULATION_PAYLOAD

        body = json.loads(calculate_transport.requests[0].content)
        assert body["state"] == "FL"
        assert body["loan_term"] == 30
        assert "interest_rate" not in body

    @pytest.mark.asyncio
    @pytest.mark.parametrize("home_price", [0, -1, -250000.5, None, "abc"])
    async def test_non_positive_home_price(self, settings, calculate_transport, home_price):
        """Test that home_price must be positive and no call is made."""
        router = make_router(settings, calculate_transport)

        result = await router.call_tool(
            "calculate_mortgage", {**VALID_CALCULATION, "home_price": home_price}
        )

        assert result.isError
        assert result.content[0].text == (
            "Error: Calculation failed: Home price must be a positive number"
        )
        assert calculate_transport.requests == []

    @pytest.mark.asyncio
    async def test_missing_home_price(self, settings, calculate_transport):
        """Test that home_price is required."""
        router = make_router(settings, calculate_transport)
        arguments = {k: v for k, v in VALID_CALCULATION.items() if k != "home_price"}

        result = await router.call_tool("calculate_mortgage", arguments)

        assert result.isError
        assert "Home price must be a positive number" in result.content[0].text

    @pytest.mark.asyncio
    async def test_negative_down_payment(self, settings, calculate_transport):
        """Test that down_payment_amt may be zero but not negative."""
        router = make_router(settings, calculate_transport)

        result = await router.call_tool(
            "calculate_mortgage", {**VALID_CALCULATION, "down_payment_amt": -5}
        )
        assert result.isError
        assert "Down payment must be a positive number" in result.content[0].text

        result = await router.call_tool(
            "calculate_mortgage", {**VALID_CALCULATION, "down_payment_amt": 0}
        )
        assert not result.isError

    @pytest.mark.asyncio
    @pytest.mark.parametrize("down_payment_type", ["dollars", "PERCENT", "", None])
    async def test_bad_down_payment_type(self, settings, calculate_transport, down_payment_type):
        """Test that only percent and amount are accepted."""
        router = make_router(settings, calculate_transport)

        result = await router.call_tool(
            "calculate_mortgage",
            {**VALID_CALCULATION, "down_payment_type": down_payment_type}
        )

        assert result.isError
        assert 'Down payment type must be "percent" or "amount"' in result.content[0].text
        assert calculate_transport.requests == []

    @pytest.mark.asyncio
    async def test_bad_state(self, settings, calculate_transport):
        """Test the state check on the calculator."""
        router = make_router(settings, calculate_transport)

        result = await router.call_tool(
            "calculate_mortgage", {**VALID_CALCULATION, "state": "Texas"}
        )

        assert result.isError
        assert "State must be a 2-letter code" in result.content[0].text

    @pytest.mark.asyncio
    async def test_first_failing_field_is_reported(self, settings, calculate_transport):
        """Test validation order when several fields are bad."""
        router = make_router(settings, calculate_transport)

        result = await router.call_tool("calculate_mortgage", {
            "home_price": 300000,
            "down_payment_amt": -1,
            "down_payment_type": "dollars",
            "state": "X",
        })

        assert result.content[0].text == (
            "Error: Calculation failed: Down payment must be a positive number"
        )

    @pytest.mark.asyncio
    async def test_http_500(self, settings):
        """Test that a calculator failure carries the status."""
        transport = RecordingTransport(lambda request: httpx.Response(500))
        router = make_router(settings, transport)

        result = await router.call_tool("calculate_mortgage", VALID_CALCULATION)

        assert result.isError
        assert result.content[0].text == (
            "Error: Calculation failed: Failed to calculate mortgage: "
            "HTTP 500: Internal Server Error"
        )


class TestToolRouter:
    """Tests for routing and error containment."""

    @pytest.mark.asyncio
    async def test_unknown_tool(self, settings, rates_transport):
        """Test that unknown tools are reported, not raised."""
        router = make_router(settings, rates_transport)

        result = await router.call_tool("foo", {})

        assert result.isError
        assert len(result.content) == 1
        assert result.content[0].type == "text"
        assert result.content[0].text == "Error: Unknown tool: foo"

    @pytest.mark.asyncio
    async def test_none_arguments(self, settings, rates_transport):
        """Test that missing arguments are treated as empty."""
        router = make_router(settings, rates_transport)

        result = await router.execute("get_mortgage_rates", None)

        assert result.status == ToolResultStatus.VALIDATION_ERROR
        assert result.error_code == "VALIDATION_ERROR"

    @pytest.mark.asyncio
    async def test_unexpected_exception_is_contained(self):
        """Test that an adapter crash becomes an error result."""

        class BrokenAdapter(BaseAdapter):
            async def execute(self, action, parameters):
                raise RuntimeError("boom")

        router = ToolRouter()
        router.registry.register(ToolDefinition(
            name="explode",
            domain="broken",
            description="Always fails",
            failure_label="Explosion"
        ))
        router.register_adapter("broken", BrokenAdapter("broken"))

        result = await router.call_tool("explode", {})

        assert result.isError
        assert result.content[0].text == "Error: Explosion: boom"

    @pytest.mark.asyncio
    async def test_missing_adapter(self):
        """Test a registered tool whose domain has no adapter."""
        router = ToolRouter()
        router.registry.register(ToolDefinition(
            name="orphan",
            domain="nowhere",
            description="No adapter"
        ))

        result = await router.execute("orphan", {})

        assert result.status == ToolResultStatus.ERROR
        assert result.error_code == "NO_ADAPTER"

    @pytest.mark.asyncio
    async def test_validation_error_from_adapter(self):
        """Test that adapter validation errors keep their status."""

        class PickyAdapter(BaseAdapter):
            async def execute(self, action, parameters):
                raise ValidationError("nope")

        router = ToolRouter()
        router.registry.register(ToolDefinition(
            name="picky", domain="picky", description="Rejects everything"
        ))
        router.register_adapter("picky", PickyAdapter("picky"))

        result = await router.execute("picky", {"x": 1})

        assert result.status == ToolResultStatus.VALIDATION_ERROR
        assert result.to_text() == "Error: Tool call failed: nope"
        assert result.execution_time_ms >= 0

    @pytest.mark.asyncio
    async def test_success_envelope_is_pretty_json(self, settings, calculate_transport):
        """Test that success text is indented JSON and isError is false."""
        router = make_router(settings, calculate_transport)

        result = await router.call_tool("calculate_mortgage", VALID_CALCULATION)

        assert result.isError is False
        assert result.content[0].text == json.dumps(CALCULATION_PAYLOAD, indent=2)
