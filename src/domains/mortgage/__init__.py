"""Mortgage Domain - live rates and payment calculation.

Both tools are backed by the HomeSlice API:
- get_mortgage_rates: current rates per product for a state
- calculate_mortgage: monthly payment breakdown for a purchase
"""

from typing import TYPE_CHECKING, Any

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from shared.errors import UnknownToolError, ValidationError
from shared.logging import get_logger
from shared.models import MortgageRequest, RateQuery, RateQuoteSet, ToolDefinition
from shared.schema import create_tool_schema
from domains.base import BaseAdapter
from domains.mortgage.client import HomeSliceClient

if TYPE_CHECKING:
    from homeslice_server.router import ToolRouter

logger = get_logger(__name__)

DOMAIN = "mortgage"

STATE_MESSAGE = "State must be a 2-letter code (e.g., FL, CA, TX)"

FIELD_MESSAGES = {
    "home_price": "Home price must be a positive number",
    "down_payment_amt": "Down payment must be a positive number",
    "down_payment_type": 'Down payment type must be "percent" or "amount"',
    "state": STATE_MESSAGE,
}


def parse_arguments(model: type[BaseModel], parameters: dict[str, Any]) -> Any:
    """
    Validate tool arguments against a model.

    Only the first failing field is reported, in declaration order.

    Raises:
        ValidationError: With a caller-facing message
    """
    try:
        return model.model_validate(parameters)
    except PydanticValidationError as e:
        first = e.errors()[0]
        field = str(first["loc"][0]) if first["loc"] else ""
        message = FIELD_MESSAGES.get(field, f"Invalid value for {field}: {first['msg']}")
        raise ValidationError(message) from e


class MortgageAdapter(BaseAdapter):
    """
    Mortgage Domain Adapter.

    Provides tools for:
    - Live mortgage rate lookup by state
    - Mortgage payment calculation
    """

    def __init__(self, client: HomeSliceClient) -> None:
        super().__init__(DOMAIN)
        self.client = client
        self._define_tools()

    def _define_tools(self) -> None:
        """Define all mortgage tools."""

        self._tools["get_mortgage_rates"] = ToolDefinition(
            name="get_mortgage_rates",
            domain=DOMAIN,
            description="Retrieve live mortgage rates for a specific state from HomeSlice API",
            input_schema=create_tool_schema(
                [
                    {
                        "name": "state",
                        "type": "string",
                        "description": "Two-letter state code (e.g., FL, CA, TX)"
                    },
                ],
                required=["state"]
            ),
            failure_label="Failed to fetch rates",
            examples=[
                {"input": {"state": "FL"}, "description": "Current Florida rates"}
            ]
        )

        self._tools["calculate_mortgage"] = ToolDefinition(
            name="calculate_mortgage",
            domain=DOMAIN,
            description="Calculate monthly mortgage payment with live state-specific rates using HomeSlice API",
            input_schema=create_tool_schema(
                [
                    {
                        "name": "home_price",
                        "type": "number",
                        "description": "The listing price of the home"
                    },
                    {
                        "name": "down_payment_amt",
                        "type": "number",
                        "description": (
                            'Down payment amount. If down_payment_type is "percent", enter percentage '
                            '(e.g., 10 for 10%). If "amount", enter dollar amount (e.g., 80000)'
                        )
                    },
                    {
                        "name": "down_payment_type",
                        "type": "string",
                        "description": 'Type of down payment: "percent" or "amount"',
                        "enum": ["percent", "amount"],
                        "default": "percent"
                    },
                    {
                        "name": "state",
                        "type": "string",
                        "description": (
                            "Two-letter state code (e.g., FL, CA, TX). "
                            "Used to determine the average interest rate"
                        )
                    },
                    {
                        "name": "loan_term",
                        "type": "number",
                        "description": "Loan term in years (15, 20, 30, or 40)",
                        "enum": [15, 20, 30, 40],
                        "default": 30
                    },
                    {
                        "name": "interest_rate",
                        "type": "number",
                        "description": (
                            "Annual interest rate as percentage (e.g., 6.5). "
                            "If not provided, uses current average rate for the state"
                        )
                    },
                    {
                        "name": "yearly_insurance",
                        "type": "number",
                        "description": "Yearly cost of homeowner's insurance in dollars"
                    },
                    {
                        "name": "yearly_property_tax",
                        "type": "number",
                        "description": "Yearly cost of property tax in dollars"
                    },
                    {
                        "name": "monthly_pmi",
                        "type": "number",
                        "description": "Monthly cost of private mortgage insurance (PMI) in dollars"
                    },
                    {
                        "name": "monthly_hoa",
                        "type": "number",
                        "description": "Monthly cost of homeowner's association (HOA) fees in dollars"
                    },
                ],
                required=["home_price", "down_payment_amt", "down_payment_type", "state"]
            ),
            failure_label="Calculation failed",
            examples=[
                {
                    "input": {
                        "home_price": 300000,
                        "down_payment_amt": 20,
                        "down_payment_type": "percent",
                        "state": "FL"
                    },
                    "description": "20% down on a $300k Florida home"
                }
            ]
        )

    async def execute(self, action: str, parameters: dict[str, Any]) -> Any:
        if action == "get_mortgage_rates":
            return await self._get_mortgage_rates(parameters)
        if action == "calculate_mortgage":
            return await self._calculate_mortgage(parameters)
        raise UnknownToolError(action)

    async def _get_mortgage_rates(self, parameters: dict[str, Any]) -> dict[str, Any]:
        query = parse_arguments(RateQuery, parameters)

        payload = await self.client.fetch_state_rates(query.state)
        quotes = RateQuoteSet.from_provider(payload, requested_state=query.state)

        logger.debug("Rates fetched", state=quotes.state, event_datetime=quotes.event_datetime)
        return quotes.to_output()

    async def _calculate_mortgage(self, parameters: dict[str, Any]) -> Any:
        request = parse_arguments(MortgageRequest, parameters)
        return await self.client.calculate_mortgage(request)

    async def close(self) -> None:
        await self.client.close()


def register_mortgage_domain(router: "ToolRouter", client: HomeSliceClient) -> MortgageAdapter:
    """Register the mortgage tools and adapter with the router."""
    adapter = MortgageAdapter(client)
    router.registry.register_many(adapter.tools)
    router.register_adapter(DOMAIN, adapter)

    logger.info("Mortgage domain registered", tools=[t.name for t in adapter.tools])
    return adapter


__all__ = [
    "HomeSliceClient",
    "MortgageAdapter",
    "register_mortgage_domain",
]
