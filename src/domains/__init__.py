"""Application Domains.

Each domain contains:
- Tool definitions
- Adapter implementation
- Backend client

Domains are isolated with no cross-domain calls or shared state.
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from shared.config import HomeSliceSettings
    from homeslice_server.router import ToolRouter


def load_all_domains(router: "ToolRouter", settings: "HomeSliceSettings") -> None:
    """
    Load and register all application domains.

    This is called at server startup to register all
    domain tools and adapters.
    """
    from domains.mortgage import HomeSliceClient, register_mortgage_domain

    register_mortgage_domain(router, HomeSliceClient(settings))


__all__ = ["load_all_domains"]
