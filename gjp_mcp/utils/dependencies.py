"""
Configuration and dependency management for the gjp MCP server.
"""

import logging
from functools import lru_cache

from gjp_mcp.utils.config import ServiceConfig

logger = logging.getLogger(__name__)


@lru_cache
def get_base_config() -> ServiceConfig:
    """
    Retrieves the base server configuration from environment variables.

    This function is cached to avoid repeatedly reading and parsing environment
    variables and .env files, which improves performance.

    Returns:
        A cached instance of the ServiceConfig.
    """
    return ServiceConfig()


# --- Tool Providers ---

from ..tools.phase_tool import PhaseTool


@lru_cache
def get_phase_tool_provider() -> PhaseTool:
    """Returns a cached instance of the PhaseTool, sharing the base configuration."""
    logger.info("Initializing PhaseTool singleton.")
    return PhaseTool(config=get_base_config())
