"""
MCP server exposing the phases of gjp projects as tools.
"""

import logging
from typing import Any

from fastapi.middleware.cors import CORSMiddleware
from starlette.applications import Starlette
from starlette.middleware import Middleware

from mcp.server.fastmcp import Context, FastMCP

from gjp_mcp.prompts import get_prompts
from gjp_mcp.utils.config import ServiceConfig
from gjp_mcp.utils.dependencies import get_base_config, get_phase_tool_provider

logger = logging.getLogger(__name__)


class GjpFastMCP(FastMCP):
    """FastMCP server whose HTTP apps accept the origins configured in MCP_CORS_ORIGIN_REGEX."""

    def __init__(self, config: ServiceConfig) -> None:
        super().__init__("gjp-mcp", host=config.MCP_HOST, port=config.MCP_PORT)
        self.cors_origin_regex = config.MCP_CORS_ORIGIN_REGEX

    def _with_cors(self, app: Starlette) -> Starlette:
        app.user_middleware.insert(
            0,
            Middleware(
                CORSMiddleware,
                allow_origin_regex=self.cors_origin_regex,
                allow_credentials=True,
                allow_methods=["GET", "POST", "DELETE"],
                allow_headers=["*"],
            ),
        )
        app.middleware_stack = app.build_middleware_stack()
        return app

    def sse_app(self, mount_path: str | None = None) -> Starlette:
        return self._with_cors(super().sse_app(mount_path))

    def streamable_http_app(self) -> Starlette:
        return self._with_cors(super().streamable_http_app())


# Shared with main.py, which runs the server.
server_config = get_base_config()
mcp_app = GjpFastMCP(server_config)
logger.info(
    "gjp server configured",
    extra={"tag_prefix": server_config.GJP_TAG_PREFIX, "git": server_config.GJP_GIT_BINARY},
)


# --- Prompt Handlers ---
@mcp_app.prompt(title="gjp Packaging Workflow")
def get_workflow_prompt() -> str:
    """Describes the gathering and dry-running workflow of a gjp project."""
    prompts = get_prompts()
    return prompts["gjp-workflow"]

# --- Tool Definitions ---

async def _run_phase_command(command: str, path: str, **extra: str) -> dict[str, Any]:
    """Runs one gjp command through the PhaseTool and shapes the result for MCP clients."""
    logger.info(f"Executing gjp command '{command}' on path '{path}'")
    try:
        tool = get_phase_tool_provider()
        result = await tool.execute({"command": command, "path": path, **extra})
        if result.error:
            return {"status": "error", "error": result.error, "exit_code": result.error_code}
        return {"status": "success", "result": result.output, "exit_code": result.error_code}

    except Exception as e:
        logger.error(f"Error executing gjp command: {e}", exc_info=True)
        return {"status": "error", "error": str(e), "exit_code": 1}


@mcp_app.tool(name="gjp_init")
async def gjp_init(context: Context, path: str) -> dict[str, Any]:
    """
    Turns an existing directory into a gjp project and starts a gathering phase.

    Args:
        path: The absolute path of the directory. It must not already be a project.

    Returns:
        A dictionary containing the resulting phase.
    """
    return await _run_phase_command("init", path)


@mcp_app.tool(name="gjp_gather")
async def gjp_gather(context: Context, path: str) -> dict[str, Any]:
    """
    Starts a gathering phase. An active dry-run is finished first.

    Args:
        path: The absolute path of the project or of any directory inside it.

    Returns:
        A dictionary whose result tells whether a new phase was started.
    """
    return await _run_phase_command("gather", path)


@mcp_app.tool(name="gjp_dry_run")
async def gjp_dry_run(context: Context, path: str) -> dict[str, Any]:
    """
    Starts a dry-running phase. An active gathering phase is finished first.
    Changes made to src/ during the dry-run are discarded when it is finished.

    Args:
        path: The absolute path of the project or of any directory inside it.

    Returns:
        A dictionary whose result tells whether a new phase was started.
    """
    return await _run_phase_command("dry_run", path)


@mcp_app.tool(name="gjp_finish")
async def gjp_finish(context: Context, path: str) -> dict[str, Any]:
    """
    Ends the active phase and updates the changed-file lists.

    Args:
        path: The absolute path of the project or of any directory inside it.

    Returns:
        A dictionary whose result names the phase that was closed ("none" if there was none).
    """
    return await _run_phase_command("finish", path)


@mcp_app.tool(name="gjp_status")
async def gjp_status(context: Context, path: str) -> dict[str, Any]:
    """
    Shows the active phase, the project version and the snapshot tag counters.

    Args:
        path: The absolute path of the project or of any directory inside it.

    Returns:
        A dictionary containing the project status.
    """
    return await _run_phase_command("status", path)


@mcp_app.tool(name="gjp_build")
async def gjp_build(context: Context, path: str, build_command: str) -> dict[str, Any]:
    """
    Runs a build command (for example `ant -f src/foo/build.xml`) from the project root.
    The project must be dry-running; no phase is started implicitly.

    Args:
        path: The absolute path of the project or of any directory inside it.
        build_command: The command line to run. It is split like a shell would, but not run by a shell.

    Returns:
        A dictionary containing the build's standard output.
    """
    return await _run_phase_command("build", path, build_command=build_command)
