"""
Entry point of the gjp MCP server: loads .env, sets up logging and serves.
"""

import logging
import os
import sys

from dotenv import load_dotenv


def setup_environment() -> bool:
    """Loads .env into the environment and configures logging on stderr."""
    load_dotenv()

    # stdout carries the stdio transport
    log_level = os.environ.get("LOG_LEVEL", "INFO").upper()
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
    )
    return True


def run_server() -> None:
    """
    Starts the server with the transport from the configuration.
    """
    if not setup_environment():
        logging.critical("Initial environment setup failed. Exiting.")
        sys.exit(1)

    # The configuration is read when the server module is imported, after .env is loaded.
    from .server import mcp_app, server_config

    logger = logging.getLogger(__name__)
    logger.info(
        "gjp MCP server: tags '%s*', layout src=%s kit=%s lists=%s, git '%s'",
        server_config.GJP_TAG_PREFIX,
        server_config.GJP_SRC_DIR,
        server_config.GJP_KIT_DIR,
        server_config.GJP_FILE_LISTS_DIR,
        server_config.GJP_GIT_BINARY,
    )
    if server_config.GJP_ECHO_COMMANDS and server_config.MCP_TRANSPORT == "stdio":
        logger.warning("GJP_ECHO_COMMANDS writes to stdout and will corrupt the stdio transport")

    if server_config.MCP_TRANSPORT == "stdio":
        logger.info("Serving on stdio")
    else:
        logger.info(
            "Serving %s on %s:%s",
            server_config.MCP_TRANSPORT,
            server_config.MCP_HOST,
            server_config.MCP_PORT,
        )
    mcp_app.run(transport=server_config.MCP_TRANSPORT)


if __name__ == "__main__":
    run_server()
