"""Service configuration definition."""

from pydantic_settings import BaseSettings


class ServiceConfig(BaseSettings):
    """
    Defines the configuration for the MCP server and the gjp projects it
    manages, loaded from environment variables or a .env file.
    """

    # MCP Server transport mechanism (e.g., "stdio", "sse", "streamable-http")
    MCP_TRANSPORT: str = "stdio"
    # Host for the MCP server to bind to. Defaults to 0.0.0.0 for accessibility.
    MCP_HOST: str = "0.0.0.0"
    # Port for the MCP server to listen on.
    MCP_PORT: int = 8660
    # Origins allowed to call the SSE and streamable-http apps.
    MCP_CORS_ORIGIN_REGEX: str = ".*"

    # Prefix of every snapshot tag, e.g. gjp_gathering_started_1
    GJP_TAG_PREFIX: str = "gjp_"
    # git executable used for snapshots
    GJP_GIT_BINARY: str = "git"
    # Copy git output to the server stdout/stderr while it runs (not with the stdio transport)
    GJP_ECHO_COMMANDS: bool = False
    # Project layout, relative to the project root
    GJP_SRC_DIR: str = "src"
    GJP_KIT_DIR: str = "kit"
    GJP_FILE_LISTS_DIR: str = "file_lists"

    class Config:
        """Pydantic configuration settings."""

        # We do not specify env_file here.
        # Environment loading is handled explicitly in main.py via load_dotenv
        # to ensure the correct .env file is used.
        extra = "ignore"
