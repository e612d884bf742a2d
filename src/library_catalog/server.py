"""Library Catalog MCP Server.

Exposes one Catalog over the Model Context Protocol. The catalog is
loaded when the server starts and saved when it shuts down, mirroring
the interactive CLI's load-at-start and save-on-exit.
"""

import logging
import signal
import sys
from typing import Any

from fastmcp import FastMCP

from .catalog import Catalog
from .config import CatalogConfig, configure_logging, get_config
from .storage import StorageException
from .tools import build_catalog_tools

logger = logging.getLogger(__name__)


def create_server(catalog: Catalog, config: CatalogConfig | None = None) -> FastMCP:
    """Create a FastMCP server with the catalog tools registered."""
    config = config or get_config()
    mcp = FastMCP(
        name=config.server_name,
        instructions=(
            "Library Catalog - books, members and borrowing. Use add_book and "
            "add_member to grow the catalog, borrow_book and return_book to "
            "lend books, and save_catalog to persist changes."
        ),
    )

    tools = build_catalog_tools(catalog)
    for tool in tools:
        logger.debug("Registering tool: %s", tool["name"])
        mcp.tool(
            name=tool["name"],
            description=tool["description"],
        )(tool["handler"])

    logger.info("Registered %d catalog tools", len(tools))
    return mcp


def main() -> None:
    """Entry point: ``library-catalog-mcp``."""
    config = get_config()
    configure_logging(config)
    if not config.debug:
        logging.getLogger("fastmcp").setLevel(logging.WARNING)

    catalog = Catalog.from_config(config)
    report = catalog.load_all()
    if not report.ok:
        logger.warning("Some collections failed to load: %s", report.errors)

    mcp = create_server(catalog, config)

    def signal_handler(signum: int, _frame: Any) -> None:
        logger.info("Received signal %s, initiating shutdown...", signum)
        sys.exit(0)

    signal.signal(signal.SIGTERM, signal_handler)

    logger.info("Starting %s on stdio transport", config.server_name)
    try:
        mcp.run(transport="stdio")
    except KeyboardInterrupt:
        logger.info("Server stopped by user")
    finally:
        try:
            report = catalog.save_all()
            if report.skipped:
                logger.warning("Kept unreadable stores unchanged: %s", report.skipped)
        except StorageException:
            logger.error("Catalog could not be saved on shutdown")


if __name__ == "__main__":
    main()
