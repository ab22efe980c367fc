# lexia/server.py
"""
FastMCP server instance with tool registration.

CRITICAL: configure_logging() is called first to prevent stdout pollution.
All logging goes to stderr as JSON.
"""

# Configure logging FIRST before any other imports
from lexia.logging_config import configure_logging

configure_logging()

# Now safe to import everything else
import logging

from fastmcp import FastMCP
from fastmcp.exceptions import ToolError

from lexia.config.loader import load_config
from lexia.errors import LexiaError
from lexia.tools.analyze_case import analyze_case as _analyze_case
from lexia.tools.get_analysis import get_analysis as _get_analysis
from lexia.tools.list_analyses import list_analyses as _list_analyses
from lexia.tools.services import Services, build_services

logger = logging.getLogger(__name__)

mcp = FastMCP("lexia")

_config = load_config()
configure_logging(_config.logging.level)
_services: Services | None = None


async def initialize_services(config=None) -> Services:
    """
    Create the shared services and the database schema.

    Called by __main__.py before the stdio transport starts.
    """
    global _services
    config = config or _config
    configure_logging(config.logging.level)
    _services = build_services(config)
    await _services.store.initialize()
    logger.info(f"MCP services initialized (db={_services.store.db_path})")
    return _services


def _context() -> tuple[str, Services]:
    if _services is None:
        raise RuntimeError("Services not initialized. Call initialize_services() first.")
    user_id = _services.config.mcp.user_id
    if not user_id:
        raise ToolError("mcp.user_id is not configured; set it in the lexia config file")
    return user_id, _services


async def _call(tool, *args) -> dict:
    user_id, services = _context()
    try:
        return await tool(user_id, *args, services)
    except LexiaError as e:
        raise ToolError(e.message)


@mcp.tool()
async def analyze_case(case_id: str) -> dict:
    """Run a full strategic analysis (risks, precedents, scenarios, timeline, recommendation) for a case."""
    return await _call(_analyze_case, case_id)


@mcp.tool()
async def list_analyses(case_id: str | None = None) -> dict:
    """List the 20 most recent strategic analyses, optionally for one case."""
    return await _call(_list_analyses, case_id)


@mcp.tool()
async def get_analysis(analysis_id: str) -> dict:
    """Retrieve one stored strategic analysis by id."""
    return await _call(_get_analysis, analysis_id)


logger.info("MCP server initialized with 3 tools")
