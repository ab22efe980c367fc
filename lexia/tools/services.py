# lexia/tools/services.py
"""
Collaborators shared by every tool.

Built once per process by the HTTP app, the MCP server or the CLI, then
passed to each tool call.
"""

import logging
from dataclasses import dataclass
from typing import Any

from lexia.access import CasePermissionChecker
from lexia.config.loader import get_db_path
from lexia.config.schema import LexiaConfig
from lexia.llm.resolver import ModelResolver
from lexia.models.sqlite_store import SQLiteStore
from lexia.ratelimit import InMemoryRateLimiter, SQLiteRateLimiter, create_rate_limiter
from lexia.usage.tracker import UsageTracker

logger = logging.getLogger(__name__)


@dataclass
class Services:
    config: LexiaConfig
    store: SQLiteStore
    resolver: Any
    permissions: Any
    usage: UsageTracker
    analyze_limiter: InMemoryRateLimiter | SQLiteRateLimiter
    draft_limiter: InMemoryRateLimiter | SQLiteRateLimiter

    async def close(self) -> None:
        await self.resolver.close()


def build_services(
    config: LexiaConfig,
    store: SQLiteStore | None = None,
    resolver: Any = None,
    permissions: Any = None,
) -> Services:
    """
    Wire the default collaborators, keeping any that are passed in.

    Args:
        config: Loaded configuration
        store: Existing store (default: SQLiteStore at the configured path)
        resolver: Object with resolve(model_string) and close()
        permissions: Object with async check(user_id, case_id, permission)
    """
    if store is None:
        store = SQLiteStore(str(get_db_path(config)))
    if resolver is None:
        resolver = ModelResolver(config.providers)
    if permissions is None:
        permissions = CasePermissionChecker(store)

    return Services(
        config=config,
        store=store,
        resolver=resolver,
        permissions=permissions,
        usage=UsageTracker(store),
        analyze_limiter=create_rate_limiter(
            config.estratega.rate_limit, "analyze", store.db_path
        ),
        draft_limiter=create_rate_limiter(config.drafting.rate_limit, "draft", store.db_path),
    )
