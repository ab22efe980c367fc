# lexia/models/schema.py
"""
Database schema definition for the SQLite store.

Provides DDL for tables, indexes, and schema initialization.
"""

import logging

import aiosqlite

logger = logging.getLogger(__name__)

# Schema version for future migrations
SCHEMA_VERSION = 1

TABLES_SQL = [
    """
    CREATE TABLE IF NOT EXISTS lexia_plans (
        id TEXT PRIMARY KEY,
        slug TEXT NOT NULL UNIQUE,
        credits_per_month REAL NOT NULL DEFAULT 300
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS profiles (
        id TEXT PRIMARY KEY,
        full_name TEXT,
        email TEXT,
        system_role TEXT NOT NULL DEFAULT 'lawyer',
        organization_id TEXT,
        lexia_plan_id TEXT REFERENCES lexia_plans(id),
        created_at TEXT NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS cases (
        id TEXT PRIMARY KEY,
        organization_id TEXT,
        company_id TEXT,
        case_number TEXT NOT NULL DEFAULT '',
        title TEXT NOT NULL DEFAULT '',
        case_type TEXT NOT NULL DEFAULT '',
        description TEXT,
        filing_date TEXT,
        jurisdiction TEXT,
        court_name TEXT,
        estimated_value REAL,
        created_at TEXT NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS case_assignments (
        case_id TEXT NOT NULL REFERENCES cases(id) ON DELETE CASCADE,
        user_id TEXT NOT NULL,
        case_role TEXT NOT NULL DEFAULT 'member',
        PRIMARY KEY (case_id, user_id)
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS people (
        id TEXT PRIMARY KEY,
        company_id TEXT,
        portal_user_id TEXT,
        full_name TEXT
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS lexia_strategic_analyses (
        id TEXT PRIMARY KEY,
        user_id TEXT NOT NULL,
        case_id TEXT,
        analysis TEXT NOT NULL,
        created_at TEXT NOT NULL,
        updated_at TEXT NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS lexia_document_templates (
        id TEXT PRIMARY KEY,
        organization_id TEXT,
        document_type TEXT NOT NULL,
        variant TEXT NOT NULL DEFAULT '',
        system_prompt_fragment TEXT,
        template_content TEXT,
        structure_schema TEXT,
        is_active INTEGER NOT NULL DEFAULT 1
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS activity_log (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        user_id TEXT NOT NULL,
        case_id TEXT,
        action_type TEXT NOT NULL,
        entity_type TEXT NOT NULL,
        entity_id TEXT NOT NULL,
        description TEXT,
        created_at TEXT NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS lexia_usage_events (
        trace_id TEXT PRIMARY KEY,
        user_id TEXT NOT NULL,
        intent TEXT NOT NULL,
        credits REAL NOT NULL,
        tokens INTEGER NOT NULL DEFAULT 0,
        period_start TEXT NOT NULL,
        created_at TEXT NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS lexia_usage_periods (
        user_id TEXT NOT NULL,
        period_start TEXT NOT NULL,
        credits_used REAL NOT NULL DEFAULT 0,
        tokens_used INTEGER NOT NULL DEFAULT 0,
        requests INTEGER NOT NULL DEFAULT 0,
        PRIMARY KEY (user_id, period_start)
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS api_tokens (
        token_hash TEXT PRIMARY KEY,
        user_id TEXT NOT NULL,
        created_at TEXT NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS rate_limits (
        scope TEXT NOT NULL,
        key TEXT NOT NULL,
        count INTEGER NOT NULL,
        reset_at REAL NOT NULL,
        PRIMARY KEY (scope, key)
    )
    """,
]

INDEXES_SQL = [
    "CREATE INDEX IF NOT EXISTS idx_analyses_user_created ON lexia_strategic_analyses(user_id, created_at)",
    "CREATE INDEX IF NOT EXISTS idx_analyses_case_created ON lexia_strategic_analyses(case_id, created_at)",
    "CREATE INDEX IF NOT EXISTS idx_templates_lookup ON lexia_document_templates(document_type, variant, organization_id)",
    "CREATE INDEX IF NOT EXISTS idx_people_portal ON people(portal_user_id, company_id)",
]


async def _get_schema_version(db: aiosqlite.Connection) -> int:
    """Get current schema version from database (0 if no version table exists)."""
    try:
        cursor = await db.execute("SELECT version FROM schema_version LIMIT 1")
        row = await cursor.fetchone()
        return row[0] if row else 0
    except aiosqlite.OperationalError:
        return 0


async def _set_schema_version(db: aiosqlite.Connection, version: int) -> None:
    await db.execute("CREATE TABLE IF NOT EXISTS schema_version (version INTEGER)")
    await db.execute("DELETE FROM schema_version")
    await db.execute("INSERT INTO schema_version (version) VALUES (?)", (version,))


async def init_db(db_path: str) -> None:
    """
    Initialize database schema with WAL mode and optimal settings.

    Args:
        db_path: Path to SQLite database file

    Settings:
        - WAL mode: Concurrent reads + writes
        - synchronous=NORMAL: Good durability/performance balance
        - busy_timeout=5000ms: Retry on SQLITE_BUSY
    """
    async with aiosqlite.connect(db_path) as db:
        await db.execute("PRAGMA journal_mode=WAL")
        await db.execute("PRAGMA synchronous=NORMAL")
        await db.execute("PRAGMA busy_timeout=5000")
        await db.execute("PRAGMA foreign_keys=ON")

        for ddl in TABLES_SQL:
            await db.execute(ddl)
        for ddl in INDEXES_SQL:
            await db.execute(ddl)

        current_version = await _get_schema_version(db)
        if current_version < SCHEMA_VERSION:
            await _set_schema_version(db, SCHEMA_VERSION)
            logger.info(f"New database initialized at v{SCHEMA_VERSION}")

        await db.commit()

        logger.info(f"Initialized database at {db_path} (schema v{SCHEMA_VERSION})")
