# lexia/models/sqlite_store.py
"""
SQLite-backed persistence for profiles, cases, analyses, templates and usage.

Provides async operations with WAL mode and IMMEDIATE transactions
for concurrent access safety. Stands in for the hosted relational store
and its row-level access data.
"""

import hashlib
import json
import logging
import secrets
from datetime import datetime, timezone
from typing import Any

import aiosqlite

from lexia.models.records import (
    ActivityEntry,
    AnalysisRecord,
    CaseRecord,
    PeriodUsage,
    Plan,
    Profile,
    TemplateRecord,
    generate_id,
)
from lexia.models.schema import init_db

logger = logging.getLogger(__name__)


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def hash_token(token: str) -> str:
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


class SQLiteStore:
    """
    Async SQLite-backed storage.

    Features:
        - WAL mode for concurrent reads/writes
        - IMMEDIATE transactions for write safety
        - No persistent connections (avoids resource leaks)
    """

    def __init__(self, db_path: str) -> None:
        """
        Args:
            db_path: Path to SQLite database file
        """
        self._db_path = str(db_path)
        logger.info(f"Created SQLiteStore with path: {db_path}")

    @property
    def db_path(self) -> str:
        return self._db_path

    async def initialize(self) -> None:
        """Create tables and indexes if missing."""
        await init_db(self._db_path)

    async def _write(self, sql: str, params: tuple = ()) -> int:
        """Run one write statement in an IMMEDIATE transaction; returns rowcount."""
        async with aiosqlite.connect(self._db_path) as db:
            await db.execute("BEGIN IMMEDIATE")
            try:
                cursor = await db.execute(sql, params)
                await db.commit()
                return cursor.rowcount
            except Exception:
                await db.rollback()
                raise

    async def _fetchone(self, sql: str, params: tuple = ()) -> aiosqlite.Row | None:
        async with aiosqlite.connect(self._db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(sql, params)
            return await cursor.fetchone()

    # ------------------------------------------------------------------
    # Profiles, plans, cases, people
    # ------------------------------------------------------------------

    async def upsert_profile(self, profile: Profile) -> None:
        await self._write(
            """
            INSERT INTO profiles (id, full_name, email, system_role, organization_id, lexia_plan_id, created_at)
            VALUES (?, ?, ?, ?, ?, ?, ?)
            ON CONFLICT(id) DO UPDATE SET
                full_name = excluded.full_name,
                email = excluded.email,
                system_role = excluded.system_role,
                organization_id = excluded.organization_id,
                lexia_plan_id = excluded.lexia_plan_id
            """,
            (
                profile.id,
                profile.full_name,
                profile.email,
                profile.system_role,
                profile.organization_id,
                profile.lexia_plan_id,
                _now(),
            ),
        )

    async def get_profile(self, user_id: str) -> Profile | None:
        row = await self._fetchone("SELECT * FROM profiles WHERE id = ?", (user_id,))
        if not row:
            return None
        return Profile(
            id=row["id"],
            system_role=row["system_role"],
            full_name=row["full_name"],
            email=row["email"],
            organization_id=row["organization_id"],
            lexia_plan_id=row["lexia_plan_id"],
        )

    async def add_plan(self, plan: Plan) -> None:
        await self._write(
            "INSERT OR REPLACE INTO lexia_plans (id, slug, credits_per_month) VALUES (?, ?, ?)",
            (plan.id, plan.slug, plan.credits_per_month),
        )

    async def get_plan(self, plan_id: str) -> Plan | None:
        row = await self._fetchone("SELECT * FROM lexia_plans WHERE id = ?", (plan_id,))
        if not row:
            return None
        return Plan(id=row["id"], slug=row["slug"], credits_per_month=row["credits_per_month"])

    async def add_case(self, case: CaseRecord) -> None:
        """
        Raises:
            ValueError: If case id already exists
        """
        async with aiosqlite.connect(self._db_path) as db:
            await db.execute("BEGIN IMMEDIATE")
            try:
                cursor = await db.execute("SELECT id FROM cases WHERE id = ?", (case.id,))
                if await cursor.fetchone():
                    raise ValueError(f"Case {case.id} already exists")
                await db.execute(
                    """
                    INSERT INTO cases (
                        id, organization_id, company_id, case_number, title, case_type,
                        description, filing_date, jurisdiction, court_name, estimated_value,
                        created_at
                    ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                    """,
                    (
                        case.id,
                        case.organization_id,
                        case.company_id,
                        case.case_number,
                        case.title,
                        case.case_type,
                        case.description,
                        case.filing_date,
                        case.jurisdiction,
                        case.court_name,
                        case.estimated_value,
                        _now(),
                    ),
                )
                await db.commit()
                logger.info(f"Added case {case.id}")
            except Exception:
                await db.rollback()
                raise

    async def get_case(self, case_id: str) -> CaseRecord | None:
        row = await self._fetchone(
            """
            SELECT id, case_number, title, case_type, description, filing_date,
                   jurisdiction, court_name, estimated_value, organization_id, company_id
            FROM cases WHERE id = ?
            """,
            (case_id,),
        )
        if not row:
            return None
        return CaseRecord(**dict(row))

    async def assign_case(self, case_id: str, user_id: str, case_role: str = "member") -> None:
        await self._write(
            """
            INSERT INTO case_assignments (case_id, user_id, case_role) VALUES (?, ?, ?)
            ON CONFLICT(case_id, user_id) DO UPDATE SET case_role = excluded.case_role
            """,
            (case_id, user_id, case_role),
        )

    async def get_case_role(self, case_id: str, user_id: str) -> str | None:
        """The user's role on the case, or None when not assigned."""
        row = await self._fetchone(
            "SELECT case_role FROM case_assignments WHERE case_id = ? AND user_id = ?",
            (case_id, user_id),
        )
        return row["case_role"] if row else None

    async def add_person(
        self,
        company_id: str | None,
        portal_user_id: str | None = None,
        full_name: str | None = None,
    ) -> str:
        person_id = generate_id()
        await self._write(
            "INSERT INTO people (id, company_id, portal_user_id, full_name) VALUES (?, ?, ?, ?)",
            (person_id, company_id, portal_user_id, full_name),
        )
        return person_id

    async def is_company_contact(self, user_id: str, company_id: str) -> bool:
        """Whether a person with this portal user belongs to the company."""
        row = await self._fetchone(
            "SELECT id FROM people WHERE portal_user_id = ? AND company_id = ? LIMIT 1",
            (user_id, company_id),
        )
        return row is not None

    # ------------------------------------------------------------------
    # Strategic analyses
    # ------------------------------------------------------------------

    async def add_analysis(
        self, user_id: str, case_id: str | None, analysis: dict[str, Any]
    ) -> AnalysisRecord:
        """Store a new analysis row (each run creates its own row)."""
        now = _now()
        record = AnalysisRecord(
            id=generate_id(),
            user_id=user_id,
            case_id=case_id,
            analysis=analysis,
            created_at=now,
            updated_at=now,
        )
        await self._write(
            """
            INSERT INTO lexia_strategic_analyses (id, user_id, case_id, analysis, created_at, updated_at)
            VALUES (?, ?, ?, ?, ?, ?)
            """,
            (
                record.id,
                record.user_id,
                record.case_id,
                json.dumps(analysis, ensure_ascii=False),
                record.created_at,
                record.updated_at,
            ),
        )
        logger.info(f"Stored analysis {record.id} for case {case_id}")
        return record

    async def get_analysis(self, analysis_id: str) -> AnalysisRecord | None:
        row = await self._fetchone(
            "SELECT * FROM lexia_strategic_analyses WHERE id = ?", (analysis_id,)
        )
        if not row:
            return None
        return AnalysisRecord(
            id=row["id"],
            user_id=row["user_id"],
            case_id=row["case_id"],
            analysis=json.loads(row["analysis"]),
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )

    async def list_analyses(
        self, user_id: str, case_id: str | None = None, limit: int = 20
    ) -> list[dict[str, Any]]:
        """
        Projection of stored analyses, newest first.

        With case_id: that case's analyses. Without: the user's own analyses.
        """
        where, params = ("case_id = ?", (case_id,)) if case_id else ("user_id = ?", (user_id,))
        async with aiosqlite.connect(self._db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                f"""
                SELECT id, case_id, created_at, updated_at,
                       json_extract(analysis, '$.caseNumber') AS caseNumber,
                       json_extract(analysis, '$.caseTitle') AS caseTitle,
                       json_extract(analysis, '$.analyzedAt') AS analyzedAt,
                       json_extract(analysis, '$.riskMatrix.riskLevel') AS riskLevel,
                       json_extract(analysis, '$.riskMatrix.overallScore') AS overallScore,
                       json_extract(analysis, '$.recommendations.primaryStrategy') AS primaryStrategy
                FROM lexia_strategic_analyses
                WHERE {where}
                ORDER BY created_at DESC, rowid DESC
                LIMIT ?
                """,
                (*params, limit),
            )
            rows = await cursor.fetchall()
            return [dict(row) for row in rows]

    # ------------------------------------------------------------------
    # Document templates
    # ------------------------------------------------------------------

    async def add_template(self, template: TemplateRecord) -> None:
        await self._write(
            """
            INSERT INTO lexia_document_templates (
                id, organization_id, document_type, variant, system_prompt_fragment,
                template_content, structure_schema, is_active
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (
                template.id,
                template.organization_id,
                template.document_type,
                template.variant,
                template.system_prompt_fragment,
                template.template_content,
                json.dumps(template.structure_schema) if template.structure_schema is not None else None,
                1 if template.is_active else 0,
            ),
        )

    async def find_template(
        self, document_type: str, variant: str = "", organization_id: str | None = None
    ) -> TemplateRecord | None:
        """Active organisation template if any, else the active global one."""
        row = None
        if organization_id:
            row = await self._fetchone(
                """
                SELECT * FROM lexia_document_templates
                WHERE document_type = ? AND variant = ? AND organization_id = ? AND is_active = 1
                LIMIT 1
                """,
                (document_type, variant, organization_id),
            )
        if row is None:
            row = await self._fetchone(
                """
                SELECT * FROM lexia_document_templates
                WHERE document_type = ? AND variant = ? AND organization_id IS NULL AND is_active = 1
                LIMIT 1
                """,
                (document_type, variant),
            )
        if row is None:
            return None

        structure = None
        if row["structure_schema"]:
            try:
                structure = json.loads(row["structure_schema"])
            except json.JSONDecodeError:
                logger.warning(f"Template {row['id']}: invalid structure_schema JSON, ignoring")
        return TemplateRecord(
            id=row["id"],
            document_type=row["document_type"],
            variant=row["variant"],
            organization_id=row["organization_id"],
            system_prompt_fragment=row["system_prompt_fragment"],
            template_content=row["template_content"],
            structure_schema=structure,
            is_active=bool(row["is_active"]),
        )

    # ------------------------------------------------------------------
    # Activity log and usage
    # ------------------------------------------------------------------

    async def log_activity(self, entry: ActivityEntry) -> None:
        await self._write(
            """
            INSERT INTO activity_log (user_id, case_id, action_type, entity_type, entity_id, description, created_at)
            VALUES (?, ?, ?, ?, ?, ?, ?)
            """,
            (
                entry.user_id,
                entry.case_id,
                entry.action_type,
                entry.entity_type,
                entry.entity_id,
                entry.description,
                entry.created_at or _now(),
            ),
        )

    async def list_activity(self, user_id: str) -> list[ActivityEntry]:
        async with aiosqlite.connect(self._db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                "SELECT * FROM activity_log WHERE user_id = ? ORDER BY id DESC", (user_id,)
            )
            rows = await cursor.fetchall()
            return [
                ActivityEntry(
                    user_id=row["user_id"],
                    action_type=row["action_type"],
                    entity_type=row["entity_type"],
                    entity_id=row["entity_id"],
                    description=row["description"],
                    case_id=row["case_id"],
                    created_at=row["created_at"],
                )
                for row in rows
            ]

    async def record_usage(
        self,
        user_id: str,
        trace_id: str,
        intent: str,
        credits: float,
        tokens: int,
        period_start: str,
    ) -> bool:
        """
        Record one request and fold it into the period totals.

        Idempotent on trace_id: returns False when the trace was already recorded.
        """
        async with aiosqlite.connect(self._db_path) as db:
            await db.execute("BEGIN IMMEDIATE")
            try:
                cursor = await db.execute(
                    """
                    INSERT OR IGNORE INTO lexia_usage_events
                        (trace_id, user_id, intent, credits, tokens, period_start, created_at)
                    VALUES (?, ?, ?, ?, ?, ?, ?)
                    """,
                    (trace_id, user_id, intent, credits, tokens, period_start, _now()),
                )
                if cursor.rowcount == 0:
                    await db.rollback()
                    logger.info(f"Usage trace {trace_id} already recorded")
                    return False

                await db.execute(
                    """
                    INSERT INTO lexia_usage_periods (user_id, period_start, credits_used, tokens_used, requests)
                    VALUES (?, ?, ?, ?, 1)
                    ON CONFLICT(user_id, period_start) DO UPDATE SET
                        credits_used = credits_used + excluded.credits_used,
                        tokens_used = tokens_used + excluded.tokens_used,
                        requests = requests + 1
                    """,
                    (user_id, period_start, credits, tokens),
                )
                await db.commit()
                return True
            except Exception:
                await db.rollback()
                raise

    async def get_period_usage(self, user_id: str, period_start: str) -> PeriodUsage:
        row = await self._fetchone(
            """
            SELECT credits_used, tokens_used, requests FROM lexia_usage_periods
            WHERE user_id = ? AND period_start = ?
            """,
            (user_id, period_start),
        )
        if not row:
            return PeriodUsage()
        return PeriodUsage(
            credits_used=float(row["credits_used"]),
            tokens_used=int(row["tokens_used"]),
            requests=int(row["requests"]),
        )

    # ------------------------------------------------------------------
    # API tokens
    # ------------------------------------------------------------------

    async def create_api_token(self, user_id: str) -> str:
        """Issue a new bearer token for the user. Only its hash is stored."""
        token = secrets.token_urlsafe(32)
        await self._write(
            "INSERT INTO api_tokens (token_hash, user_id, created_at) VALUES (?, ?, ?)",
            (hash_token(token), user_id, _now()),
        )
        logger.info(f"Issued API token for user {user_id}")
        return token

    async def resolve_api_token(self, token: str) -> str | None:
        """The user id owning this token, or None."""
        row = await self._fetchone(
            "SELECT user_id FROM api_tokens WHERE token_hash = ?", (hash_token(token),)
        )
        return row["user_id"] if row else None
