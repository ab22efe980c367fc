# tests/unit/test_access.py
"""Unit tests for case permission checks."""

import pytest

from conftest import CASE_ID, OTHER_USER_ID, USER_ID
from lexia.access import CasePermissionChecker
from lexia.models.records import CaseRecord, Profile


@pytest.mark.asyncio
async def test_leader_has_every_permission(store):
    checker = CasePermissionChecker(store)
    for permission in ("can_view", "can_edit", "can_manage_team", "can_delete"):
        assert await checker.check(USER_ID, CASE_ID, permission)


@pytest.mark.asyncio
async def test_member_limited_to_view_and_edit(store):
    await store.assign_case(CASE_ID, OTHER_USER_ID, "member")
    checker = CasePermissionChecker(store)
    assert await checker.check(OTHER_USER_ID, CASE_ID, "can_view")
    assert await checker.check(OTHER_USER_ID, CASE_ID, "can_edit")
    assert not await checker.check(OTHER_USER_ID, CASE_ID, "can_delete")


@pytest.mark.asyncio
async def test_unassigned_user_denied(store):
    assert not await CasePermissionChecker(store).check(OTHER_USER_ID, CASE_ID)


@pytest.mark.asyncio
async def test_admin_always_allowed(store):
    await store.upsert_profile(Profile(id="admin", system_role="admin_general"))
    assert await CasePermissionChecker(store).check("admin", CASE_ID, "can_delete")


@pytest.mark.asyncio
async def test_client_views_own_company_case_only(store):
    await store.add_case(CaseRecord(id="case-co", description="x", company_id="company-1"))
    await store.upsert_profile(Profile(id="client-1", system_role="client"))
    await store.add_person("company-1", portal_user_id="client-1")
    checker = CasePermissionChecker(store)

    assert await checker.check("client-1", "case-co", "can_view")
    assert not await checker.check("client-1", "case-co", "can_edit")
    assert not await checker.check("client-1", CASE_ID, "can_view")
