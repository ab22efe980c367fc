# lexia/access.py
"""Case-level permission checks."""

import logging
from typing import Literal

from lexia.models.sqlite_store import SQLiteStore

logger = logging.getLogger(__name__)

Permission = Literal["can_view", "can_edit", "can_manage_team", "can_delete"]

# Permissions any assigned team member has; the rest need the leader role
_MEMBER_PERMISSIONS = {"can_view", "can_edit"}


class CasePermissionChecker:
    """
    Decides whether a user may act on a case.

    - admin_general: always allowed
    - client: only can_view, and only when the user is a portal contact of
      the case's company
    - everyone else: needs a case assignment; can_manage_team and can_delete
      require the leader role
    """

    def __init__(self, store: SQLiteStore) -> None:
        self.store = store

    async def check(self, user_id: str, case_id: str, permission: Permission = "can_view") -> bool:
        profile = await self.store.get_profile(user_id)

        if profile is not None and profile.system_role == "admin_general":
            return True

        if profile is not None and profile.system_role == "client":
            if permission != "can_view":
                return False
            case = await self.store.get_case(case_id)
            if case is None or not case.company_id:
                return False
            return await self.store.is_company_contact(user_id, case.company_id)

        role = await self.store.get_case_role(case_id, user_id)
        if role is None:
            return False
        if permission in _MEMBER_PERMISSIONS:
            return True
        return role == "leader"
