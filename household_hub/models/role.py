"""Household role enum for membership-based access control."""

from enum import Enum as PyEnum


class HouseholdRole(str, PyEnum):
    """
    Household membership roles.

    - OWNER: created exactly once, for the household's creator. Can delete the
      household. Never assignable, changeable or removable afterwards.
    - ADMIN: manage members, profiles and household details.
    - MEMBER: read/write household data, cannot manage members.
    """

    OWNER = "owner"
    ADMIN = "admin"
    MEMBER = "member"


ASSIGNABLE_ROLES = (HouseholdRole.ADMIN, HouseholdRole.MEMBER)
