import structlog
from pydantic import BaseModel
from sqlalchemy import inspect
from sqlalchemy.orm import Session

from household_hub.models.context import CurrentContext
from household_hub.models.profile import Profile
from household_hub.repositories.ownership_repository import OwnableResource, OwnershipRepository
from household_hub.core.exceptions import (
    NotFoundException,
    ForbiddenException,
    ValidationException,
)

logger = structlog.get_logger(__name__)


def owner_dict(profile: Profile) -> dict:
    return {"id": profile.id, "name": profile.name, "image": profile.image, "color": profile.color}


class OwnershipService:
    """
    Household-mediated access to one family of ownable resources.

    A caller may use a resource when at least one of its owner profiles is
    a profile of the caller's active household, or when it has no owners
    at all. There is no ACL table: access is derived from membership.
    """

    def __init__(self, db: Session, resource: OwnableResource):
        self.db = db
        self.resource = resource
        self.repo = OwnershipRepository(db, resource)

    # Hooks for families with their own field rules

    def build(self, data: BaseModel, context: CurrentContext):
        """New resource instance from a create payload"""
        return self.resource.model(
            **data.model_dump(exclude={"owner_ids"}),
            user_id=context.user.id,
        )

    def apply_update(self, obj, data: BaseModel) -> None:
        self._set_fields(obj, data.model_dump(exclude_unset=True))

    # Resource CRUD

    def list_resources(self, context: CurrentContext) -> list[dict]:
        """
        Resources visible to the caller.

        Everything owned by a profile of the active household, plus
        ownerless resources the caller created.
        """
        resources = self.repo.get_visible(context.household_profile_ids, context.user.id)
        owners = self.repo.get_owner_profiles_bulk([r.id for r in resources])
        return [self._to_response(r, owners[r.id]) for r in resources]

    def create_resource(self, data: BaseModel, context: CurrentContext) -> dict:
        """
        Create a resource and its owner rows in one transaction.

        Raises:
            ValidationException: If any supplied owner is outside the household
        """
        owner_ids = self._validate_owner_ids(data.owner_ids or [context.profile.id], context)

        try:
            obj = self.repo.create_no_commit(self.build(data, context))
            self.repo.add_owners_no_commit(obj.id, owner_ids)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        self.db.refresh(obj)
        logger.info(
            "resource_created",
            resource=self.resource.model.__tablename__,
            resource_id=obj.id,
            owner_count=len(owner_ids),
        )
        return self._to_response(obj, self.repo.get_owner_profiles(obj.id))

    def get_resource(self, resource_id: str, context: CurrentContext) -> dict:
        obj = self.get_accessible(resource_id, context)
        return self._to_response(obj, self.repo.get_owner_profiles(obj.id))

    def update_resource(self, resource_id: str, data: BaseModel, context: CurrentContext) -> dict:
        obj = self.get_accessible(resource_id, context)
        self.apply_update(obj, data)
        obj = self.repo.update(obj)
        return self._to_response(obj, self.repo.get_owner_profiles(obj.id))

    def delete_resource(self, resource_id: str, context: CurrentContext) -> None:
        """Delete a resource with its owner rows and children"""
        obj = self.get_accessible(resource_id, context)
        self.repo.delete(obj)
        logger.info(
            "resource_deleted",
            resource=self.resource.model.__tablename__,
            resource_id=resource_id,
        )

    def get_accessible(self, resource_id: str, context: CurrentContext):
        """
        Load a resource the caller may use.

        Raises:
            NotFoundException: If the resource doesn't exist
            ForbiddenException: If owners exist and none is in the caller's household
        """
        obj = self.repo.get_resource(resource_id)
        if not obj:
            raise NotFoundException(f"{self.resource.label} not found")
        self._check_access(self.repo.get_owner_ids(resource_id), context)
        return obj

    # Owners

    def get_owners(self, resource_id: str, context: CurrentContext) -> list[dict]:
        """
        Current owner profiles of a resource.

        An empty owner set is readable by any caller, including the owner
        set of an id that matches no resource.

        Raises:
            ForbiddenException: If owners exist and none is in the caller's household
        """
        self._check_access(self.repo.get_owner_ids(resource_id), context)
        return [owner_dict(p) for p in self.repo.get_owner_profiles(resource_id)]

    def replace_owners(
        self, resource_id: str, profile_ids: list[str], context: CurrentContext
    ) -> list[dict]:
        """
        Replace the owner set of a resource.

        Flow:
        1. Resource must exist (404)
        2. Current owners must be empty or intersect the caller's household (403)
        3. Every proposed profile must belong to the household (400, nothing changes)
        4. Delete current owner rows, insert the new ones, commit once

        Returns:
            The new owner profiles
        """
        self.get_accessible(resource_id, context)
        owner_ids = self._validate_owner_ids(profile_ids, context)

        try:
            self.repo.replace_owners_no_commit(resource_id, owner_ids)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        logger.info(
            "owners_replaced",
            resource=self.resource.model.__tablename__,
            resource_id=resource_id,
            owner_count=len(owner_ids),
        )
        return [owner_dict(p) for p in self.repo.get_owner_profiles(resource_id)]

    def _check_access(self, owner_ids: list[str], context: CurrentContext) -> None:
        if owner_ids and not context.shares_household_with(owner_ids):
            raise ForbiddenException("Forbidden")

    def _validate_owner_ids(self, profile_ids: list[str], context: CurrentContext) -> list[str]:
        """All-or-nothing check; returns the ids without duplicates"""
        household_ids = context.household_profile_ids
        if any(pid not in household_ids for pid in profile_ids):
            raise ValidationException("Some profiles are not in your household")
        return list(dict.fromkeys(profile_ids))

    def _set_fields(self, obj, changes: dict) -> None:
        """Apply a partial update; None only clears nullable columns"""
        columns = self.resource.model.__table__.c
        for key, value in changes.items():
            if value is None and not columns[key].nullable:
                continue
            setattr(obj, key, value)

    def _to_response(self, obj, owners: list[Profile]) -> dict:
        data = {attr.key: getattr(obj, attr.key) for attr in inspect(obj).mapper.column_attrs}
        data["owners"] = [owner_dict(p) for p in owners]
        return data
