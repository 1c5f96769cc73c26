"""Owner join-table access shared by every ownable resource family."""

from dataclasses import dataclass

from sqlalchemy import delete, insert, select, or_, and_
from sqlalchemy.orm import Session

from household_hub.models.base import Base
from household_hub.models.profile import Profile
from household_hub.models.stock import StockAccount, StockAccountOwner
from household_hub.models.pension import PensionAccount, PensionAccountOwner
from household_hub.models.misc_asset import MiscAsset, MiscAssetOwner


@dataclass(frozen=True)
class OwnableResource:
    """
    Describes one family of ownable resources.

    Attributes:
        label: Human-readable name used in error messages ("Account", "Asset")
        model: Resource model (must have id and user_id)
        owner_model: Join model with profile_id and the resource foreign key
        resource_key: Name of the foreign key column on owner_model
    """

    label: str
    model: type[Base]
    owner_model: type[Base]
    resource_key: str

    @property
    def owner_fk(self):
        return getattr(self.owner_model, self.resource_key)


STOCK_ACCOUNTS = OwnableResource("Account", StockAccount, StockAccountOwner, "account_id")
PENSION_ACCOUNTS = OwnableResource("Pension account", PensionAccount, PensionAccountOwner, "account_id")
MISC_ASSETS = OwnableResource("Asset", MiscAsset, MiscAssetOwner, "asset_id")

OWNABLE_RESOURCES = (STOCK_ACCOUNTS, PENSION_ACCOUNTS, MISC_ASSETS)


class OwnershipRepository:
    """Repository for a resource family and its owner rows"""

    def __init__(self, db: Session, resource: OwnableResource):
        self.db = db
        self.resource = resource

    def get_resource(self, resource_id: str):
        model = self.resource.model
        return self.db.query(model).filter(model.id == resource_id).first()

    def get_owner_ids(self, resource_id: str) -> list[str]:
        """Profile ids currently owning the resource"""
        owner_model = self.resource.owner_model
        return list(
            self.db.scalars(
                select(owner_model.profile_id)
                .where(self.resource.owner_fk == resource_id)
                .order_by(owner_model.id)
            )
        )

    def get_owner_profiles(self, resource_id: str) -> list[Profile]:
        """Owner profiles of one resource"""
        return self.get_owner_profiles_bulk([resource_id])[resource_id]

    def get_owner_profiles_bulk(self, resource_ids: list[str]) -> dict[str, list[Profile]]:
        """Owner profiles for many resources at once"""
        result: dict[str, list[Profile]] = {rid: [] for rid in resource_ids}
        if not resource_ids:
            return result
        owner_model = self.resource.owner_model
        rows = self.db.execute(
            select(self.resource.owner_fk, Profile)
            .join(Profile, Profile.id == owner_model.profile_id)
            .where(self.resource.owner_fk.in_(resource_ids))
            .order_by(owner_model.id)
        )
        for resource_id, profile in rows:
            result[resource_id].append(profile)
        return result

    def get_visible(self, profile_ids: frozenset[str], user_id: str) -> list:
        """
        Resources owned by any of profile_ids, plus ownerless resources
        created by user_id.
        """
        model = self.resource.model
        owner_model = self.resource.owner_model
        owned = select(self.resource.owner_fk).where(owner_model.profile_id.in_(profile_ids))
        any_owner = select(self.resource.owner_fk)
        return (
            self.db.query(model)
            .filter(
                or_(
                    model.id.in_(owned),
                    and_(model.user_id == user_id, model.id.not_in(any_owner)),
                )
            )
            .order_by(model.created_at, model.id)
            .all()
        )

    def get_unowned_by_user(self, user_id: str) -> list:
        """Resources created by user_id that have no owner rows yet"""
        model = self.resource.model
        any_owner = select(self.resource.owner_fk)
        return (
            self.db.query(model)
            .filter(model.user_id == user_id, model.id.not_in(any_owner))
            .all()
        )

    def add_owners_no_commit(self, resource_id: str, profile_ids: list[str]) -> None:
        """Bulk insert owner rows; caller commits"""
        if not profile_ids:
            return
        self.db.execute(
            insert(self.resource.owner_model),
            [{self.resource.resource_key: resource_id, "profile_id": pid} for pid in profile_ids],
        )

    def replace_owners_no_commit(self, resource_id: str, profile_ids: list[str]) -> None:
        """
        Delete every owner row of the resource, then insert profile_ids.

        Caller commits, so readers never observe the empty intermediate state.
        """
        self.db.execute(
            delete(self.resource.owner_model).where(self.resource.owner_fk == resource_id)
        )
        self.add_owners_no_commit(resource_id, profile_ids)

    def create_no_commit(self, obj):
        self.db.add(obj)
        self.db.flush()
        return obj

    def update(self, obj):
        self.db.commit()
        self.db.refresh(obj)
        return obj

    def delete(self, obj) -> None:
        """Delete resource (owner rows and children cascade)"""
        self.db.delete(obj)
        self.db.commit()
