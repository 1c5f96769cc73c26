from sqlalchemy.orm import Session

from household_hub.models.context import CurrentContext
from household_hub.models.misc_asset import MiscAsset, MiscAssetType
from household_hub.repositories.ownership_repository import MISC_ASSETS
from household_hub.schemas.resource_schemas import MiscAssetCreate, MiscAssetUpdate
from household_hub.services.ownership_service import OwnershipService


def signed_value(asset_type: MiscAssetType, value: float) -> float:
    """Liabilities are stored negative"""
    if asset_type.is_liability and value > 0:
        return -value
    return value


class MiscAssetService(OwnershipService):
    """Bank deposits, child savings, loans and mortgages"""

    def __init__(self, db: Session):
        super().__init__(db, MISC_ASSETS)

    def build(self, data: MiscAssetCreate, context: CurrentContext) -> MiscAsset:
        return MiscAsset(
            type=data.type,
            name=data.name,
            current_value=signed_value(data.type, data.current_value),
            interest_rate=data.interest_rate,
            monthly_payment=data.monthly_payment if data.type.is_liability else None,
            monthly_deposit=(
                data.monthly_deposit if data.type == MiscAssetType.CHILD_SAVINGS else None
            ),
            maturity_date=data.maturity_date,
            user_id=context.user.id,
        )

    def apply_update(self, asset: MiscAsset, data: MiscAssetUpdate) -> None:
        changes = data.model_dump(exclude_unset=True)

        if changes.get("current_value") is not None:
            changes["current_value"] = signed_value(asset.type, changes["current_value"])
        if not asset.type.is_liability:
            changes.pop("monthly_payment", None)
        if asset.type != MiscAssetType.CHILD_SAVINGS:
            changes.pop("monthly_deposit", None)

        self._set_fields(asset, changes)
