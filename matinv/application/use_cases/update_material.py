"""Update Material Use Case — metadata and thresholds only."""

from dataclasses import dataclass

from matinv.application.dto.converters import material_to_response
from matinv.application.dto.requests import UpdateMaterialRequest
from matinv.application.dto.responses import MaterialResponse
from matinv.application.policies import AccessPolicy, Action, get_access_policy
from matinv.config import get_logger
from matinv.core.entities.actor import Actor
from matinv.core.entities.material import Material
from matinv.core.exceptions import (
    DuplicateMaterialCodeError,
    MaterialNotFoundError,
    SupplierNotFoundError,
    WarehouseNotFoundError,
)
from matinv.core.interfaces.material_store import IMaterialStore
from matinv.core.interfaces.reference_store import ISupplierStore, IWarehouseStore

logger = get_logger(__name__)

# Fields a client may clear by sending null
DETACHABLE_FIELDS = frozenset({"supplier_id", "warehouse_id"})


@dataclass
class UpdateMaterialResult:
    """Result of updating a material."""

    material: Material
    changed_fields: list[str]


class UpdateMaterialUseCase:
    """Apply a partial metadata update and re-derive the stock status."""

    def __init__(
        self,
        material_store: IMaterialStore | None = None,
        supplier_store: ISupplierStore | None = None,
        warehouse_store: IWarehouseStore | None = None,
        policy: AccessPolicy | None = None,
    ):
        self._material_store = material_store
        self._supplier_store = supplier_store
        self._warehouse_store = warehouse_store
        self._policy = policy or get_access_policy()

    async def _get_material_store(self) -> IMaterialStore:
        if self._material_store is None:
            from matinv.infrastructure.storage.sqlite import get_material_store

            self._material_store = await get_material_store()
        return self._material_store

    async def _get_supplier_store(self) -> ISupplierStore:
        if self._supplier_store is None:
            from matinv.infrastructure.storage.sqlite import get_supplier_store

            self._supplier_store = await get_supplier_store()
        return self._supplier_store

    async def _get_warehouse_store(self) -> IWarehouseStore:
        if self._warehouse_store is None:
            from matinv.infrastructure.storage.sqlite import get_warehouse_store

            self._warehouse_store = await get_warehouse_store()
        return self._warehouse_store

    async def execute(
        self,
        material_id: str,
        request: UpdateMaterialRequest,
        actor: Actor | None,
    ) -> UpdateMaterialResult:
        """Execute update material use case."""
        self._policy.require(actor, Action.UPDATE_MATERIAL)

        store = await self._get_material_store()
        material = await store.get_material(material_id)
        if material is None:
            raise MaterialNotFoundError(material_id)

        # Only fields the client sent; an explicit null detaches supplier/warehouse
        updates = request.model_dump(exclude_unset=True)

        supplier_id = updates.get("supplier_id")
        if supplier_id:
            supplier_store = await self._get_supplier_store()
            if await supplier_store.get_supplier(supplier_id) is None:
                raise SupplierNotFoundError(supplier_id)

        warehouse_id = updates.get("warehouse_id")
        if warehouse_id:
            warehouse_store = await self._get_warehouse_store()
            if await warehouse_store.get_warehouse(warehouse_id) is None:
                raise WarehouseNotFoundError(warehouse_id)

        new_code = updates.get("material_code")
        if new_code and new_code != material.material_code:
            existing = await store.get_by_code(new_code)
            if existing is not None and existing.id != material.id:
                raise DuplicateMaterialCodeError(new_code, existing.id)

        updates = {
            field: value
            for field, value in updates.items()
            if value is not None or field in DETACHABLE_FIELDS
        }

        updated = Material.model_validate({**material.model_dump(), **updates})
        updated = await store.update_material(updated)

        logger.info(
            "material_metadata_updated",
            material_id=material_id,
            user_id=actor.user_id,
            fields=sorted(updates),
            status=updated.status.value,
        )

        return UpdateMaterialResult(material=updated, changed_fields=sorted(updates))

    def to_response(self, result: UpdateMaterialResult) -> MaterialResponse:
        """Convert result to API response."""
        return material_to_response(result.material)
