"""Create Material Use Case."""

from dataclasses import dataclass

from matinv.application.dto.converters import material_to_response
from matinv.application.dto.requests import CreateMaterialRequest
from matinv.application.dto.responses import MaterialResponse
from matinv.application.policies import AccessPolicy, Action, get_access_policy
from matinv.config import get_logger, get_settings
from matinv.core.entities.actor import Actor
from matinv.core.entities.material import Material
from matinv.core.exceptions import (
    DuplicateMaterialCodeError,
    SupplierNotFoundError,
    WarehouseNotFoundError,
)
from matinv.core.interfaces.material_store import IMaterialStore
from matinv.core.interfaces.reference_store import ISupplierStore, IWarehouseStore

logger = get_logger(__name__)


@dataclass
class CreateMaterialResult:
    """Result of creating a material."""

    material: Material


class CreateMaterialUseCase:
    """Register a new material with status derived from its opening quantity."""

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
        self, request: CreateMaterialRequest, actor: Actor | None
    ) -> CreateMaterialResult:
        """Execute create material use case."""
        self._policy.require(actor, Action.CREATE_MATERIAL)

        logger.info(
            "create_material_started",
            material_code=request.material_code,
            user_id=actor.user_id,
        )

        if request.supplier_id:
            supplier_store = await self._get_supplier_store()
            if await supplier_store.get_supplier(request.supplier_id) is None:
                raise SupplierNotFoundError(request.supplier_id)

        if request.warehouse_id:
            warehouse_store = await self._get_warehouse_store()
            if await warehouse_store.get_warehouse(request.warehouse_id) is None:
                raise WarehouseNotFoundError(request.warehouse_id)

        store = await self._get_material_store()
        existing = await store.get_by_code(request.material_code)
        if existing is not None:
            raise DuplicateMaterialCodeError(request.material_code, existing.id)

        lead_time_days = (
            request.lead_time_days or get_settings().inventory.default_lead_time_days
        )
        material = Material(
            material_code=request.material_code,
            name=request.name,
            unit=request.unit,
            supplier_id=request.supplier_id,
            warehouse_id=request.warehouse_id,
            current_quantity=request.current_quantity,
            reorder_point=request.reorder_point,
            safety_stock=request.safety_stock,
            avg_daily_usage=request.avg_daily_usage,
            lead_time_days=lead_time_days,
        )
        material = await store.create_material(material)

        return CreateMaterialResult(material=material)

    def to_response(self, result: CreateMaterialResult) -> MaterialResponse:
        """Convert result to API response."""
        return material_to_response(result.material)
