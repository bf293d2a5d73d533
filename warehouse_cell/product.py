"""Products stored in the cell and their reservation protocol."""

from __future__ import annotations

import threading
import uuid

import structlog
from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, field_validator

from warehouse_cell.enterprise.core import ProductType, ProductTypePolicy, Zone, is_safe_to_handle, policy_for

logger = structlog.get_logger(__name__)


class Product(BaseModel):
    """A storable item that at most one robot may claim at a time.

    The reservation flag is the only part of a product shared between robots,
    so it is guarded by a lock and only changed through :meth:`reserve` and
    :meth:`release`.
    """

    model_config = ConfigDict(validate_assignment=True)

    id: str = Field(default_factory=lambda: str(uuid.uuid4()), frozen=True)
    type: ProductType = Field(..., frozen=True)
    zone: Zone = Field(..., frozen=True)

    _reserved: bool = PrivateAttr(default=False)
    _lock: threading.Lock = PrivateAttr(default_factory=threading.Lock)

    @field_validator("id")
    @classmethod
    def _blank_id_gets_uuid(cls, value: str) -> str:
        return value if value.strip() else str(uuid.uuid4())

    @property
    def policy(self) -> ProductTypePolicy:
        return policy_for(self.type)

    @property
    def reserved(self) -> bool:
        return self._reserved

    @property
    def requires_special_handling(self) -> bool:
        return self.policy.requires_special_handling

    def reserve(self) -> bool:
        """Claim the product. Returns ``False`` if it is already claimed."""

        with self._lock:
            if self._reserved:
                logger.debug("product.reserve.refused", product_id=self.id)
                return False
            self._reserved = True
            return True

    def release(self) -> None:
        with self._lock:
            self._reserved = False

    def can_be_handled_safely(self, battery_level: int) -> bool:
        """Check whether a robot at ``battery_level`` may manipulate this product.

        Special-handling types must clear their minimum plus a safety margin;
        everything else only needs the type's nominal minimum.
        """

        return is_safe_to_handle(self.policy, battery_level)

    def relocate(self, zone: Zone) -> None:
        """Move the product to ``zone``. Only delivery relocates products."""

        # The field is frozen against plain assignment; this is its only writer.
        self.__dict__["zone"] = Zone(zone)

    def __hash__(self) -> int:
        return hash(self.id)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Product):
            return NotImplemented
        return self.id == other.id

    def __repr__(self) -> str:
        return (
            f"Product(id={self.id!r}, type={self.type.value}, "
            f"zone={self.zone.value}, reserved={self._reserved})"
        )
