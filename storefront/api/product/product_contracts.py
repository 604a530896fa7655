from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from storefront.store.product_models import (
    PatchProductInfo,
    Product,
)


class ProductResponse(BaseModel):
    id: str = Field(alias="_id")
    price: float | None = None

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    @staticmethod
    def from_product(product: Product) -> ProductResponse:
        return ProductResponse.model_validate(product.to_record())


class ProductRequest(BaseModel):
    id: str | None = Field(default=None, alias="_id", min_length=1)
    price: float | None = None

    # display attributes from the content system are kept as extras
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    def as_product(self) -> Product:
        return Product(id=self.id or "", price=self.price, attributes=dict(self.model_extra or {}))


class PatchProductRequest(BaseModel):
    price: float | None = None
    attributes: dict[str, object] | None = None

    model_config = ConfigDict(extra="forbid")

    def as_patch_product_info(self) -> PatchProductInfo:
        return PatchProductInfo(price=self.price, attributes=self.attributes)
