import copy
from dataclasses import dataclass, field
from typing import Any


@dataclass(slots=True)
class Product:
    id: str
    price: float | None = None
    # display fields (name, slug, image, ...) are carried but never read here
    attributes: dict[str, Any] = field(default_factory=dict)

    def snapshot(self) -> "Product":
        return Product(id=self.id, price=self.price, attributes=copy.deepcopy(self.attributes))

    def to_record(self) -> dict[str, Any]:
        return {**self.attributes, "_id": self.id, "price": self.price}

    @staticmethod
    def from_record(record: dict[str, Any]) -> "Product":
        attributes = {k: v for k, v in record.items() if k not in ("_id", "price")}
        return Product(id=record["_id"], price=record.get("price"), attributes=attributes)


@dataclass(slots=True)
class PatchProductInfo:
    price: float | None = None
    attributes: dict[str, Any] | None = None
