"""
Product catalog model and the built-in demo catalog.
"""

import json
from pathlib import Path
from typing import List
from pydantic import BaseModel, ConfigDict, TypeAdapter


class Product(BaseModel):
    """
    A catalog item.

    The id is assigned by the catalog and is used as the Qdrant point id,
    so re-ingesting the same product overwrites its point.
    """

    model_config = ConfigDict(frozen=True)

    id: int
    name: str
    price: float
    description: str

    def payload(self) -> dict:
        """Metadata stored next to the vector."""
        return {
            "name": self.name,
            "price": self.price,
            "description": self.description,
        }


DEFAULT_CATALOG: List[Product] = [
    Product(
        id=1,
        name="Laptop Pro 15",
        price=1200,
        description="Powerful laptop with 16GB RAM and 512GB SSD.",
    ),
    Product(
        id=2,
        name="Smartphone X200",
        price=800,
        description="High-end smartphone with 128GB storage.",
    ),
    Product(
        id=3,
        name="Cuffie Noise Cancelling",
        price=150,
        description="Comfortable headphones with noise cancelling technology.",
    ),
    Product(
        id=4,
        name="Smartwatch FitPlus",
        price=200,
        description="Fitness smartwatch with heart rate monitor.",
    ),
    Product(
        id=5,
        name="Tablet Z10",
        price=400,
        description="10-inch tablet with 64GB storage and stylus support.",
    ),
]

_catalog_adapter = TypeAdapter(List[Product])


def load_catalog(path: Path | None = None) -> List[Product]:
    """
    Load a product catalog.

    Args:
        path: JSON file holding an array of products. When None, the
              built-in DEFAULT_CATALOG is returned.

    Returns:
        List[Product]: Products in file order

    Raises:
        OSError: If the file cannot be read
        pydantic.ValidationError: If an entry is malformed
        ValueError: If two products share an id
    """
    if path is None:
        return list(DEFAULT_CATALOG)

    raw = json.loads(Path(path).read_text(encoding="utf-8"))
    products = _catalog_adapter.validate_python(raw)

    seen = set()
    for product in products:
        if product.id in seen:
            raise ValueError(f"Duplicate product id {product.id} in {path}")
        seen.add(product.id)

    return products
