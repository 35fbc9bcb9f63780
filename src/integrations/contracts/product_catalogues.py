"""
Product catalogue contract: category labels and the catalogue filter.

The filter derives a view of the catalogue from a free-text query and a
category selector. It never mutates the list it receives.
"""

from dataclasses import dataclass
from typing import Dict, List, Sequence, Union

from .interfaces import Product, ProductCategory

CATEGORY_ALL = "all"

# Display order used by the admin panel selector.
CATEGORY_LABELS: Dict[str, str] = {
    CATEGORY_ALL: "Todas as Categorias",
    ProductCategory.ACAI.value: "Açaí",
    ProductCategory.COMBO.value: "Combos",
    ProductCategory.MILKSHAKE.value: "Milkshakes",
    ProductCategory.VITAMINA.value: "Vitaminas",
    ProductCategory.SORVETES.value: "Sorvetes",
    ProductCategory.BEBIDAS.value: "Bebidas",
    ProductCategory.COMPLEMENTOS.value: "Complementos",
    ProductCategory.SOBREMESAS.value: "Sobremesas",
    ProductCategory.OUTROS.value: "Outros",
}


# ---------------------------------------------------------------------------
# Filter model
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class CatalogFilter:
    """Free-text query plus category selector ("all" disables the category predicate)."""
    text: str = ""
    category: Union[str, ProductCategory] = CATEGORY_ALL

    @property
    def query(self) -> str:
        return self.text.lower()

    @property
    def category_id(self) -> str:
        if isinstance(self.category, ProductCategory):
            return self.category.value
        return self.category

    @property
    def is_filtering(self) -> bool:
        """True when any predicate narrows the catalogue."""
        return bool(self.query) or self.category_id != CATEGORY_ALL


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def category_label(category: Union[str, ProductCategory]) -> str:
    key = category.value if isinstance(category, ProductCategory) else category
    return CATEGORY_LABELS.get(key, key)


def filter_products(products: Sequence[Product], f: CatalogFilter) -> List[Product]:
    """Apply a CatalogFilter to a list of products and return matching ones."""
    result = list(products)

    query = f.query
    if query:
        result = [
            p for p in result
            if query in p.name.lower() or query in (p.description or "").lower()
        ]
    if f.category_id != CATEGORY_ALL:
        result = [p for p in result if p.category.value == f.category_id]

    return result
