"""
Helper functions for tests.

Provides factories for raw product records, a product client stub that
serves records from memory, and a controllable clock.
"""

from sweet_moment.schemas.catalog import Product


def make_product_data(**overrides) -> dict:
    """Raw product JSON for a mixable box, as the product API returns it."""
    data = {
        "id": 47,
        "name": "Dubai Bar",
        "image": "/img/dubai.png",
        "basePrice": 1500,
        "sizes": [
            {"id": "small", "label": "Small Box (6 pieces)", "quantity": 6, "price": 0},
            {"id": "large", "label": "Large Box (12 pieces)", "quantity": 12, "price": 200},
        ],
        "types": [
            {"id": "milk", "label": "Milk Chocolate", "price": 0},
            {"id": "dark", "label": "Dark Chocolate", "price": 300},
        ],
        "shapes": [
            {"id": "none", "label": "Regular Shape", "price": 0},
            {"id": "round", "label": "Round", "price": 150},
        ],
        "mixedTypeEnabled": True,
        "enableMixedSlider": True,
        "saleActive": False,
    }
    data.update(overrides)
    return data


def make_product(**overrides) -> Product:
    return Product.model_validate(make_product_data(**overrides))


class StubProductClient:
    """Serves product records from a dict instead of the network."""

    def __init__(self, products=None):
        self.products = products or {}

    def fetch_product(self, product_id):
        data = self.products.get(str(product_id))
        return Product.model_validate(data) if data is not None else None


class FakeClock:
    """Monotonic clock that only moves when told to."""

    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now

    def advance(self, ms):
        self.now += ms / 1000
