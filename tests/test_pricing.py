"""
Tests for the pricing engine's order of operations.
"""
import pytest
from pydantic import ValidationError

from sweet_moment.config import MAX_ITEM_QUANTITY
from sweet_moment.pricing import PricingEngine
from sweet_moment.schemas.catalog import Product
from sweet_moment.schemas.quote import Selection
from sweet_moment.services.currency import NormalizationPolicy
from sweet_moment.services.diagnostics import CATALOG_DEFAULT_USED
from tests.helpers import make_product


BOX6 = [{"id": "box6", "label": "Box", "quantity": 6, "price": 0}]


def _mixed(**fields) -> Selection:
    return Selection(type="mixed", **fields)


class TestSingleType:
    def test_base_only(self, engine, product):
        quote = engine.quote(product, Selection(size="small", type="milk", shape="none"))
        assert quote.base_price == 15.0
        assert quote.unit_price == 15.0
        assert quote.on_sale is False

    def test_all_extras_are_added(self, engine, product):
        quote = engine.quote(product, Selection(size="large", type="dark", shape="round"))
        assert quote.size_extra == 2.0
        assert quote.type_extra == 3.0
        assert quote.shape_extra == 1.5
        assert quote.unit_price == 21.5
        assert quote.total_pieces == 12

    def test_unknown_ids_fall_back_to_first_options(self, engine, product):
        quote = engine.quote(product, Selection(size="huge", type="ruby", shape="star"))
        assert (quote.size, quote.type, quote.shape) == ("small", "milk", "none")

    def test_legacy_standard_shape(self, engine, product):
        quote = engine.quote(product, Selection(shape="standard"))
        assert quote.shape == "none"


class TestMixedType:
    def test_even_mix_of_six_piece_box(self, engine):
        product = make_product(sizes=BOX6)
        quote = engine.quote(product, _mixed(ratio=50, typeId1="milk", typeId2="dark"))
        assert quote.type == "mixed"
        assert quote.type_extra == 1.5
        assert quote.unit_price == 16.5
        assert quote.blend.type1_pieces == 3
        assert quote.blend.type2_pieces == 3
        assert quote.blend.label == "3 Milk Chocolate + 3 Dark Chocolate"

    def test_type_pair_defaults_to_first_two_types(self, engine):
        quote = engine.quote(make_product(sizes=BOX6), _mixed())
        assert (quote.blend.type_id1, quote.blend.type_id2) == ("milk", "dark")

    def test_same_type_twice_uses_the_other_type(self, engine):
        quote = engine.quote(make_product(sizes=BOX6), _mixed(typeId1="dark", typeId2="dark"))
        assert (quote.blend.type_id1, quote.blend.type_id2) == ("dark", "milk")

    def test_mixed_fee_is_added(self, engine):
        product = make_product(sizes=BOX6, mixedTypeFee=200)
        quote = engine.quote(product, _mixed(ratio=50))
        assert quote.mixed_fee == 2.0
        assert quote.unit_price == 18.5

    def test_mixed_fee_applies_at_ratio_endpoints(self, engine):
        product = make_product(sizes=BOX6, mixedTypeFee=200)
        quote = engine.quote(product, _mixed(ratio=100))
        assert quote.blend.type2_pieces == 0
        assert quote.unit_price == 17.0

    def test_slider_disabled_forces_even_split(self, engine):
        product = make_product(sizes=BOX6, enableMixedSlider=False)
        quote = engine.quote(product, _mixed(ratio=100))
        assert quote.blend.ratio == 50
        assert quote.unit_price == 16.5

    def test_mixed_not_offered_uses_first_type(self, engine):
        product = make_product(sizes=BOX6, mixedTypeEnabled=False)
        quote = engine.quote(product, _mixed(ratio=0))
        assert quote.type == "milk"
        assert quote.blend is None
        assert quote.unit_price == 15.0

    def test_larger_box_splits_by_its_own_piece_count(self, engine, product):
        quote = engine.quote(product, Selection(size="large", type="mixed", ratio=25))
        assert quote.blend.total_pieces == 12
        assert (quote.blend.type1_pieces, quote.blend.type2_pieces) == (3, 9)
        # 15 + 2 + (3 * 9 / 12 = 2.25)
        assert quote.unit_price == 19.25


class TestSale:
    def test_sale_price_replaces_mixed_price(self, engine):
        product = make_product(sizes=BOX6, saleActive=True, salePrice=1200)
        quote = engine.quote(product, _mixed(ratio=50))
        assert quote.unit_price == 12.0
        assert quote.regular_price == 16.5
        assert quote.savings == 4.5
        assert quote.on_sale is True

    @pytest.mark.parametrize("size", ["small", "large"])
    @pytest.mark.parametrize("type_id", ["milk", "dark", "mixed"])
    @pytest.mark.parametrize("shape", ["none", "round"])
    def test_sale_price_ignores_every_option(self, engine, size, type_id, shape):
        product = make_product(saleActive=True, salePrice=1200, mixedTypeFee=200)
        quote = engine.quote(product, Selection(size=size, type=type_id, shape=shape))
        assert quote.unit_price == 12.0


class TestDefaults:
    def test_product_without_catalogs(self, engine, recorder):
        product = Product.model_validate({"id": 9, "name": "Classic Box", "basePrice": 2000})
        quote = engine.quote(product)
        assert (quote.size, quote.type, quote.shape) == ("none", "milk", "none")
        assert quote.total_pieces == 6
        assert quote.unit_price == 20.0
        assert recorder.codes().count(CATALOG_DEFAULT_USED) == 3

    def test_garbage_base_price_is_zero(self, engine):
        quote = engine.quote(make_product(basePrice="free"))
        assert quote.base_price == 0.0
        assert quote.unit_price == 0.0

    def test_negative_total_is_clamped(self, engine):
        product = make_product(basePrice=5, shapes=[{"id": "none", "price": -50}])
        assert engine.quote(product).unit_price == 0.0

    def test_custom_policy(self, recorder):
        policy = NormalizationPolicy(base_cents_threshold=10000)
        engine = PricingEngine(policy=policy, recorder=recorder)
        assert engine.quote(make_product(basePrice=1500)).base_price == 1500.0


class TestQuantity:
    def test_quantity_is_not_part_of_unit_price(self, engine, product):
        one = engine.quote(product, Selection(type="dark", quantity=1))
        three = engine.quote(product, Selection(type="dark", quantity=3))
        assert one.unit_price == three.unit_price == 18.0
        assert three.line_total == 54.0

    def test_evaluation_exposes_resolved_options(self, engine, product):
        evaluation = engine.evaluate(product, Selection(type="dark", shape="round"))
        assert evaluation.type.label == "Dark Chocolate"
        assert evaluation.shape.label == "Round"
        assert evaluation.type_label == "Dark Chocolate"
        assert evaluation.is_mixed is False


class TestMalformedCatalogData:
    """Bad product data degrades instead of failing the quote."""

    def test_size_extra_in_cents_above_option_range(self, engine):
        product = make_product(sizes=[{"id": "big", "label": "Big", "quantity": 24, "price": 600}])
        quote = engine.quote(product, Selection(type="milk"))
        assert quote.size_extra == 6.0
        assert quote.unit_price == 21.0

    def test_mixed_with_duplicate_type_ids_uses_single_type(self, engine):
        product = make_product(types=[{"id": "milk", "label": "Milk"}, {"id": "milk", "label": "Milk again"}])
        quote = engine.quote(product, Selection(type="mixed"))
        assert quote.type == "milk"
        assert quote.blend is None

    def test_negative_sale_price_keeps_regular_price(self, engine):
        sale_product = make_product(saleActive=True, salePrice=-5)
        quote = engine.quote(sale_product, Selection(type="milk"))
        assert quote.unit_price == 15.0
        assert quote.on_sale is False

    def test_quantity_above_cap_rejected(self):
        with pytest.raises(ValidationError):
            Selection(quantity=MAX_ITEM_QUANTITY + 1)
