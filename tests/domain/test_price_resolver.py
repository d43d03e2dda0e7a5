"""Unit tests for the Price Resolver domain service."""

import pytest

from orderdesk.domain.exceptions import ValidationError
from orderdesk.domain.model.product import Product
from orderdesk.domain.model.value_objects import Money
from orderdesk.domain.service.price_resolver import PriceResolver
from tests.fakes import FakeProductRepository


def _resolver() -> tuple[PriceResolver, FakeProductRepository]:
    repo = FakeProductRepository([Product(id=1, name="Espresso", price=Money(25000))])
    return PriceResolver(repo), repo


class TestResolveProductPrice:

    def test_uses_current_catalog_price(self):
        resolver, repo = _resolver()
        assert resolver.resolve_product_price(1) == Money(25000)
        assert repo.lookups == [1]

    def test_explicit_override_wins_without_lookup(self):
        resolver, repo = _resolver()
        assert resolver.resolve_product_price(1, override=18000) == Money(18000)
        assert repo.lookups == []

    def test_zero_override_is_kept(self):
        resolver, _ = _resolver()
        assert resolver.resolve_product_price(1, override=0) == Money(0)

    def test_missing_product_resolves_to_none(self):
        resolver, _ = _resolver()
        assert resolver.resolve_product_price(999) is None

    def test_negative_override_rejected(self):
        resolver, _ = _resolver()
        with pytest.raises(ValidationError):
            resolver.resolve_product_price(1, override=-5)


class TestResolveCustomPrice:

    def test_custom_price_is_used_verbatim(self):
        assert PriceResolver.resolve_custom_price(10000) == Money(10000)

    def test_zero_custom_price_allowed(self):
        assert PriceResolver.resolve_custom_price(0) == Money(0)
