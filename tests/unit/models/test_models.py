"""Tests for pool snapshots, quotes and type normalization."""

from decimal import Decimal

import pytest
from pydantic import BaseModel, ValidationError

from swapcore.models import U64, Pool, Quote, normalize_coin_type, normalize_object_id
from swapcore.models.types import short_coin
from tests.helpers import IOTA, IOTA_SHORT, USDC, make_pool


class TestNormalization:
    """Short and long address forms compare equal after normalization."""

    def test_object_id_padding(self):
        assert normalize_object_id("0x2") == "0x" + "0" * 63 + "2"
        assert normalize_object_id("0XAB") == "0x" + "0" * 62 + "ab"
        assert normalize_object_id("ab") == "0x" + "0" * 62 + "ab"

    @pytest.mark.parametrize("bad", ["", "0x", "0xzz", "0x" + "1" * 65])
    def test_invalid_object_id(self, bad: str):
        with pytest.raises(ValueError):
            normalize_object_id(bad)

    def test_coin_type(self):
        assert normalize_coin_type(IOTA_SHORT) == IOTA
        assert normalize_coin_type(" 0x2::iota::IOTA ") == IOTA

    def test_coin_type_keeps_case_of_names(self):
        assert normalize_coin_type("0x2::Iota::iota").endswith("::Iota::iota")

    @pytest.mark.parametrize("bad", ["IOTA", "0x2::iota", "0x2::::IOTA", "xyz::iota::IOTA"])
    def test_invalid_coin_type(self, bad: str):
        with pytest.raises(ValueError):
            normalize_coin_type(bad)

    def test_short_coin(self):
        assert short_coin(USDC) == "usdc::USDC"


class TestU64:
    """U64 accepts ints and decimal strings in range."""

    class Model(BaseModel):
        amount: U64

    def test_int_and_string(self):
        assert self.Model(amount=5).amount == "5"
        assert self.Model(amount="18446744073709551615").amount == str(2**64 - 1)

    @pytest.mark.parametrize("bad", [-1, "-1", str(2**64), "1e9", True, 1.5])
    def test_rejects(self, bad: object):
        with pytest.raises(ValidationError):
            self.Model(amount=bad)


class TestPool:
    """Pool snapshot invariants and orientation."""

    def test_orientation(self):
        pool = make_pool(reserve_a=100, reserve_b=300)
        assert pool.is_a_to_b(IOTA) is True
        assert pool.is_a_to_b(USDC) is False
        assert pool.get_reserves(IOTA) == (100, 300)
        assert pool.get_reserves(USDC) == (300, 100)
        assert pool.get_coin_out(USDC) == IOTA

    def test_short_form_orientation(self):
        assert make_pool().is_a_to_b(IOTA_SHORT) is True

    def test_has_coin_and_k(self):
        pool = make_pool(reserve_a=100, reserve_b=300)
        assert pool.has_coin(IOTA_SHORT)
        assert not pool.has_coin("0x5::other::OTHER")
        assert pool.k == 30_000

    def test_empty_pool(self):
        pool = make_pool(reserve_a=0, reserve_b=0, lp_supply=0)
        assert pool.is_empty

    def test_one_empty_side_rejected(self):
        with pytest.raises(ValueError, match="one empty side"):
            make_pool(reserve_a=0, reserve_b=10)

    def test_negative_reserve_rejected(self):
        with pytest.raises(ValueError):
            make_pool(reserve_a=-1)

    def test_invalid_fee_rejected(self):
        with pytest.raises(ValueError, match="Invalid fee"):
            make_pool(fee_numerator=10_000)

    def test_frozen(self):
        pool = make_pool()
        with pytest.raises(AttributeError):
            pool.reserve_a = 1  # type: ignore[misc]

    def test_foreign_coin_raises(self):
        with pytest.raises(ValueError, match="not in pool"):
            make_pool().get_reserves("0x5::other::OTHER")

    def test_pair_key_is_unordered(self):
        forward = make_pool()
        backward = Pool(
            pool_id=forward.pool_id,
            coin_type_a=USDC,
            coin_type_b=IOTA_SHORT,
            reserve_a=1,
            reserve_b=1,
            lp_supply=1,
        )
        assert forward.pair_key == backward.pair_key

    def test_counters_optional(self):
        pool = make_pool()
        assert pool.fees_a is None
        assert pool.total_volume_b is None

    def test_negative_counter_rejected(self):
        with pytest.raises(ValueError, match="fees_a"):
            Pool(
                pool_id="0x1",
                coin_type_a=IOTA,
                coin_type_b=USDC,
                reserve_a=1,
                reserve_b=1,
                lp_supply=1,
                fees_a=-1,
            )


def make_quote(price_impact: Decimal) -> Quote:
    return Quote(
        coin_in=IOTA,
        coin_out=USDC,
        amount_in=10,
        amount_out=9,
        minimum_received=9,
        price_impact=price_impact,
        route=(make_pool(),),
        is_a_to_b=True,
        slippage_bps=50,
    )


class TestQuoteWire:
    """Price impact renders as a fixed-point percentage."""

    @pytest.mark.parametrize(
        ("impact", "expected"),
        [
            (Decimal("5.034053"), "5.034053"),
            (Decimal("1E-7"), "0.000000"),
            (Decimal("0"), "0.000000"),
            (Decimal(1) / Decimal(3), "0.333333"),
            (Decimal("1E+2"), "100.000000"),
        ],
    )
    def test_price_impact_format(self, impact: Decimal, expected: str):
        assert make_quote(impact).to_wire()["priceImpact"] == expected
