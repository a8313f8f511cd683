"""Decoders for simple_dex objects returned by ``iota_getObject``.

The node returns Move struct fields as loosely typed JSON: u64 values are
strings, ``Balance<T>`` values are nested as ``{"fields": {"value": ...}}``
and the coin pair only appears in the object's type tag. These models pin
that layout down and fail with PoolDecodeError on anything missing or
malformed. Nothing defaults to zero; counters the object does not carry
are None.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal

from pydantic import BaseModel, BeforeValidator, Field, ValidationError

from swapcore.constants import (
    DEFAULT_FEE_DENOMINATOR,
    DEFAULT_FEE_NUMERATOR,
    DEX_MODULE,
    LP_TOKEN_STRUCT,
    POOL_STRUCT,
)
from swapcore.ledger.errors import PoolDecodeError
from swapcore.models.pool import Pool
from swapcore.models.types import normalize_coin_type, normalize_object_id, validate_u64


def _ledger_amount(value: Any) -> int:
    """Accept a u64 as int, decimal string, or a Balance wrapper."""
    if isinstance(value, dict):
        fields = value.get("fields")
        if not isinstance(fields, dict) or "value" not in fields:
            raise ValueError(f"Balance object without fields.value: {value}")
        value = fields["value"]
    return int(validate_u64(value))


LedgerAmount = Annotated[int, BeforeValidator(_ledger_amount)]


class PoolFields(BaseModel):
    """Fields of ``simple_dex::Pool<A, B>``."""

    reserve_a: LedgerAmount
    reserve_b: LedgerAmount
    lp_supply: LedgerAmount
    fee_numerator: LedgerAmount = DEFAULT_FEE_NUMERATOR
    fee_denominator: LedgerAmount = DEFAULT_FEE_DENOMINATOR
    # None when the object does not report the counter
    fees_a: LedgerAmount | None = None
    fees_b: LedgerAmount | None = None
    total_volume_a: LedgerAmount | None = None
    total_volume_b: LedgerAmount | None = None


class LPTokenFields(BaseModel):
    """Fields of ``simple_dex::LPToken<A, B>``."""

    amount: LedgerAmount


class PoolContent(BaseModel):
    data_type: Literal["moveObject"] = Field(alias="dataType")
    type: str
    fields: PoolFields

    model_config = {"populate_by_name": True}


class LPTokenContent(BaseModel):
    data_type: Literal["moveObject"] = Field(alias="dataType")
    type: str
    fields: LPTokenFields

    model_config = {"populate_by_name": True}


class PoolObject(BaseModel):
    """The ``data`` member of a getObject response for a pool."""

    object_id: str = Field(alias="objectId")
    content: PoolContent

    model_config = {"populate_by_name": True}


class LPTokenObject(BaseModel):
    object_id: str = Field(alias="objectId")
    content: LPTokenContent

    model_config = {"populate_by_name": True}


def split_type_tag(type_tag: str) -> tuple[str, list[str]]:
    """Split ``base<arg1, arg2>`` into the base and its top-level type arguments.

    Nested generics stay intact: ``P::m::S<A, B<C, D>>`` gives
    ``("P::m::S", ["A", "B<C, D>"])``.

    Raises:
        ValueError: If the angle brackets are unbalanced
    """
    tag = type_tag.strip()
    start = tag.find("<")
    if start == -1:
        return tag, []
    if not tag.endswith(">"):
        raise ValueError(f"Unbalanced type tag: {type_tag}")

    args: list[str] = []
    depth = 0
    current: list[str] = []
    for char in tag[start + 1 : -1]:
        if char == "<":
            depth += 1
        elif char == ">":
            depth -= 1
            if depth < 0:
                raise ValueError(f"Unbalanced type tag: {type_tag}")
        if char == "," and depth == 0:
            args.append("".join(current).strip())
            current = []
        else:
            current.append(char)
    if depth != 0:
        raise ValueError(f"Unbalanced type tag: {type_tag}")
    args.append("".join(current).strip())
    return tag[:start], args


def parse_pair_type(type_tag: str, struct: str) -> tuple[str, str, str]:
    """Parse ``<package>::simple_dex::<struct><A, B>``.

    Returns:
        (package_id, coin_type_a, coin_type_b), normalized

    Raises:
        ValueError: If the tag is not the expected struct with two coin arguments
    """
    base, args = split_type_tag(type_tag)
    parts = base.split("::")
    if len(parts) != 3 or parts[1] != DEX_MODULE or parts[2] != struct:
        raise ValueError(f"Not a {DEX_MODULE}::{struct} type: {type_tag}")
    if len(args) != 2:
        raise ValueError(f"Expected two coin type arguments in {type_tag}")
    return (
        normalize_object_id(parts[0]),
        normalize_coin_type(args[0]),
        normalize_coin_type(args[1]),
    )


def decode_pool(data: dict[str, Any], package_id: str | None = None) -> Pool:
    """Decode the ``data`` member of a pool getObject response.

    Args:
        data: Object data with ``objectId`` and ``content``
        package_id: If given, the pool type must belong to this package

    Raises:
        PoolDecodeError: If the object does not have the simple_dex pool layout
    """
    try:
        obj = PoolObject.model_validate(data)
        pkg, coin_a, coin_b = parse_pair_type(obj.content.type, POOL_STRUCT)
        if package_id is not None and pkg != normalize_object_id(package_id):
            raise ValueError(f"Pool belongs to package {pkg}, expected {package_id}")
        fields = obj.content.fields
        return Pool(
            pool_id=normalize_object_id(obj.object_id),
            coin_type_a=coin_a,
            coin_type_b=coin_b,
            reserve_a=fields.reserve_a,
            reserve_b=fields.reserve_b,
            lp_supply=fields.lp_supply,
            fee_numerator=fields.fee_numerator,
            fee_denominator=fields.fee_denominator,
            fees_a=fields.fees_a,
            fees_b=fields.fees_b,
            total_volume_a=fields.total_volume_a,
            total_volume_b=fields.total_volume_b,
        )
    except (ValidationError, ValueError) as err:
        object_id = data.get("objectId") if isinstance(data, dict) else None
        raise PoolDecodeError(f"Cannot decode pool object {object_id}: {err}") from err


def decode_lp_token(data: dict[str, Any]) -> tuple[str, int, str, str]:
    """Decode an LPToken object into (object_id, amount, coin_type_a, coin_type_b).

    Raises:
        PoolDecodeError: If the object does not have the LPToken layout
    """
    try:
        obj = LPTokenObject.model_validate(data)
        _, coin_a, coin_b = parse_pair_type(obj.content.type, LP_TOKEN_STRUCT)
        return normalize_object_id(obj.object_id), obj.content.fields.amount, coin_a, coin_b
    except (ValidationError, ValueError) as err:
        object_id = data.get("objectId") if isinstance(data, dict) else None
        raise PoolDecodeError(f"Cannot decode LP token object {object_id}: {err}") from err
