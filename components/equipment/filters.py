"""Compile loosely-typed catalog query parameters into a SQL query."""

import logging
import re
from typing import Any, List, Mapping, Optional

from sqlalchemy import Select, and_, select
from sqlalchemy.sql.elements import ColumnElement

from components.core.errors import ValidationError
from components.equipment.models import Equipment
from components.equipment.schemas import EquipmentFilter

logger = logging.getLogger(__name__)

# Values clients send when they mean "no filter"
CONDITION_SENTINELS = ("All", "undefined")
UNDEFINED = "undefined"

INTEGER_PATTERN = re.compile(r"-?[0-9]+")
# Signed 64-bit range, the widest integer the drivers bind
MIN_BOUND = -(2 ** 63)
MAX_BOUND = 2 ** 63 - 1


def _parse_upper_bound(raw: Any) -> int:
    if isinstance(raw, bool):
        raise ValidationError(f"availablequantity must be an integer, got {raw!r}")
    if isinstance(raw, int):
        value = raw
    else:
        text = str(raw).strip()
        if not INTEGER_PATTERN.fullmatch(text):
            raise ValidationError(f"availablequantity must be an integer, got {raw!r}")
        value = int(text)
    if not MIN_BOUND <= value <= MAX_BOUND:
        raise ValidationError(f"availablequantity is out of range: {raw!r}")
    return value


def sanitize_query_params(params: Optional[Mapping[str, Any]]) -> EquipmentFilter:
    """
    Build a typed filter from raw query parameters.

    The caller's mapping is only read. Sentinel and empty values are dropped:
    - name == "" is ignored
    - condition "All" / "undefined" is ignored
    - availablequantity "undefined" is ignored

    Raises:
        ValidationError: availablequantity is present but not a plain decimal
            integer in the signed 64-bit range
    """
    params = params or {}

    name = params.get("name")
    if name == "":
        name = None

    condition = params.get("condition")
    if condition in CONDITION_SENTINELS or condition == "":
        condition = None

    available = params.get("availablequantity")
    if available == UNDEFINED or available == "":
        available = None
    if available is not None:
        available = _parse_upper_bound(available)

    return EquipmentFilter(name=name, availablequantity=available, condition=condition)


def build_conditions(query_filter: EquipmentFilter) -> List[ColumnElement]:
    """Return one predicate per filter field that is set."""
    conditions = []
    if query_filter.name is not None:
        # icontains wraps the value in % on both sides
        conditions.append(Equipment.name.icontains(query_filter.name, autoescape=True))
    if query_filter.availablequantity is not None:
        conditions.append(Equipment.available_quantity.between(0, query_filter.availablequantity))
    if query_filter.condition is not None:
        conditions.append(Equipment.condition == query_filter.condition)
    return conditions


def compile_equipment_query(params: Optional[Mapping[str, Any]]) -> Select:
    """Sanitize raw parameters and AND the surviving predicates into one SELECT."""
    query_filter = sanitize_query_params(params)
    query = select(Equipment)
    if not query_filter.is_empty:
        query = query.where(and_(*build_conditions(query_filter)))
    logger.debug("Compiled equipment filter %s", query_filter.model_dump(exclude_none=True))
    return query.order_by(Equipment.id)
