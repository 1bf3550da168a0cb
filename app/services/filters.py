from typing import List

from sqlalchemy.sql.elements import ColumnElement

from app.models import Property
from app.schemas.search import PropertyFilters


def build_property_conditions(filters: PropertyFilters) -> List[ColumnElement]:
    """
    Translate search filters into WHERE conditions over ``properties``.

    Every supplied field adds one condition and the caller ANDs them together;
    absent fields leave the query unconstrained. Price bounds are inclusive and
    independent of each other. Input is assumed to be validated already.
    """
    conditions: List[ColumnElement] = []

    if filters.district is not None:
        conditions.append(Property.district == filters.district.value)
    if filters.property_type is not None:
        conditions.append(Property.property_type == filters.property_type.value)
    if filters.category is not None:
        conditions.append(Property.category == filters.category.value)
    if filters.min_price is not None:
        conditions.append(Property.price >= filters.min_price)
    if filters.max_price is not None:
        conditions.append(Property.price <= filters.max_price)
    if filters.bedrooms is not None:
        conditions.append(Property.bedrooms == filters.bedrooms)

    return conditions
