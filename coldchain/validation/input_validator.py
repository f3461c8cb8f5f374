"""
Input validation for engine requests.

Converts raw records (model instances, mappings or DataFrame rows) into
validated models and collects every problem as a machine-readable
ValidationIssue, so the engine can reject a request with a single
InvalidInput instead of raising.

Architecture:
    Dashboard records → validate_* (VALIDATION) → Engine computations
"""

import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional, Type, TypeVar, Union

import pandas as pd
from pydantic import BaseModel, ValidationError

from coldchain.models import (
    DAIRY_PRODUCTS,
    VEHICLE_TYPES,
    InvalidInput,
    Node,
    OptimizationConstraints,
    ProductProfile,
    ValidationIssue,
    VehicleProfile,
)

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

#: Columns a node DataFrame must have
REQUIRED_NODE_COLUMNS = {"id", "name", "tier", "latitude", "longitude"}

#: Alternative column names accepted in node DataFrames
NODE_COLUMN_ALIASES = {
    "type": "tier",
    "lat": "latitude",
    "lng": "longitude",
    "lon": "longitude",
    "daily_production_liters": "production_rate",
    "storage_capacity_liters": "capacity",
    "visible": "is_visible",
}


def _issue_code(field: str, error: Dict[str, Any]) -> str:
    """Stable code for one pydantic error."""
    if error["type"] == "value_error":
        if field == "tier":
            return "unknown_tier"
        if field == "id":
            return "blank_id"
        if field in ("production_rate", "demand_rate"):
            return f"misplaced_{field}"
        if field == "min_temp_c":
            return "inconsistent_temperature_band"
        if field == "ambient_spoilage_rate":
            return "inconsistent_spoilage_rates"
    return error["type"]


def _error_field(error: Dict[str, Any]) -> str:
    """Dotted field path, recovered from the message for model-level errors."""
    if error["loc"]:
        return ".".join(str(part) for part in error["loc"])
    message = error.get("msg", "")
    for field in ("production_rate", "demand_rate", "min_temp_c", "ambient_spoilage_rate"):
        if field in message:
            return field
    return ""


def issues_from_error(
    error: ValidationError,
    record: Optional[Union[int, str]] = None,
    data: Optional[Mapping[str, Any]] = None
) -> List[ValidationIssue]:
    """
    Convert a pydantic ValidationError into ValidationIssues.

    Args:
        error: Error raised while building a model
        record: Index or ID of the record being validated
        data: Raw record, used to report values for model-level errors

    Returns:
        One issue per pydantic error
    """
    issues = []
    for detail in error.errors():
        field = _error_field(detail)
        value = detail.get("input")
        if not detail["loc"] and data is not None and field in data:
            value = data[field]
        issues.append(ValidationIssue(
            record=record,
            field=field,
            code=_issue_code(field, detail),
            value=value,
        ))
    return issues


def _build(
    model: Type[ModelT],
    data: Union[ModelT, Mapping[str, Any]],
    record: Optional[Union[int, str]] = None
) -> Union[ModelT, List[ValidationIssue]]:
    if isinstance(data, model):
        return data
    if not isinstance(data, Mapping):
        return [ValidationIssue(record=record, code="invalid_record", value=repr(data))]
    try:
        return model.model_validate(dict(data))
    except ValidationError as e:
        return issues_from_error(e, record=record, data=data)


def validate_nodes(records: Iterable[Union[Node, Mapping[str, Any]]]) -> Union[List[Node], InvalidInput]:
    """
    Validate a node collection.

    Checks every record individually and then the collection as a whole
    (IDs must be unique, hidden nodes included).

    Args:
        records: Node models or mappings in input order

    Returns:
        Validated nodes in input order, or InvalidInput listing every issue
    """
    nodes: List[Node] = []
    issues: List[ValidationIssue] = []

    for index, record in enumerate(records):
        result = _build(Node, record, record=index)
        if isinstance(result, list):
            issues.extend(result)
        else:
            nodes.append(result)

    seen = set()
    for node in nodes:
        if node.id in seen:
            issues.append(ValidationIssue(record=node.id, field="id", code="duplicate_id", value=node.id))
        seen.add(node.id)

    if issues:
        logger.warning(f"Rejected node collection: {len(issues)} issues")
        return InvalidInput(issues=issues)
    return nodes


def validate_product(product: Union[ProductProfile, Mapping[str, Any], str]) -> Union[ProductProfile, InvalidInput]:
    """
    Validate a product profile.

    Args:
        product: ProductProfile, mapping, or ID from DAIRY_PRODUCTS

    Returns:
        ProductProfile or InvalidInput
    """
    if isinstance(product, str):
        if product in DAIRY_PRODUCTS:
            return DAIRY_PRODUCTS[product]
        issues = [ValidationIssue(field="product", code="unknown_product", value=product)]
    else:
        result = _build(ProductProfile, product, record="product")
        if not isinstance(result, list):
            return result
        issues = result

    logger.warning(f"Rejected product: {[issue.code for issue in issues]}")
    return InvalidInput(issues=issues)


def validate_vehicle(vehicle: Union[VehicleProfile, Mapping[str, Any], str]) -> Union[VehicleProfile, InvalidInput]:
    """
    Validate a vehicle profile.

    Args:
        vehicle: VehicleProfile, mapping, or ID from VEHICLE_TYPES

    Returns:
        VehicleProfile or InvalidInput
    """
    if isinstance(vehicle, str):
        if vehicle in VEHICLE_TYPES:
            return VEHICLE_TYPES[vehicle]
        issues = [ValidationIssue(field="vehicle", code="unknown_vehicle", value=vehicle)]
    else:
        result = _build(VehicleProfile, vehicle, record="vehicle")
        if not isinstance(result, list):
            return result
        issues = result

    logger.warning(f"Rejected vehicle: {[issue.code for issue in issues]}")
    return InvalidInput(issues=issues)


def validate_constraints(
    constraints: Union[OptimizationConstraints, Mapping[str, Any]]
) -> Union[OptimizationConstraints, InvalidInput]:
    """
    Validate optimization constraints.

    Args:
        constraints: OptimizationConstraints or mapping (ambient temperature required)

    Returns:
        OptimizationConstraints or InvalidInput
    """
    result = _build(OptimizationConstraints, constraints, record="constraints")
    if isinstance(result, list):
        logger.warning(f"Rejected constraints: {[issue.code for issue in result]}")
        return InvalidInput(issues=result)
    return result


def nodes_from_dataframe(df: pd.DataFrame) -> Union[List[Node], InvalidInput]:
    """
    Validate nodes from a DataFrame (e.g. a CSV import).

    Column names are matched case-insensitively and common aliases are
    accepted (lat/lng, type, daily_production_liters, ...). Empty cells
    fall back to the field defaults.

    Args:
        df: One row per node

    Returns:
        Validated nodes in row order, or InvalidInput
    """
    renamed = {}
    for column in df.columns:
        key = str(column).strip().lower()
        renamed[column] = NODE_COLUMN_ALIASES.get(key, key)
    df = df.rename(columns=renamed)

    missing = REQUIRED_NODE_COLUMNS - set(df.columns)
    if missing:
        logger.warning(f"Node table is missing columns: {sorted(missing)}")
        return InvalidInput(issues=[
            ValidationIssue(field=column, code="missing_column") for column in sorted(missing)
        ])

    records = []
    for _, row in df.iterrows():
        record = {}
        for column, value in row.items():
            if pd.isna(value):
                continue
            if hasattr(value, "item"):
                value = value.item()
            if column == "id":
                value = str(value)
            record[column] = value
        records.append(record)

    return validate_nodes(records)
