# /scholar_track/services/platform_helpers/record_query.py

"""
Evaluates the platform's query parameters (`where`, `whereGroups`,
`orderBy`, `pagingInfo`, `fields`) over plain record dictionaries.
Used by the local platform; the hosted platform does this server-side.
"""

from typing import Any, Dict, Iterable, List, Optional, Tuple


class QueryError(ValueError):
    """The query used an operator or shape the platform does not understand."""


def _as_number(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _equals(actual: Any, expected: Any) -> bool:
    if actual == expected:
        return True
    actual_number, expected_number = _as_number(actual), _as_number(expected)
    if actual_number is not None and expected_number is not None:
        return actual_number == expected_number
    return actual is not None and str(actual) == str(expected)


def _compare(actual: Any, expected: Any) -> Optional[int]:
    """Three-way comparison; None when the values cannot be ordered."""
    if actual is None or expected is None:
        return None
    actual_number, expected_number = _as_number(actual), _as_number(expected)
    if actual_number is not None and expected_number is not None:
        left, right = actual_number, expected_number
    else:
        left, right = str(actual), str(expected)
    return (left > right) - (left < right)


def _contains(actual: Any, expected: Any) -> bool:
    if actual is None:
        return False
    return str(expected).lower() in str(actual).lower()


def _condition_parts(condition: Dict[str, Any]) -> Tuple[str, str, List[Any]]:
    # `where` uses capitalised keys, `whereGroups` conditions use camelCase.
    field_name = condition.get("FieldName") or condition.get("fieldName")
    operator = condition.get("Operator") or condition.get("operator")
    values = condition.get("Values", condition.get("values")) or []
    if not field_name or not operator:
        raise QueryError(f"Malformed condition: {condition}")
    if not isinstance(values, list):
        values = [values]
    return field_name, operator, values


def condition_matches(record: Dict[str, Any], condition: Dict[str, Any]) -> bool:
    field_name, operator, values = _condition_parts(condition)
    actual = record.get(field_name)

    if operator == "EqualTo":
        return any(_equals(actual, v) for v in values)
    if operator == "NotEqualTo":
        return not any(_equals(actual, v) for v in values)
    if operator == "Contains":
        return any(_contains(actual, v) for v in values)
    if operator == "DoesNotContain":
        return not any(_contains(actual, v) for v in values)

    comparisons = [_compare(actual, v) for v in values]
    if operator == "GreaterThan":
        return any(c is not None and c > 0 for c in comparisons)
    if operator == "GreaterThanOrEqualTo":
        return any(c is not None and c >= 0 for c in comparisons)
    if operator == "LessThan":
        return any(c is not None and c < 0 for c in comparisons)
    if operator == "LessThanOrEqualTo":
        return any(c is not None and c <= 0 for c in comparisons)

    raise QueryError(f"Unsupported operator: {operator}")


def group_matches(record: Dict[str, Any], group: Dict[str, Any]) -> bool:
    operator = str(group.get("operator") or "AND").upper()
    checks = [condition_matches(record, c) for c in group.get("conditions") or []]
    checks += [group_matches(record, g) for g in group.get("subGroups") or []]
    if not checks:
        return True
    return any(checks) if operator == "OR" else all(checks)


def filter_records(records: Iterable[Dict[str, Any]], params: Dict[str, Any]) -> List[Dict[str, Any]]:
    where = params.get("where") or []
    where_groups = params.get("whereGroups") or []
    return [
        r for r in records
        if all(condition_matches(r, c) for c in where)
        and all(group_matches(r, g) for g in where_groups)
    ]


def _sort_key(value: Any) -> Tuple[int, Any]:
    # Numbers before strings before missing values, so mixed columns never
    # compare an int with a str.
    if value is None or value == "":
        return (2, "")
    number = _as_number(value)
    if number is not None:
        return (0, number)
    return (1, str(value).lower())


def sort_records(records: List[Dict[str, Any]], order_by: Optional[List[Dict[str, Any]]]) -> List[Dict[str, Any]]:
    ordered = list(records)
    # Apply the least significant key first; sorted() is stable.
    for rule in reversed(order_by or []):
        field_name = rule.get("fieldName")
        descending = str(rule.get("sorttype") or "ASC").upper() == "DESC"
        ordered = sorted(ordered, key=lambda r: _sort_key(r.get(field_name)), reverse=descending)
    return ordered


def page_records(records: List[Dict[str, Any]], paging: Optional[Dict[str, Any]]) -> List[Dict[str, Any]]:
    paging = paging or {}
    offset = max(int(paging.get("offset") or 0), 0)
    limit = int(paging.get("limit") or 0)
    return records[offset:offset + limit] if limit > 0 else records[offset:]


def requested_fields(params: Dict[str, Any]) -> Optional[List[str]]:
    fields = params.get("fields")
    if not fields:
        return None
    return [f["field"]["Name"] for f in fields if isinstance(f, dict) and "field" in f]


def project_record(record: Dict[str, Any], field_names: Optional[List[str]]) -> Dict[str, Any]:
    if field_names is None:
        return dict(record)
    projected = {"Id": record.get("Id")}
    for name in field_names:
        if name in record:
            projected[name] = record[name]
    return projected
