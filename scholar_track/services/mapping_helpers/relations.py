# /scholar_track/services/mapping_helpers/relations.py

"""
Relation normalization. A lookup column such as `course_id_c` arrives either
as a bare id (int or numeric string) or, when the platform resolved the
lookup, as an object like {"Id": 4, "Name": "Algebra I"}. Every mapper reads
relations through `normalize_relation`.
"""

from typing import Any, Mapping, Optional

from ...models.common_model import Relation, ResolvedRelation, UnresolvedRelation
from .coercion import to_int


def parse_relation(value: Any) -> Optional[Relation]:
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, Mapping):
        relation_id = to_int(value.get("Id"), default=0)
        if relation_id <= 0:
            return None
        name = value.get("Name")
        return ResolvedRelation(id=relation_id, name=str(name) if name is not None else None)

    relation_id = to_int(value, default=0)
    if relation_id <= 0:
        return None
    return UnresolvedRelation(id=relation_id)


def normalize_relation(value: Any) -> Optional[int]:
    """Returns the bare id of a relation in any of its wire forms, or None."""
    relation = parse_relation(value)
    return relation.id if relation else None
