from dataclasses import fields, is_dataclass
from datetime import datetime
from typing import Any

from webgen.db.store import StoredBundle


PRIMITIVE_TYPES = (str, int, float, bool, type(None))


def serialize(obj: Any):
    """
    Serialize stored results into JSON-compatible structures.
    Deterministic. Tolerant to primitives.
    """

    if isinstance(obj, PRIMITIVE_TYPES):
        return obj

    if isinstance(obj, datetime):
        return obj.isoformat()

    if is_dataclass(obj):
        return {f.name: serialize(getattr(obj, f.name)) for f in fields(obj)}

    return str(obj)


def serialize_stored(record: StoredBundle) -> dict:
    return serialize(record)
