from dataclasses import dataclass
from typing import Any, List, Optional

from webgen.ir.bundle import BUNDLE_FIELDS, CodeBundle
from webgen.ir.errors import NormalizationErrorKind


@dataclass
class BundleCheck:
    """Outcome of checking one parsed value against the bundle contract."""
    bundle: Optional[CodeBundle] = None
    kind: Optional[NormalizationErrorKind] = None
    message: str = ""

    @property
    def is_valid(self) -> bool:
        return self.bundle is not None

    @classmethod
    def success(cls, bundle: CodeBundle):
        return cls(bundle=bundle)

    @classmethod
    def failure(cls, kind: NormalizationErrorKind, message: str):
        return cls(kind=kind, message=message)


def missing_fields(value: Any) -> List[str]:
    if not isinstance(value, dict):
        return list(BUNDLE_FIELDS)
    return [name for name in BUNDLE_FIELDS if name not in value]


def _type_name(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, list):
        return "array"
    if isinstance(value, dict):
        return "object"
    return type(value).__name__


def validate_bundle(value: Any) -> BundleCheck:
    """
    Check a parsed value against the three-field contract.

    - value must be a JSON object
    - frontend, backend and database must be present (MISSING_FIELD)
    - each of them must be a string, possibly empty (INVALID_FIELD_TYPE)

    Extra keys are ignored.
    """
    if not isinstance(value, dict):
        return BundleCheck.failure(
            NormalizationErrorKind.UNPARSABLE_RESPONSE,
            f"expected a JSON object, got {_type_name(value)}",
        )

    missing = missing_fields(value)
    if missing:
        return BundleCheck.failure(
            NormalizationErrorKind.MISSING_FIELD,
            "missing required field(s): " + ", ".join(missing),
        )

    wrong = [
        f"{name} must be a string, got {_type_name(value[name])}"
        for name in BUNDLE_FIELDS
        if not isinstance(value[name], str)
    ]
    if wrong:
        return BundleCheck.failure(
            NormalizationErrorKind.INVALID_FIELD_TYPE,
            "; ".join(wrong),
        )

    return BundleCheck.success(
        CodeBundle(
            frontend=value["frontend"],
            backend=value["backend"],
            database=value["database"],
        )
    )
