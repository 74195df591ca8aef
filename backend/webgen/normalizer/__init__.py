"""
Completion normalization: repair ladder, bundle validation, entry point.
"""

from webgen.normalizer.normalizer import (
    NormalizationResult,
    normalize_completion,
)
from webgen.normalizer.stages import (
    REPAIR_LADDER,
    RepairStage,
    extract_boundaries,
    repair_escaping,
    strip_control_chars,
    strip_fences,
    trim,
)
from webgen.normalizer.validation import (
    BundleCheck,
    validate_bundle,
)

__all__ = [
    "NormalizationResult",
    "normalize_completion",
    "REPAIR_LADDER",
    "RepairStage",
    "extract_boundaries",
    "repair_escaping",
    "strip_control_chars",
    "strip_fences",
    "trim",
    "BundleCheck",
    "validate_bundle",
]
