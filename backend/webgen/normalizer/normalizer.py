"""
Response Normalizer - turns a raw model completion into a CodeBundle.

The model is told to answer with bare JSON but often wraps it in markdown
fences, adds commentary, or leaves string content unescaped. Instead of one
json.loads call, the completion walks a fixed ladder of repair stages and a
parse is attempted after each stage that changed the text. The first
attempt that yields a valid three-field object wins.

Never raises. The caller always gets a NormalizationResult.
"""

import json
import logging
from dataclasses import dataclass
from typing import Any, Optional

from webgen.ir.bundle import CodeBundle
from webgen.ir.errors import NormalizationError, NormalizationErrorKind
from webgen.normalizer.stages import REPAIR_LADDER, trim
from webgen.normalizer.validation import validate_bundle


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NormalizationResult:
    bundle: Optional[CodeBundle] = None
    error: Optional[NormalizationError] = None
    stage: Optional[str] = None  # stage at which the outcome was decided

    @property
    def is_valid(self) -> bool:
        return self.bundle is not None

    @classmethod
    def success(cls, bundle: CodeBundle, stage: str):
        return cls(bundle=bundle, stage=stage)

    @classmethod
    def failure(cls, error: NormalizationError):
        return cls(error=error, stage=error.stage)


def normalize_completion(completion: Any) -> NormalizationResult:
    if not isinstance(completion, str) or not trim(completion):
        error = NormalizationError(
            kind=NormalizationErrorKind.EMPTY_RESPONSE,
            text=completion if isinstance(completion, str) else "",
            diagnostic="completion is empty",
        )
        logger.warning("[Normalizer] empty completion")
        return NormalizationResult.failure(error)

    working = completion
    diagnostic = "no parse attempted"
    missing: Optional[NormalizationError] = None
    previous = None

    for stage in REPAIR_LADDER:
        working = stage.apply(working)
        if working == previous:
            # unchanged text parses the same way; outcome already recorded
            continue
        previous = working

        try:
            value = json.loads(working)
        except (ValueError, RecursionError) as e:
            diagnostic = str(e)
            logger.debug("[Normalizer] %s: parse failed: %s", stage.name, diagnostic)
            continue

        check = validate_bundle(value)
        if check.is_valid:
            logger.info("[Normalizer] bundle recovered at stage %s", stage.name)
            return NormalizationResult.success(check.bundle, stage.name)

        diagnostic = check.message
        logger.debug("[Normalizer] %s: %s", stage.name, diagnostic)

        if check.kind is NormalizationErrorKind.INVALID_FIELD_TYPE:
            # all fields present: validation is terminal
            return _fail(NormalizationError(
                kind=check.kind,
                text=working,
                diagnostic=diagnostic,
                stage=stage.name,
            ))

        if check.kind is NormalizationErrorKind.MISSING_FIELD:
            missing = NormalizationError(
                kind=check.kind,
                text=working,
                diagnostic=diagnostic,
                stage=stage.name,
            )

    if missing is not None:
        return _fail(missing)

    return _fail(NormalizationError(
        kind=NormalizationErrorKind.UNPARSABLE_RESPONSE,
        text=working,
        diagnostic=diagnostic,
        stage=REPAIR_LADDER[-1].name,
    ))


def _fail(error: NormalizationError) -> NormalizationResult:
    logger.warning(
        "[Normalizer] %s at stage %s: %s",
        error.kind.value,
        error.stage,
        error.diagnostic,
    )
    logger.debug("[Normalizer] offending text: %r", error.text)
    return NormalizationResult.failure(error)
