from dataclasses import dataclass, field
from typing import Dict, List, Optional

from webgen.ir.bundle import CodeBundle
from webgen.normalizer import NormalizationResult


@dataclass
class PipelineContext:
    # Raw input (authoritative)
    instruction: str

    messages: List[Dict[str, str]] = field(default_factory=list)
    completion: Optional[str] = None
    normalization: Optional[NormalizationResult] = None

    @property
    def bundle(self) -> Optional[CodeBundle]:
        if self.normalization is None:
            return None
        return self.normalization.bundle

    @property
    def succeeded(self) -> bool:
        return self.normalization is not None and self.normalization.is_valid
