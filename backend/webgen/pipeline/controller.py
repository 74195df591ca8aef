import logging

from webgen.inference.base import LLMClient
from webgen.inference.prompt import build_messages
from webgen.normalizer import normalize_completion
from webgen.pipeline.context import PipelineContext


logger = logging.getLogger(__name__)


class PipelineController:
    """
    Prompt -> model call -> normalization, once per submission.

    InvalidInput and TransportError propagate to the caller. Normalization
    failures never raise; they are carried on the returned context.
    No retries: a retry is a new submission.
    """

    def __init__(self, client: LLMClient):
        self.client = client

    def complete(self, instruction: str) -> PipelineContext:
        """Run prompt building and the model call only."""
        context = PipelineContext(instruction=instruction)
        context.messages = build_messages(instruction)
        context.completion = self.client.generate(context.messages)
        logger.info("[Pipeline] completion received (%d chars)", len(context.completion))
        return context

    def run(self, instruction: str) -> PipelineContext:
        context = self.complete(instruction)
        context.normalization = normalize_completion(context.completion)

        if context.succeeded and context.bundle.is_empty:
            logger.warning("[Pipeline] model returned a bundle with all fields empty")

        return context
