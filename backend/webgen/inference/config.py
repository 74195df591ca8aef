from webgen.config import Settings
from .chat_completions_client import ChatCompletionsClient


def get_llm_client(settings: Settings) -> ChatCompletionsClient:
    return ChatCompletionsClient(
        base_url=settings.llm_base_url,
        model=settings.llm_model,
        api_key=settings.api_key,
        temperature=settings.temperature,
        max_tokens=settings.max_tokens,
        top_p=settings.top_p,
        frequency_penalty=settings.frequency_penalty,
        presence_penalty=settings.presence_penalty,
        timeout=settings.timeout,
    )
