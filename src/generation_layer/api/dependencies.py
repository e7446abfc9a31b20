"""
FastAPI dependency injection for the AI generation layer.

Provides singleton instances of expensive resources (LLM client, prompt
builder) and a factory for the generation service.
"""

from functools import lru_cache
from pathlib import Path

from fastapi import Depends

from generation_layer.config import Settings, settings
from generation_layer.llm.base_client import BaseLLMClient
from generation_layer.llm.prompt_builder import PromptBuilder
from generation_layer.llm.registry import create_llm_client
from generation_layer.service import GenerationService


@lru_cache()
def get_settings() -> Settings:
    """
    Get settings singleton.

    Returns:
        Settings instance
    """
    return settings


@lru_cache()
def get_llm_client() -> BaseLLMClient:
    """
    Get singleton LLM client with connection pooling.

    One client (and one API key) per process. The client keeps an internal
    connection pool shared by all requests.

    Returns:
        Client for the configured provider
    """
    return create_llm_client(get_settings())


@lru_cache()
def get_prompt_builder() -> PromptBuilder:
    """
    Get singleton prompt builder.

    Loads Jinja2 templates once and reuses them across requests.
    """
    templates_dir = get_settings().PROMPT_TEMPLATES_DIR
    return PromptBuilder(Path(templates_dir) if templates_dir else None)


def get_generation_service(
    llm_client: BaseLLMClient = Depends(get_llm_client),
    prompt_builder: PromptBuilder = Depends(get_prompt_builder),
    settings: Settings = Depends(get_settings),
) -> GenerationService:
    """
    Create the generation service with injected dependencies.

    Not cached: the service is lightweight and stateless. The client and
    prompt builder it wraps are singletons.
    """
    return GenerationService(
        settings=settings,
        client=llm_client,
        prompt_builder=prompt_builder,
    )
