"""
LLM provider utilities for React Dictionary.

This module handles interactions with the hosted completion APIs. OpenAI is
the default; Anthropic, Mistral and DeepSeek can be selected with
LLM_PROVIDER or by providing only their API key.
"""
import os
from typing import List

import anthropic
import httpx
from mistralai import Mistral
from openai import AsyncOpenAI

from react_dictionary.config import settings

PROVIDER_KEYS = {
    "openai": "OPENAI_API_KEY",
    "anthropic": "ANTHROPIC_API_KEY",
    "mistral": "MISTRAL_API_KEY",
    "deepseek": "DEEPSEEK_API_KEY",
}


class LLMNotConfiguredError(RuntimeError):
    """Raised when no usable LLM API key is available."""


def get_available_llm_providers() -> List[str]:
    return [name for name, env_var in PROVIDER_KEYS.items() if os.getenv(env_var, "").strip()]


def get_llm_provider() -> str:
    """
    Pick the provider to call.

    An explicit LLM_PROVIDER wins when its key is set; otherwise the first
    provider with a key is used.

    Raises:
        LLMNotConfiguredError: If no provider has an API key
    """
    provider = (os.getenv("LLM_PROVIDER") or settings.llm_provider).strip().lower()
    available = get_available_llm_providers()
    if provider:
        if provider not in PROVIDER_KEYS:
            raise LLMNotConfiguredError(f"Unknown provider: {provider}")
        if provider not in available:
            raise LLMNotConfiguredError(f"{PROVIDER_KEYS[provider]} is not set")
        return provider
    if not available:
        raise LLMNotConfiguredError(
            "No LLM API key found. Please set at least one of: "
            + ", ".join(PROVIDER_KEYS.values())
        )
    return available[0]


def is_configured() -> bool:
    try:
        get_llm_provider()
    except LLMNotConfiguredError:
        return False
    return True


async def complete(prompt: str, provider: str = None) -> str:
    """Send a single user prompt to the provider and return the response text."""
    provider = provider or get_llm_provider()
    api_key = os.getenv(PROVIDER_KEYS.get(provider, ""), "")
    messages = [{"role": "user", "content": prompt}]

    if provider == "openai":
        async with AsyncOpenAI(
            api_key=api_key,
            http_client=httpx.AsyncClient(timeout=settings.llm_timeout)
        ) as client:
            response = await client.chat.completions.create(
                model=settings.openai_model,
                messages=messages,
                temperature=settings.model_temperature
            )
        return (response.choices[0].message.content or "").strip()

    elif provider == "anthropic":
        client = anthropic.AsyncAnthropic(api_key=api_key, timeout=settings.llm_timeout)
        response = await client.messages.create(
            model=settings.anthropic_model,
            max_tokens=settings.max_tokens,
            messages=messages,
            temperature=settings.model_temperature
        )
        return response.content[0].text.strip()

    elif provider == "mistral":
        async with Mistral(api_key=api_key) as client:
            response = await client.chat.complete_async(
                model=settings.mistral_model,
                messages=messages,
                temperature=settings.model_temperature
            )
        return (response.choices[0].message.content or "").strip()

    elif provider == "deepseek":
        async with AsyncOpenAI(
            api_key=api_key,
            base_url=settings.deepseek_base_url,
            http_client=httpx.AsyncClient(timeout=settings.llm_timeout)
        ) as client:
            response = await client.chat.completions.create(
                model=settings.deepseek_model,
                messages=messages,
                temperature=settings.model_temperature
            )
        return (response.choices[0].message.content or "").strip()

    else:
        raise ValueError(f"Unknown provider: {provider}")
