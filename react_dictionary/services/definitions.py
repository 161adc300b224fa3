"""
Definition generation for React Dictionary.

This module provides the core functionality for:
1. Building definition prompts from the YAML templates
2. Extracting the JSON object from a free-text model response
3. Turning a model response into a TermDefinition record
"""
import os
import re
import json
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import yaml

from react_dictionary.schemas.terms import TermDefinition
from react_dictionary.services import llm_provider

SERVICES_DIR = os.path.dirname(__file__)

PROMPTS_YAML = "prompts.yaml"
SEED_TERMS_YAML = "seed_terms.yaml"

# Content between the first and the last code fence, with an optional language tag
FENCED_JSON_PATTERN = re.compile(r"```(?:json)?([\s\S]*)```")


class DefinitionParseError(ValueError):
    """Raised when a model response does not contain a JSON object."""

    def __init__(self, message: str, response_text: str = ""):
        self.response_text = response_text
        super().__init__(message)


def load_yaml_config(filename: str, required_key: str = None) -> Any:
    """Load a YAML configuration file with error handling."""
    filepath = os.path.join(SERVICES_DIR, filename)
    try:
        with open(filepath, 'r', encoding='utf-8') as file:
            config = yaml.safe_load(file)
            if config is None:
                raise ValueError(f"Empty configuration file: {filename}")
            if required_key and required_key not in config:
                raise ValueError(f"Missing required key '{required_key}' in {filename}")
            return config[required_key] if required_key else config
    except FileNotFoundError:
        raise ValueError(f"Configuration file not found: {filename}")
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in {filename}: {str(e)}")


PROMPTS: Dict[str, str] = load_yaml_config(PROMPTS_YAML, 'prompts')


def load_seed_terms() -> List[str]:
    """Terms the preload script generates definitions for."""
    return [str(term) for term in load_yaml_config(SEED_TERMS_YAML, 'terms')]


def build_prompt(term: str, style: str = "server") -> str:
    """
    Build the definition prompt for a term.

    Args:
        term: The term as typed by the user
        style: "server" for live lookups, "preload" for the seed script
    """
    if style not in PROMPTS:
        raise ValueError(f"Unknown prompt style: {style}")
    return PROMPTS[style].replace("{term}", term)


def _outermost_object(text: str) -> Optional[str]:
    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end <= start:
        return None
    return text[start:end + 1]


def extract_json(response_text: str) -> Dict[str, Any]:
    """
    Extract the JSON object from a model response.

    Fenced blocks win; otherwise the whole text is parsed. Prose around an
    unfenced object is tolerated by retrying on the outermost braces.

    Raises:
        DefinitionParseError: If no JSON object can be parsed
    """
    text = response_text.strip()
    match = FENCED_JSON_PATTERN.search(text)
    json_text = match.group(1).strip() if match else text

    try:
        data = json.loads(json_text)
    except json.JSONDecodeError:
        candidate = _outermost_object(json_text)
        if candidate is None:
            raise DefinitionParseError("No JSON object found in response", response_text)
        try:
            data = json.loads(candidate)
        except json.JSONDecodeError as e:
            raise DefinitionParseError(f"Invalid JSON in response: {e}", response_text)

    if not isinstance(data, dict):
        raise DefinitionParseError(
            f"Expected a JSON object, got {type(data).__name__}", response_text
        )
    return data


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def parse_definition(term: str, response_text: str, moderated: Optional[bool] = None) -> TermDefinition:
    """Build a definition record for a term from the raw model response."""
    data = extract_json(response_text)
    data["term"] = term
    data["createdAt"] = utc_now_iso()
    if moderated is not None:
        data["moderated"] = moderated
    try:
        return TermDefinition.model_validate(data)
    except ValueError as e:
        raise DefinitionParseError(f"Response does not describe a definition: {e}", response_text)


async def generate_definition(term: str, style: str = "server", moderated: Optional[bool] = None) -> TermDefinition:
    """
    Ask the configured LLM to explain a term.

    Raises:
        LLMNotConfiguredError: If no provider is configured
        DefinitionParseError: If the response is not a JSON definition
    """
    prompt = build_prompt(term, style)
    response_text = await llm_provider.complete(prompt)
    print(f"[definitions] Raw response for '{term}':\n{response_text}")
    return parse_definition(term, response_text, moderated=moderated)
