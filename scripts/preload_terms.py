#!/usr/bin/env python3
"""
Preload script for React Dictionary.

Generates definitions for the seed list of common React terms and writes them
to the terms file the server loads at startup. Terms already present in the
file are skipped, and the file is rewritten after every successful
generation so an interrupted run keeps its progress.
"""
import argparse
import asyncio
import json
import sys
from pathlib import Path
from typing import List, Optional

from react_dictionary.config import settings
from react_dictionary.services.definitions import generate_definition, load_seed_terms
from react_dictionary.services.llm_provider import is_configured


def load_existing_definitions(path: Path) -> List[dict]:
    if not path.exists():
        return []
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        print(f"Error loading existing definitions: {e}")
        return []

    if not isinstance(data, list):
        print(f"Error loading existing definitions: expected a JSON array, got {type(data).__name__}")
        return []

    definitions = [d for d in data if isinstance(d, dict) and isinstance(d.get("term"), str)]
    if len(definitions) < len(data):
        print(f"Dropped {len(data) - len(definitions)} malformed entries")
    print(f"Loaded {len(definitions)} existing definitions")
    return definitions


def save_definitions(path: Path, definitions: List[dict]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(definitions, f, indent=2, ensure_ascii=False)


async def generate_one(term: str) -> Optional[dict]:
    """Generate a single definition, returning None on any failure."""
    print(f"Generating definition for \"{term}\"...")
    try:
        definition = await generate_definition(term, style="preload", moderated=True)
    except Exception as e:
        print(f"Error generating definition for \"{term}\": {e}")
        return None
    return definition.to_json()


async def generate_all_definitions(terms: List[str], output: Path, delay: float) -> List[dict]:
    print(f"Starting to generate definitions for {len(terms)} React terms...")

    definitions = load_existing_definitions(output)
    existing_terms = {d["term"].lower() for d in definitions if d.get("term")}
    terms_to_generate = [term for term in terms if term.lower() not in existing_terms]

    print(f"Generating definitions for {len(terms_to_generate)} new terms...")

    for term in terms_to_generate:
        definition = await generate_one(term)
        if definition is None:
            continue
        definitions.append(definition)
        save_definitions(output, definitions)
        print(f"Saved definition for \"{term}\"")
        # Small delay to avoid rate limiting
        await asyncio.sleep(delay)

    print(f"Completed! Generated {len(definitions)} total definitions.")
    return definitions


def main():
    parser = argparse.ArgumentParser(description="Preload definitions for common React terms")
    parser.add_argument("--output", type=Path, default=settings.terms_file, help="Path of the terms JSON file")
    parser.add_argument("--delay", type=float, default=settings.preload_delay_seconds,
                        help="Seconds to wait between successful generations")
    args = parser.parse_args()

    if not is_configured():
        print("Error: an LLM API key (e.g. OPENAI_API_KEY) environment variable is required")
        sys.exit(1)

    try:
        asyncio.run(generate_all_definitions(load_seed_terms(), args.output, args.delay))
    except Exception as e:
        print(f"Error in generation process: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
