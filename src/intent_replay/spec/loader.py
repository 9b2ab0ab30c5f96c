"""
Intent Spec loader - read and validate analyzer output.

Accepts a dict, a JSON string, or a path to a ``.json`` / ``.yaml`` file.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Union

import yaml
from pydantic import ValidationError

from intent_replay.exceptions import IntentSpecError, TemplatingError
from intent_replay.spec.models import IntentSpec

logger = logging.getLogger(__name__)

SpecSource = Union[IntentSpec, Dict[str, Any], str, Path]


def _read_document(source: Union[str, Path]) -> Dict[str, Any]:
    if isinstance(source, str) and source.lstrip().startswith("{"):
        try:
            return json.loads(source)
        except json.JSONDecodeError as e:
            raise IntentSpecError(f"Invalid JSON: {e}")

    path = Path(source)
    if not path.exists():
        raise IntentSpecError(f"Intent Spec not found: {path}", source=str(path))

    text = path.read_text(encoding="utf-8")
    try:
        if path.suffix.lower() in (".yaml", ".yml"):
            data = yaml.safe_load(text)
        else:
            data = json.loads(text)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise IntentSpecError(f"Could not parse {path.name}: {e}", source=str(path))

    if not isinstance(data, dict):
        raise IntentSpecError(f"{path.name} must contain an object", source=str(path))
    return data


def load_intent_spec(source: SpecSource) -> IntentSpec:
    """
    Load and validate an Intent Spec.

    Args:
        source: An IntentSpec, a dict, a JSON string, or a file path

    Returns:
        A validated IntentSpec with every default resolved

    Raises:
        IntentSpecError: The document is malformed
        TemplatingError: A step uses a placeholder not listed in ``params``
    """
    if isinstance(source, IntentSpec):
        spec = source
    else:
        data = source if isinstance(source, dict) else _read_document(source)
        try:
            spec = IntentSpec.model_validate(data)
        except ValidationError as e:
            raise IntentSpecError(f"Invalid Intent Spec: {e}")

    undeclared = spec.undeclared_placeholders()
    if undeclared:
        raise TemplatingError(f"Intent Spec '{spec.name}' uses undeclared params", undeclared)

    logger.debug(f"Loaded Intent Spec '{spec.name}' with {len(spec.steps)} steps")
    return spec
