"""
Prompt loader utility for Sicilia.

Loads YAML prompt templates shipped in sicilia/prompts/.
"""

from pathlib import Path
from typing import Any
import yaml


PROMPTS_DIR = Path(__file__).parent.parent / "prompts"


def load_prompt(name: str, prompts_dir: Path | None = None) -> dict[str, Any]:
    """
    Load a prompt template by name.

    Args:
        name: Prompt name without .yaml extension (e.g., "tutor")
        prompts_dir: Optional custom prompts directory

    Returns:
        Dict containing the parsed YAML prompt template with keys:
        - meta: version, model, temperature
        - system: system prompt string
        - greeting: opening assistant message

    Raises:
        FileNotFoundError: If prompt file doesn't exist
        yaml.YAMLError: If YAML parsing fails
    """
    dir_path = prompts_dir or PROMPTS_DIR
    file_path = dir_path / f"{name}.yaml"

    if not file_path.exists():
        raise FileNotFoundError(f"Prompt template not found: {file_path}")

    with open(file_path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f)


def get_available_prompts(prompts_dir: Path | None = None) -> list[str]:
    """List prompt template names (without .yaml extension)."""
    dir_path = prompts_dir or PROMPTS_DIR
    if not dir_path.exists():
        return []
    return sorted(p.stem for p in dir_path.glob("*.yaml"))
