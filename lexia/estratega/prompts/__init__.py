# lexia/estratega/prompts/__init__.py
"""Spanish prompt templates for the analysis stages, one .txt per stage."""

from functools import lru_cache
from pathlib import Path

PROMPTS_DIR = Path(__file__).parent


@lru_cache(maxsize=None)
def load_prompt(stage: str) -> str:
    """
    Return the template for a stage ('risk', 'jurisprudence', 'scenarios',
    'timeline' or 'recommendations'). Templates use str.format placeholders.

    Raises:
        FileNotFoundError: If the stage has no template
    """
    path = PROMPTS_DIR / f"{stage}.txt"
    if not path.is_file():
        known = sorted(p.stem for p in PROMPTS_DIR.glob("*.txt"))
        raise FileNotFoundError(f"No prompt template for stage '{stage}' (known: {known})")
    return path.read_text(encoding="utf-8")


__all__ = ["PROMPTS_DIR", "load_prompt"]
