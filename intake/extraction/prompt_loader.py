from pathlib import Path

from intake.extraction.exceptions import ExtractionError

_DEFAULT_PROMPT_DIR = Path(__file__).parent / "prompts"


def load_prompt_template(path: Path | None = None) -> str:
    """Load the extraction instruction template from a file.

    Args:
        path: Path to the prompt template file.
              Defaults to the bundled extraction_prompt.txt.

    Returns:
        The raw template string with placeholders.

    Raises:
        ExtractionError: if the file cannot be read.
    """
    if path is None:
        path = _DEFAULT_PROMPT_DIR / "extraction_prompt.txt"
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ExtractionError(f"Failed to load prompt template: {exc}") from exc


def load_locale_hints(locale: str, prompt_dir: Path | None = None) -> str:
    """Load the field-name hints for a locale such as 'pt-BR'.

    Unknown locales yield "" so text prompts simply go without hints.
    """
    directory = (prompt_dir or _DEFAULT_PROMPT_DIR) / "locales"
    path = directory / f"{locale}.txt"
    if not path.is_file():
        return ""
    try:
        return path.read_text(encoding="utf-8").strip()
    except OSError as exc:
        raise ExtractionError(f"Failed to load locale hints: {exc}") from exc
