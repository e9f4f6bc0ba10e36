from typing import ClassVar

from intake.config.settings import Settings
from intake.extraction.base import BaseExtractionPrompter
from intake.extraction.example_client_adapter import ExampleClientAdapter
from intake.extraction.openai_client_adapter import OpenAIClientAdapter
from intake.extraction.prompter import ExtractionPrompter
from intake.pdf.rasterizer import PyMuPdfRasterizer


class ExtractionPrompterFactory:
    """Creates the configured extraction prompter."""

    OPENAI_COMPATIBLE_BASE_URLS: ClassVar[dict[str, str]] = {
        "openrouter": "https://openrouter.ai/api/v1",
        "groq": "https://api.groq.com/openai/v1",
        "together": "https://api.together.xyz/v1",
        "deepseek": "https://api.deepseek.com/v1",
        "ollama": "http://localhost:11434/v1",
    }

    @classmethod
    def create(cls, settings: Settings) -> BaseExtractionPrompter:
        """Create a configured prompter from application settings."""
        provider = settings.extraction_provider.lower()
        rasterizer = PyMuPdfRasterizer(
            max_pages=settings.pdf_max_pages,
            dpi=settings.pdf_render_dpi,
        )
        if provider == "example":
            return ExtractionPrompter(
                client=ExampleClientAdapter(),
                model="example",
                temperature=0.0,
                locale=settings.extraction_locale,
                pdf_attachment_mode=settings.pdf_attachment_mode,
                rasterizer=rasterizer,
            )
        client = OpenAIClientAdapter(
            api_key=settings.extraction_api_key,
            timeout_seconds=settings.extraction_timeout_seconds,
            base_url=cls._resolve_base_url(provider, settings),
        )
        return ExtractionPrompter(
            client=client,
            model=settings.extraction_model_name,
            temperature=settings.extraction_temperature,
            max_tokens=settings.extraction_max_tokens,
            locale=settings.extraction_locale,
            pdf_attachment_mode=settings.pdf_attachment_mode,
            rasterizer=rasterizer,
        )

    @classmethod
    def _resolve_base_url(cls, provider: str, settings: Settings) -> str | None:
        if provider == "openai":
            return settings.extraction_base_url.strip() or None
        if provider == "openai_compatible":
            url = settings.extraction_base_url.strip()
            if not url:
                raise ValueError(
                    "extraction_base_url is required for extraction_provider=openai_compatible"
                )
            return url
        default_base_url = cls.OPENAI_COMPATIBLE_BASE_URLS.get(provider)
        if default_base_url is not None:
            return settings.extraction_base_url.strip() or default_base_url
        supported = [
            "example",
            "openai",
            "openai_compatible",
            *sorted(cls.OPENAI_COMPATIBLE_BASE_URLS),
        ]
        raise ValueError(
            f"Unknown extraction provider '{provider}'. Choose from: {supported}"
        )
