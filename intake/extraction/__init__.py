from intake.extraction.base import BaseExtractionPrompter
from intake.extraction.factory import ExtractionPrompterFactory
from intake.extraction.prompter import ExtractionPrompter
from intake.extraction.reconciler import ResponseReconciler

__all__ = [
    "BaseExtractionPrompter",
    "ExtractionPrompter",
    "ExtractionPrompterFactory",
    "ResponseReconciler",
]
