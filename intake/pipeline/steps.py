from intake.documents.classifier import classify, detect_format
from intake.documents.models import ExtractionFocus, ExtractionStrategy, FileFormat
from intake.entities.models import EntityType
from intake.extraction.base import BaseExtractionPrompter
from intake.extraction.filename_heuristic import infer_from_filename
from intake.extraction.reconciler import ResponseReconciler
from intake.logging.logger import Log
from intake.pipeline.context import FileContext, PipelineStep
from intake.spreadsheet.base import BaseSpreadsheetMaterializer

FOCUS_ENTITY_TYPES: dict[ExtractionFocus, EntityType] = {
    ExtractionFocus.CONTRACTS: EntityType.CONTRACT,
    ExtractionFocus.EXPENSES: EntityType.EXPENSE,
    ExtractionFocus.RECEIVABLES: EntityType.RECEIVABLE,
}


class ClassifyStep(PipelineStep):
    def run(self, context: FileContext) -> FileContext:
        context.strategy = classify(context.file)
        Log.info(f"Classified {context.file.name} as {context.strategy.value}")
        return context


class MaterializeStep(PipelineStep):
    """Serializes spreadsheets; falls back to vision when nothing usable comes out."""

    def __init__(self, materializer: BaseSpreadsheetMaterializer, min_length: int = 50) -> None:
        self._materializer = materializer
        self._min_length = min_length

    def run(self, context: FileContext) -> FileContext:
        if detect_format(context.file) != FileFormat.SPREADSHEET:
            return context
        text = self._materializer.materialize(context.file)
        if len(text.strip()) < self._min_length:
            Log.warning(
                f"Spreadsheet {context.file.name} yielded {len(text.strip())} chars, "
                "resubmitting the original file to the vision strategy"
            )
            context.strategy = ExtractionStrategy.VISION_DOCUMENT
            context.materialized_text = None
            return context
        context.materialized_text = text
        Log.info(f"Materialized {context.file.name} to {len(text)} chars")
        return context


class ExtractStep(PipelineStep):
    def __init__(self, prompter: BaseExtractionPrompter) -> None:
        self._prompter = prompter

    def run(self, context: FileContext) -> FileContext:
        if context.strategy is None:
            raise ValueError("FileContext.strategy must be set before extraction")
        if context.strategy == ExtractionStrategy.FILENAME_HEURISTIC:
            return context
        context.raw_response = self._prompter.extract(
            context.file,
            context.strategy,
            materialized_text=context.materialized_text,
            focus=context.focus,
            user_guidance=context.user_guidance,
        )
        return context


class ReconcileStep(PipelineStep):
    def __init__(self, reconciler: ResponseReconciler) -> None:
        self._reconciler = reconciler

    def run(self, context: FileContext) -> FileContext:
        if context.strategy == ExtractionStrategy.FILENAME_HEURISTIC:
            candidates = infer_from_filename(context.file.name)
        else:
            if context.raw_response is None or context.strategy is None:
                raise ValueError("FileContext.raw_response must be set before reconciliation")
            candidates = self._reconciler.reconcile(
                context.raw_response,
                context.file.name,
                context.strategy,
            )
        wanted = FOCUS_ENTITY_TYPES.get(context.focus)
        if wanted is not None:
            kept = [c for c in candidates if c.entity_type == wanted]
            if len(kept) != len(candidates):
                Log.info(
                    f"Dropped {len(candidates) - len(kept)} candidates outside "
                    f"the {context.focus.value} focus from {context.file.name}"
                )
            candidates = kept
        context.candidates = candidates
        return context
