from intake.config.settings import Settings
from intake.documents.exceptions import EmptyBatchError
from intake.documents.models import InputFile, IntakeRequest
from intake.entities.factory import EntityServicesFactory
from intake.entities.models import EntityType
from intake.extraction.base import BaseExtractionPrompter
from intake.extraction.factory import ExtractionPrompterFactory
from intake.extraction.reconciler import ResponseReconciler
from intake.logging.logger import Log
from intake.pipeline.committer import BulkCommitter
from intake.pipeline.context import BatchContext, FileContext, PipelineState, PipelineStep
from intake.pipeline.models import ProcessingResult
from intake.pipeline.steps import ClassifyStep, ExtractStep, MaterializeStep, ReconcileStep
from intake.spreadsheet.base import BaseSpreadsheetMaterializer
from intake.spreadsheet.factory import SpreadsheetMaterializerFactory
from intake.validation.validator import validate


class IntakePipeline:
    """Turns a batch of uploaded documents into committed financial entities.

    Files are extracted one at a time, in request order. A failure while
    extracting one file is recorded as an error and never affects the
    others. Validation and commit each run once over the whole batch,
    after every file has been extracted.
    """

    def __init__(
        self,
        *,
        prompter: BaseExtractionPrompter,
        materializer: BaseSpreadsheetMaterializer,
        committer: BulkCommitter,
        reconciler: ResponseReconciler | None = None,
        materialized_min_length: int = 50,
    ) -> None:
        self._extract_steps: list[PipelineStep] = [
            ClassifyStep(),
            MaterializeStep(materializer, materialized_min_length),
            ExtractStep(prompter),
        ]
        self._reconcile_step = ReconcileStep(reconciler or ResponseReconciler())
        self._committer = committer

    def process(self, request: IntakeRequest) -> ProcessingResult:
        """Run the full batch and return its result.

        Raises:
            EmptyBatchError: if the request carries no files.
        """
        result = self.run_batch(request).result
        if result is None:
            raise RuntimeError("Pipeline finished without a result")
        return result

    def run_batch(self, request: IntakeRequest) -> BatchContext:
        """Run the full batch and return its context, result included."""
        if not request.files:
            raise EmptyBatchError("No files provided for processing")
        batch = BatchContext(total_files=len(request.files))
        Log.info(f"Processing {batch.total_files} files")

        for index, file in enumerate(request.files):
            batch.enter(PipelineState.EXTRACTING, index)
            self._process_file(batch, index, file, request)

        batch.enter(PipelineState.VALIDATING)
        self._validate(batch)

        batch.enter(PipelineState.COMMITTING)
        report = self._committer.commit(batch.entities)
        batch.errors.extend(report.errors)

        batch.enter(PipelineState.DONE)
        result = ProcessingResult(
            total_files=batch.total_files,
            processed_files=batch.processed_files,
            extracted_entity_count=len(batch.candidates),
            created_entity_count=report.total_created,
            contracts_created=report.per_type[EntityType.CONTRACT].success_count,
            expenses_created=report.per_type[EntityType.EXPENSE].success_count,
            receivables_created=report.per_type[EntityType.RECEIVABLE].success_count,
            errors=tuple(batch.errors),
            clarification_requests=tuple(batch.clarifications),
        )
        Log.info(
            f"Batch done: {result.processed_files}/{result.total_files} files, "
            f"{result.extracted_entity_count} extracted, {result.created_entity_count} created, "
            f"{len(result.clarification_requests)} clarifications, {len(result.errors)} errors"
        )
        batch.result = result
        return batch

    def _process_file(
        self,
        batch: BatchContext,
        index: int,
        file: InputFile,
        request: IntakeRequest,
    ) -> None:
        context = FileContext(file=file, focus=request.focus, user_guidance=request.user_guidance)
        try:
            for step in self._extract_steps:
                context = step.run(context)
            batch.enter(PipelineState.RECONCILING, index)
            context = self._reconcile_step.run(context)
        except Exception as exc:
            Log.error(f"File {file.name} failed: {exc}")
            batch.errors.append(f"File {file.name}: {exc}")
            return
        batch.processed_files += 1
        batch.candidates.extend(context.candidates)
        Log.info(f"File {file.name}: {len(context.candidates)} candidates")

    @staticmethod
    def _validate(batch: BatchContext) -> None:
        for candidate in batch.candidates:
            outcome = validate(candidate)
            if outcome.entity is not None:
                batch.entities[candidate.entity_type].append(outcome.entity)
            else:
                batch.clarifications.extend(outcome.clarifications)
        Log.info(
            f"Validation: {sum(len(v) for v in batch.entities.values())} complete, "
            f"{len(batch.clarifications)} clarifications"
        )


def build_pipeline(settings: Settings) -> IntakePipeline:
    """Build an IntakePipeline with all configured adapters."""
    return IntakePipeline(
        prompter=ExtractionPrompterFactory.create(settings),
        materializer=SpreadsheetMaterializerFactory.create(settings),
        committer=BulkCommitter(EntityServicesFactory.create(settings)),
        materialized_min_length=settings.materialized_min_length,
    )
