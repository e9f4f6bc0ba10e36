import argparse
import base64
import json
import mimetypes
import sys
from pathlib import Path

from intake.config.settings import Settings
from intake.database.connection import close_pool, init_pool
from intake.documents.exceptions import IntakeRequestError
from intake.documents.models import ExtractionFocus
from intake.documents.request import parse_request
from intake.logging.logger import Log
from intake.pipeline.orchestrator import build_pipeline


def build_payload(paths: list[Path], extraction_type: str, guidance: str) -> dict[str, object]:
    """Read files from disk into the upstream request shape."""
    files = []
    for path in paths:
        content = path.read_bytes()
        media_type, _ = mimetypes.guess_type(path.name)
        files.append(
            {
                "name": path.name,
                "type": media_type or "application/octet-stream",
                "base64": base64.b64encode(content).decode("ascii"),
                "size": len(content),
            }
        )
    payload: dict[str, object] = {"files": files, "extractionType": extraction_type}
    if guidance:
        payload["userGuidance"] = guidance
    return payload


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="ledger-intake",
        description="Extract contracts, expenses and receivables from documents.",
    )
    parser.add_argument("files", nargs="+", type=Path, help="documents to process")
    parser.add_argument(
        "--extraction-type",
        choices=[focus.value for focus in ExtractionFocus],
        default=ExtractionFocus.AUTO.value,
    )
    parser.add_argument("--guidance", default="", help="extra context for the model")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Entry point: parse request -> run pipeline -> print the result as JSON."""
    args = _parse_args(argv)
    settings = Settings()
    Log.configure(settings.log_level)

    try:
        payload = build_payload(args.files, args.extraction_type, args.guidance)
        request = parse_request(payload, max_upload_bytes=settings.max_upload_bytes)
    except (OSError, IntakeRequestError) as exc:
        code = getattr(exc, "code", "INVALID_FILE")
        Log.error(f"Request rejected: {exc}")
        print(json.dumps({"error": str(exc), "code": code}), file=sys.stderr)
        return 2

    use_database = settings.entity_store.lower() == "postgres"
    if use_database:
        init_pool(settings)
    try:
        result = build_pipeline(settings).process(request)
    finally:
        if use_database:
            close_pool()

    print(json.dumps(result.to_payload(), ensure_ascii=False, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
