import argparse
import mimetypes
import sys
from collections.abc import Sequence
from pathlib import Path

from intake.auth.exceptions import AuthError
from intake.classifier.classifier import FilenameClassifier
from intake.classifier.models import UploadCandidate
from intake.config.settings import Settings
from intake.database.connection import apply_schema, close_pool, init_pool
from intake.logging.logger import Log
from intake.service.exceptions import IntakeError, UnreadableUploadError
from intake.service.intake_service import (
    IntakeService,
    build_intake_service,
    category_counts,
    group_by_category,
)
from intake.storage.exceptions import StorageError
from intake.taxonomy.display import category_display_style, format_item_type
from intake.taxonomy.models import Category


def parse_category(value: str) -> Category:
    """Accept a display label ('Visual Defect') or member name ('visual_defect')."""
    normalized = value.strip().lower().replace("_", " ")
    for category in Category:
        if normalized in (category.value.lower(), category.name.lower().replace("_", " ")):
            return category
    raise argparse.ArgumentTypeError(
        f"unknown category '{value}'. Choose from: {[c.value for c in Category]}"
    )


def read_candidate(path: Path) -> UploadCandidate:
    """Load a local file as an upload candidate.

    Raises:
        UnreadableUploadError: if the file is missing or cannot be read.
    """
    mime_type, _ = mimetypes.guess_type(path.name)
    try:
        content = path.read_bytes()
    except OSError as exc:
        raise UnreadableUploadError(f"Could not read {path}: {exc.strerror or exc}") from exc
    return UploadCandidate(filename=path.name, mime_type=mime_type or "", content=content)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="intake",
        description="Substation inspection photo and test-sheet intake",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("init-db", help="Create the inspection_images table")

    check = sub.add_parser("check", help="Classify filenames without storing anything")
    check.add_argument("filenames", nargs="+")

    upload = sub.add_parser("upload", help="Validate and store files")
    upload.add_argument("paths", nargs="+", type=Path)

    listing = sub.add_parser("list", help="List stored files")
    listing.add_argument("--category", type=parse_category)
    listing.add_argument("--search", help="Case-insensitive filename substring")
    listing.add_argument("--grouped", action="store_true", help="Group by category")

    delete = sub.add_parser("delete", help="Delete one file or a whole category")
    target = delete.add_mutually_exclusive_group(required=True)
    target.add_argument("--id", type=int, dest="image_id")
    target.add_argument("--category", type=parse_category)
    return parser


def _run_check(filenames: list[str], classifier: FilenameClassifier) -> int:
    result = classifier.validate_batch(
        [UploadCandidate(filename=name) for name in filenames], existing_filenames=[]
    )
    for item in result.accepted:
        parsed = item.parsed
        style = category_display_style(parsed.category)
        print(
            f"OK    {item.candidate.filename}: [{style.label}] "
            f"{format_item_type(parsed.item_type)} location={parsed.location or '-'} "
            f"date={parsed.date_taken or '-'} seq={parsed.sequence or '-'}"
        )
    for rejection in result.rejected:
        print(f"ERROR {rejection.describe()}")
    return 1 if result.has_rejections else 0


def _run_upload(paths: list[Path], service: IntakeService) -> int:
    candidates = [read_candidate(path) for path in paths]
    report = service.upload(candidates)
    for record in report.stored:
        print(f"stored {record.id}: {record.filename} [{record.category.value}]")
    if report.rejected:
        print("The following files were rejected:")
        for line in report.rejection_lines():
            print(f"  {line}")
    return 1 if report.rejected else 0


def _run_list(args: argparse.Namespace, service: IntakeService) -> int:
    records = service.list_images(category=args.category, search=args.search)
    if args.grouped:
        counts = category_counts(records)
        for category, items in group_by_category(records).items():
            print(f"{category.value} ({counts[category]})")
            for record in items:
                print(f"  {record.id}\t{record.filename}")
        return 0
    for record in records:
        print(f"{record.id}\t{record.category.value}\t{record.filename}")
    return 0


def _run_delete(args: argparse.Namespace, service: IntakeService) -> int:
    if args.image_id is not None:
        service.delete_image(args.image_id)
        print(f"deleted image {args.image_id}")
    else:
        deleted = service.delete_category(args.category)
        print(f"deleted {deleted} {args.category.value} images")
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point: settings -> logging -> pool -> service -> command."""
    args = build_parser().parse_args(argv)
    settings = Settings()
    Log.configure(settings.log_level)

    if args.command == "check":
        classifier = FilenameClassifier(allow_uncategorized=settings.allow_uncategorized)
        return _run_check(args.filenames, classifier)

    init_pool(settings)
    try:
        if args.command == "init-db":
            apply_schema()
            Log.info("Schema applied")
            return 0
        service = build_intake_service(settings)
        if args.command == "upload":
            return _run_upload(args.paths, service)
        if args.command == "list":
            return _run_list(args, service)
        return _run_delete(args, service)
    except (AuthError, IntakeError, StorageError) as exc:
        Log.error(f"{args.command} failed: {exc}")
        return 2
    finally:
        close_pool()


if __name__ == "__main__":
    sys.exit(main())
