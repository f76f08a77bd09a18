import json

from django.core.management.base import BaseCommand, CommandError

from srs.domain.enums import ContentType
from srs.services.items import bulk_add_grammar, bulk_add_vocabulary


class Command(BaseCommand):
    help = "Import vocabulary or grammar entries from a JSON list into a learner's SRS deck"

    def add_arguments(self, parser):
        parser.add_argument("--learner-id", type=int, required=True)
        parser.add_argument("--file", required=True, help="JSON file holding a list of entries")
        parser.add_argument(
            "--content-type",
            choices=ContentType.values,
            default=ContentType.VOCABULARY,
        )

    def handle(self, *args, **options):
        file_name = options["file"]
        learner_id = options["learner_id"]

        try:
            with open(file_name, encoding="utf-8") as json_file:
                entries = json.load(json_file)
        except (OSError, json.JSONDecodeError) as e:
            raise CommandError(f"Error loading data from {file_name}: {e}") from e
        if not isinstance(entries, list):
            raise CommandError(f"{file_name} must contain a JSON list")

        if options["content_type"] == ContentType.VOCABULARY:
            result = bulk_add_vocabulary(learner_id, entries)
        else:
            result = bulk_add_grammar(learner_id, entries)

        if not result["success"]:
            raise CommandError(
                f"Import aborted after {len(result['item_ids'])} items; see log for details"
            )

        self.stdout.write(
            self.style.SUCCESS(
                f"Imported {len(result['item_ids'])} items for learner {learner_id} from {file_name}"
            )
        )
        if result["failed"]:
            self.stdout.write(
                self.style.WARNING(f"Skipped {len(result['failed'])} entries: {result['failed']}")
            )
