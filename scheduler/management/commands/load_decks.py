import json
import os
from django.core.management.base import BaseCommand, CommandError
from django.db import transaction
from scheduler.api.serializers import DeckInSerializer
from scheduler.data.models import Deck
from scheduler.services.decks import new_deck


class Command(BaseCommand):
    help = "Replace all decks with the ones described in a JSON file"

    def add_arguments(self, parser):
        parser.add_argument(
            "--file", default="SAMPLE_DECKS.json", help="JSON file name to load decks from"
        )
        parser.add_argument(
            "--keep", action="store_true", help="Keep existing decks instead of deleting them"
        )

    def handle(self, *args, **options):
        file_name = options.get("file") or "SAMPLE_DECKS.json"
        json_file_path = (
            file_name if os.path.isabs(file_name)
            else os.path.join(os.path.dirname(__file__), file_name)
        )

        try:
            with open(json_file_path, encoding="utf-8") as json_file:
                data = json.load(json_file)
            entries = data["decks"]
        except (OSError, ValueError, KeyError, TypeError) as e:
            self.stdout.write(self.style.ERROR(f"Error loading data: {e}"))
            raise CommandError(f"could not load decks from {file_name}") from e

        s = DeckInSerializer(data=entries, many=True)
        if not s.is_valid():
            self.stdout.write(self.style.ERROR(f"Invalid deck data: {s.errors}"))
            raise CommandError(f"invalid deck data in {file_name}")

        # Nothing is deleted unless every deck loads
        with transaction.atomic():
            if not options["keep"]:
                Deck.objects.all().delete()
                self.stdout.write(self.style.SUCCESS("All existing deck data has been deleted"))
            for entry in s.validated_data:
                new_deck(entry["title"], entry["description"], entry["cards"])

        self.stdout.write(
            self.style.SUCCESS(f"{len(s.validated_data)} decks loaded successfully from {file_name}")
        )
