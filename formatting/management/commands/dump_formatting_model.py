"""Print the default formatting model as JSON.

Useful for inspecting exactly what a host receives before any data refresh,
and (with `--check`) for failing CI when a card definition becomes invalid.
"""

from __future__ import annotations

import json

from django.core.management.base import BaseCommand, CommandError

from formatting.codec import encode_settings_model
from formatting.model import SettingsModel
from formatting.validator import validate_settings_model


class Command(BaseCommand):
    """Dump the default formatting model."""

    help = "Print the default formatting model payload as JSON."

    def add_arguments(self, parser) -> None:
        """Add command arguments."""

        parser.add_argument(
            "--check",
            action="store_true",
            help="Validate the model and fail when it has errors.",
        )
        parser.add_argument(
            "--indent",
            type=int,
            default=2,
            help="JSON indentation (default: 2).",
        )

    def handle(self, *args, **options) -> str | None:
        """Run the command."""

        check: bool = options["check"]
        indent: int = options["indent"]
        if indent < 0:
            raise CommandError("--indent must be zero or greater.")

        model = SettingsModel()
        if check:
            result = validate_settings_model(model)
            for warning in result.warnings:
                self.stderr.write(f"[WARN] {warning}")
            if not result.is_valid:
                raise CommandError("Formatting model is invalid:\n" + "\n".join(result.errors))

        self.stdout.write(json.dumps(encode_settings_model(model), indent=indent or None))
        return None
