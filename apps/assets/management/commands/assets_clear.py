"""Delete generated bundles and rotate the cache-busting key."""
from __future__ import annotations

from django.core.management.base import BaseCommand, CommandError

from apps.assets.cache import bump_cache_key
from apps.assets.conf import get_settings
from apps.assets.pipeline import BUNDLE_RE


class Command(BaseCommand):
    help = "Remove pipelined CSS/JS bundles from ASSETS['PIPELINE_DIR'] and bump the cache key."

    def add_arguments(self, parser):
        parser.add_argument("--dry-run", action="store_true", help="List files without deleting them.")

    def handle(self, *args, **options) -> None:
        cfg = get_settings()
        target = cfg.pipeline_dir
        if target is None or not target.is_dir():
            raise CommandError(f"Pipeline directory not found: {target}")

        dry_run = bool(options.get("dry_run"))
        removed = 0
        for path in sorted(target.iterdir()):
            if not path.is_file() or not BUNDLE_RE.match(path.name):
                continue
            if dry_run:
                self.stdout.write(f"would remove {path.name}")
            else:
                path.unlink()
            removed += 1

        if dry_run:
            self.stdout.write(f"{removed} bundle(s) would be removed")
            return
        key = bump_cache_key()
        self.stdout.write(self.style.SUCCESS(f"{removed} bundle(s) removed; cache key is now {key}"))
