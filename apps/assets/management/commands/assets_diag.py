"""Dump the asset registry / pipeline configuration for diagnostics."""
from __future__ import annotations

from django.core.management.base import BaseCommand, CommandError

from apps.assets.conf import get_settings
from apps.assets.exceptions import AssetsError
from apps.assets.minifiers import css_minify_enabled, is_windows_host
from apps.assets.registry import AssetRegistry


class Command(BaseCommand):
    help = "Inspect ASSETS configuration, collections and pipeline directory."

    def add_arguments(self, parser):
        parser.add_argument(
            "--render",
            action="store_true",
            help="Render the autoloaded assets (builds bundles when pipelining is on).",
        )

    def handle(self, *args, **options) -> None:
        try:
            cfg = get_settings()
        except AssetsError as exc:
            raise CommandError(str(exc)) from exc

        self.stdout.write("=== assets diagnostics ===")
        self.stdout.write(f"BASE_URL: {cfg.base_url}")
        self.stdout.write(f"ROOT_DIR: {cfg.root_dir} (exists={bool(cfg.root_dir and cfg.root_dir.is_dir())})")
        self.stdout.write(
            f"PIPELINE_DIR: {cfg.pipeline_dir} (exists={bool(cfg.pipeline_dir and cfg.pipeline_dir.is_dir())})"
        )
        self.stdout.write(f"CSS_PIPELINE: {cfg.css_pipeline}  JS_PIPELINE: {cfg.js_pipeline}")
        self.stdout.write(
            f"CSS_MINIFY: {cfg.css_minify} (effective={css_minify_enabled(cfg.css_minify, cfg.css_minify_windows)}, "
            f"windows_host={is_windows_host()})"
        )
        self.stdout.write(f"CSS_REWRITE: {cfg.css_rewrite}  JS_MINIFY: {cfg.js_minify}")
        self.stdout.write(f"STREAMS: {', '.join(f'{k}://={v}' for k, v in cfg.streams.items()) or '(none)'}")
        self.stdout.write(f"COLLECTIONS: {', '.join(sorted(cfg.collections)) or '(none)'}")
        self.stdout.write(f"AUTOLOAD: {len(cfg.autoload)} item(s)")

        if options.get("render"):
            try:
                registry = AssetRegistry(cfg)
                self.stdout.write(registry.css() or "(no css)")
                self.stdout.write(registry.js() or "(no js)")
            except AssetsError as exc:
                raise CommandError(str(exc)) from exc
        self.stdout.write("=== end diagnostics ===")
