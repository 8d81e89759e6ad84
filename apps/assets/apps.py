from django.apps import AppConfig
import logging

log = logging.getLogger("assets.apps")


class AssetsConfig(AppConfig):
    name = "apps.assets"
    verbose_name = "Assets"

    def ready(self):
        # Enregistrement des system checks
        from . import checks  # noqa: F401
        from .conf import get_settings

        cfg = get_settings()
        log.info(
            "AssetsConfig ready: css_pipeline=%s js_pipeline=%s collections=%d",
            cfg.css_pipeline,
            cfg.js_pipeline,
            len(cfg.collections),
        )
