# vitrine/settings/prod.py
from .base import *

DEBUG = False

# Domaine(s) à fournir via env
SITE_DOMAIN = os.getenv('SITE_DOMAIN')  # ex: "www.example.com"
SITE_ALIASES = os.getenv("SITE_ALIASES", "")
if not SITE_DOMAIN:
    raise RuntimeError("SITE_DOMAIN n'est pas défini en production.")

ALIASES = [h.strip() for h in SITE_ALIASES.split(",") if h.strip()]
ALLOWED_HOSTS = [SITE_DOMAIN, "127.0.0.1"] + ALIASES

# Prod: bundles CSS/JS actifs sauf override explicite.
# Les bundles sont écrits à l'exécution, après l'indexation de STATIC_ROOT par
# WhiteNoise: ils vivent hors de static/ et sont servis sous /bundles/ par
# apps.assets.views.bundle_view (ou un alias du serveur frontal sur ce dossier).
ASSETS_PIPELINE_DIR = Path(os.getenv("ASSETS_PIPELINE_DIR", str(BASE_DIR / "var" / "bundles")))
ASSETS_PIPELINE_DIR.mkdir(parents=True, exist_ok=True)

ASSETS = {
    **ASSETS,
    "PIPELINE_DIR": ASSETS_PIPELINE_DIR,
    "PIPELINE_URL": os.getenv("ASSETS_PIPELINE_URL", "/bundles/"),
    "CSS_PIPELINE": env_flag("ASSETS_CSS_PIPELINE", default=True),
    "JS_PIPELINE": env_flag("ASSETS_JS_PIPELINE", default=True),
}

# Log niveau INFO/ERROR
LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
LOGGING['root']['level'] = LOG_LEVEL
LOGGING['loggers']['django.request']['level'] = 'ERROR'
