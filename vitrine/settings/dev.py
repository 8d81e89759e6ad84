# vitrine/settings/dev.py
# export DJANGO_SETTINGS_MODULE=vitrine.settings.dev

from .base import *

DEBUG = True

ALLOWED_HOSTS = ['127.0.0.1', 'localhost', 'testserver']

# Dev: pas de redirection SSL forcée
SECURE_SSL_REDIRECT = False

LOGGING['loggers'].update({
    'assets': {
        'handlers': ['console'],
        'level': 'DEBUG',
        'propagate': False,
    },
})

# Dev: bundles désactivés par défaut, chaque fichier servi tel quel
ASSETS = {
    **ASSETS,
    "CSS_PIPELINE": env_flag("ASSETS_CSS_PIPELINE", default=False),
    "JS_PIPELINE": env_flag("ASSETS_JS_PIPELINE", default=False),
}

# Dev: permettre la recherche disque pour les bundles
WHITENOISE_AUTOREFRESH = True
WHITENOISE_USE_FINDERS = True
