from __future__ import annotations
from django.core.checks import register, Warning, Error

from .collections import CollectionSet
from .conf import get_settings
from .exceptions import AssetsConfigurationError
from .minifiers import load_callable


@register()
def pipeline_dir_check(app_configs, **kwargs):
    # Bloquant: un pipeline actif sans dossier de sortie lève à chaque rendu
    cfg = get_settings()
    if cfg.any_pipeline and (cfg.pipeline_dir is None or not cfg.pipeline_dir.is_dir()):
        return [Error(
            f"Pipeline d'assets actif mais dossier de sortie introuvable: {cfg.pipeline_dir}",
            hint="Crée ASSETS['PIPELINE_DIR'] ou coupe CSS_PIPELINE/JS_PIPELINE.",
            id="assets.E001")]
    return []


@register()
def collections_cycle_check(app_configs, **kwargs):
    errors = []
    for cycle in CollectionSet(get_settings().collections).find_cycles():
        errors.append(Error(
            "Collection d'assets cyclique: " + " -> ".join(cycle),
            hint="Une collection ne peut pas se référencer elle-même, même indirectement.",
            id="assets.E002"))
    return errors


@register()
def dotted_paths_check(app_configs, **kwargs):
    warns = []
    cfg = get_settings()
    for key, dotted in (
        ("CSS_MINIFIER", cfg.css_minifier),
        ("JS_MINIFIER", cfg.js_minifier),
        ("FETCH_COMMAND", cfg.fetch_command),
    ):
        try:
            load_callable(dotted)
        except AssetsConfigurationError as exc:
            warns.append(Warning(
                f"ASSETS['{key}'] non importable: {exc}",
                hint="Vérifie le dotted path ou retire la clé pour revenir au défaut.",
                id="assets.W001"))
    return warns


@register()
def root_dir_check(app_configs, **kwargs):
    cfg = get_settings()
    if cfg.root_dir is not None and not cfg.root_dir.is_dir():
        return [Warning(
            f"ASSETS['ROOT_DIR'] introuvable: {cfg.root_dir}",
            hint="Les assets locaux ne pourront être ni pipelinés ni scannés.",
            id="assets.W002")]
    return []
