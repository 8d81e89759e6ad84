#!/usr/bin/env python
"""Django's command-line utility for administrative tasks."""
import os
import sys


def _settings_module(argv: list[str]) -> str:
    if "--settings" in argv[:-1]:
        return argv[argv.index("--settings") + 1]
    return os.environ.get("DJANGO_SETTINGS_MODULE", "")


def main():
    """Run administrative tasks."""
    os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'vitrine.settings.dev')

    # En dev, WhiteNoise (finders + autorefresh) sert static/ et les bundles du pipeline
    if sys.argv[1:2] == ['runserver'] and '--nostatic' not in sys.argv:
        if _settings_module(sys.argv).endswith('.dev'):
            sys.argv.insert(2, '--nostatic')
    try:
        from django.core.management import execute_from_command_line
    except ImportError as exc:
        raise ImportError(
            "Couldn't import Django. Are you sure it's installed and "
            "available on your PYTHONPATH environment variable? Did you "
            "forget to activate a virtual environment?"
        ) from exc
    execute_from_command_line(sys.argv)


if __name__ == '__main__':
    main()
