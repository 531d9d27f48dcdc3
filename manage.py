#!/usr/bin/env python
import os
import sys
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent

# mesmo layout que o pytest usa (pythonpath em pyproject.toml)
for folder in ("src", "libs"):
    path = str(BASE_DIR / folder)
    if path not in sys.path:
        sys.path.insert(0, path)


def main():
    """Ponto de entrada dos comandos de gerenciamento (ex.: `seed_cids`)."""
    os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings")
    try:
        from django.core.management import execute_from_command_line
    except ImportError as exc:
        raise ImportError(
            "Não foi possível importar Django. Verifique se está instalado e no seu PYTHONPATH."
        ) from exc

    execute_from_command_line(sys.argv)


if __name__ == "__main__":
    main()
