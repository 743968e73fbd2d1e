"""Script de ejecución: `python -m icm_jobrunner ...`."""

from __future__ import annotations

from icm_jobrunner.cli.main import run


def main() -> None:
    run()


if __name__ == "__main__":
    main()
