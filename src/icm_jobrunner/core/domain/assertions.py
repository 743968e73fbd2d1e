"""Resultados estructurados de las aserciones sobre respuestas."""

from __future__ import annotations

from typing import Any


class AssertionResult:
    """Acumula los fallos de una validación.

    Un resultado sin fallos es un éxito. Los mensajes pueden llevar
    placeholders ``{}`` que `add_failure` rellena por posición.
    """

    def __init__(self) -> None:
        self._failures: list[str] = []

    def add_failure(self, message: str, *values: Any) -> None:
        """Añade un fallo, sustituyendo los ``{}`` del mensaje en orden.

        El mensaje se parte una sola vez, así que un valor que contenga ``{}``
        no consume el placeholder siguiente. Los ``{}`` sobrantes se quedan tal
        cual y los valores sobrantes se ignoran.
        """

        parts = message.split("{}", len(values))
        rendered = parts[0]
        for value, part in zip(values, parts[1:]):
            rendered += str(value) + part
        self._failures.append(rendered)

    def succeeded(self) -> bool:
        return not self._failures

    @property
    def failures(self) -> list[str]:
        return list(self._failures)

    def summarize(self, separator: str = "\n") -> str:
        """Todos los fallos unidos con `separator` ("" si no hay ninguno)."""

        return separator.join(self._failures)

    def __repr__(self) -> str:
        return f"AssertionResult(failures={self._failures!r})"
