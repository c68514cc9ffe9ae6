"""Erros e parsing de respostas de erro da Station API."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any

from api.connectors.http_base import HttpError


class VeriffHttpError(HttpError):
    """Falha de uma tentativa contra a Station API.

    `rotate_credential` indica se a próxima credencial deve ser tentada
    (resposta HTTP de erro com corpo). Falhas de transporte nunca rotacionam.
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        rotate_credential: bool = False,
        body: str | None = None,
    ) -> None:
        super().__init__(message, status_code=status_code, is_retryable=rotate_credential, body=body)
        self.rotate_credential = rotate_credential


@dataclass(frozen=True)
class VeriffApiError:
    """Corpo de erro retornado pela Veriff."""

    status_code: int
    code: str
    message: str

    @property
    def is_not_found(self) -> bool:
        return self.status_code == 404


def parse_veriff_error(status_code: int, body: str | None) -> VeriffApiError:
    """Extrai code/message do corpo de erro.

    Formato típico: {"status": "fail", "code": "1102", "message": "..."}.
    Corpos não-JSON viram mensagem truncada.
    """
    code = ""
    message = ""
    data: Any = None
    if body:
        try:
            data = json.loads(body)
        except json.JSONDecodeError:
            message = body[:200]

    if isinstance(data, dict):
        code = str(data.get("code", "") or "")
        message = str(data.get("message", "") or "")

    return VeriffApiError(status_code=status_code, code=code, message=message)
