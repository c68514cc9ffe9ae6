"""Cliente da Station API da Veriff com failover entre credenciais.

Cada chamada é assinada com o par de credenciais ativo:
- X-AUTH-CLIENT: public key do par
- X-HMAC-SIGNATURE: HMAC-SHA256(shared secret, identificador do recurso)

Se a Veriff responde com erro HTTP (status + corpo), o pool rotaciona e a
mesma chamada é refeita com o próximo par, no máximo `len(pool)` vezes.
Falhas de transporte (timeout, conexão) não rotacionam: nenhuma credencial
resolveria o problema.

Nenhuma operação pública levanta exceção: falha vira `None`, que o
chamador deve tratar como "dado indisponível", não como "dado vazio".
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import TYPE_CHECKING, Any

import httpx
from pydantic import ValidationError

from api.connectors.http_base import HttpClient, HttpClientConfig
from api.connectors.veriff.errors import VeriffHttpError, parse_veriff_error
from api.connectors.veriff.models import Attempt, MediaList, MediaStream
from api.connectors.veriff.resources import RegistryCheck, ResourcePath
from api.connectors.veriff.signature import sign_identifier
from api.connectors.veriff.veriff_logging import (
    log_credentials_exhausted,
    log_request_abandoned,
    log_success,
    log_veriff_error,
)

if TYPE_CHECKING:
    from api.connectors.veriff.credentials import CredentialPair, CredentialPool
    from config.settings import VeriffSettings

logger: logging.Logger = logging.getLogger(__name__)

AUTH_CLIENT_HEADER = "X-AUTH-CLIENT"
SIGNATURE_HEADER = "X-HMAC-SIGNATURE"


class VeriffApiClient(HttpClient):
    """Cliente assinado da Station API.

    Construído uma vez por processo (bootstrap) e injetado onde for usado.
    O pool de credenciais é compartilhado por todas as chamadas em voo.
    """

    def __init__(
        self,
        credentials: CredentialPool,
        config: HttpClientConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        base_config = config or HttpClientConfig()
        super().__init__(
            replace(
                base_config,
                default_headers={"Content-Type": "application/json", **base_config.default_headers},
            ),
            transport=transport,
        )
        self._credentials = credentials

    @property
    def credentials(self) -> CredentialPool:
        return self._credentials

    # ── Sessão ────────────────────────────────────────────────────────────

    async def get_session_decision(self, session_id: str) -> dict[str, Any] | None:
        """Decisão da sessão. None se ainda não houver decisão."""
        return await self._get_json(ResourcePath.session(session_id, "decision"))

    async def get_session_person(self, session_id: str) -> dict[str, Any] | None:
        """Dados pessoais da sessão (chave `person` da resposta)."""
        data = await self._get_json(ResourcePath.session(session_id, "person"))
        person = data.get("person") if data else None
        return person if isinstance(person, dict) else None

    async def get_session_media(self, session_id: str) -> MediaList | None:
        """Imagens e vídeos da sessão."""
        return _parse_media_list(await self._get_json(ResourcePath.session(session_id, "media")))

    async def get_watchlist_screening(self, session_id: str) -> dict[str, Any] | None:
        """Resultado de PEP/sanções da sessão."""
        return await self._get_json(ResourcePath.session(session_id, "watchlist-screening"))

    async def get_registry_check(
        self,
        session_id: str,
        check: RegistryCheck,
        version: str,
    ) -> dict[str, Any] | None:
        """Registry check versionado (INE, CURP)."""
        return await self._get_json(ResourcePath.registry_check(session_id, check, version))

    async def get_ine_registry(self, session_id: str, version: str) -> dict[str, Any] | None:
        return await self.get_registry_check(session_id, RegistryCheck.INE, version)

    async def get_curp_registry(self, session_id: str, version: str) -> dict[str, Any] | None:
        return await self.get_registry_check(session_id, RegistryCheck.CURP, version)

    async def get_session_attempts(self, session_id: str) -> list[Attempt] | None:
        """Attempts da sessão (chave `verifications` da resposta)."""
        data = await self._get_json(ResourcePath.session(session_id, "attempts"))
        verifications = data.get("verifications") if data else None
        if not isinstance(verifications, list):
            return None
        try:
            return [Attempt.model_validate(item) for item in verifications]
        except ValidationError:
            logger.warning("veriff_attempts_malformed", extra={"session_id": session_id})
            return None

    # ── Attempts, mídia e endereço ───────────────────────────────────────

    async def get_attempt_media(self, attempt_id: str) -> MediaList | None:
        return _parse_media_list(await self._get_json(ResourcePath.attempt_media(attempt_id)))

    async def get_media(self, media_id: str) -> MediaStream | None:
        """Binário de uma mídia de sessão/attempt."""
        return await self._get_stream(ResourcePath.media(media_id))

    async def get_address_media(self, address_id: str) -> MediaList | None:
        """Mídias de um comprovante de endereço."""
        return _parse_media_list(
            await self._get_json(ResourcePath.address_media_list(address_id))
        )

    async def get_address_media_by_id(self, media_id: str) -> MediaStream | None:
        """Binário de uma mídia de comprovante de endereço."""
        return await self._get_stream(ResourcePath.address_media(media_id))

    # ── Caminho compartilhado ─────────────────────────────────────────────

    async def _get_json(self, resource: ResourcePath) -> dict[str, Any] | None:
        result = await self._perform_request(resource, stream=False)
        return result if isinstance(result, dict) else None

    async def _get_stream(self, resource: ResourcePath) -> MediaStream | None:
        result = await self._perform_request(resource, stream=True)
        return result if isinstance(result, MediaStream) else None

    async def _perform_request(self, resource: ResourcePath, *, stream: bool) -> Any:
        """Executa a chamada rotacionando credenciais em erro HTTP.

        Returns:
            JSON decodificado, MediaStream ou None quando não há dado.
        """
        path = resource.path
        attempts_left = len(self._credentials)
        while attempts_left > 0:
            credential_index, pair = self._credentials.snapshot()
            try:
                return await self._send_once(resource, pair, credential_index, stream=stream)
            except VeriffHttpError as exc:
                if not exc.rotate_credential:
                    log_request_abandoned(path, credential_index, exc)
                    return None
                attempts_left -= 1
                self._credentials.rotate()
                log_veriff_error(
                    parse_veriff_error(exc.status_code or 0, exc.body),
                    path,
                    credential_index,
                    attempts_left,
                )
        log_credentials_exhausted(path, len(self._credentials))
        return None

    def _build_headers(self, resource: ResourcePath, pair: CredentialPair) -> dict[str, str]:
        """Headers de autenticação para o par capturado nesta tentativa."""
        return {
            AUTH_CLIENT_HEADER: pair.public_key,
            SIGNATURE_HEADER: sign_identifier(resource.signing_identifier, pair.shared_secret),
        }

    async def _send_once(
        self,
        resource: ResourcePath,
        pair: CredentialPair,
        credential_index: int,
        *,
        stream: bool,
    ) -> Any:
        client = self._get_client()
        request = client.build_request(
            "GET",
            resource.path,
            headers=self._build_headers(resource, pair),
        )
        try:
            response = await client.send(request, stream=stream)
        except httpx.RequestError as exc:
            raise VeriffHttpError("veriff_transport_error") from exc

        if response.is_error:
            body = await _read_error_body(response)
            raise VeriffHttpError(
                "veriff_error_status",
                status_code=response.status_code,
                rotate_credential=bool(body),
                body=body,
            )

        log_success(resource.path, response.status_code, credential_index)
        if stream:
            content_type = response.headers.get("content-type", "application/octet-stream")
            return MediaStream(content_type=content_type, _response=response)

        try:
            return response.json()
        except ValueError as exc:
            # JSONDecodeError e UnicodeDecodeError
            raise VeriffHttpError("veriff_invalid_json", status_code=response.status_code) from exc


async def _read_error_body(response: httpx.Response) -> str:
    try:
        await response.aread()
    except httpx.TransportError:
        return ""
    finally:
        await response.aclose()
    return response.text.strip()


def _parse_media_list(data: dict[str, Any] | None) -> MediaList | None:
    if data is None:
        return None
    try:
        return MediaList.model_validate(data)
    except ValidationError:
        logger.warning("veriff_media_list_malformed")
        return None


def create_veriff_client(
    settings: VeriffSettings,
    credentials: CredentialPool,
    transport: httpx.AsyncBaseTransport | None = None,
) -> VeriffApiClient:
    """Factory com config padrão a partir das settings.

    Args:
        settings: VeriffSettings já validadas.
        credentials: Pool compartilhado (também usado pelo autenticador de webhook).
        transport: Transport httpx alternativo (testes).
    """
    config = HttpClientConfig(
        base_url=settings.api_base_url,
        timeout_seconds=settings.request_timeout_seconds,
        max_retries=0,
    )
    return VeriffApiClient(credentials, config=config, transport=transport)
