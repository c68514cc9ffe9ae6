"""Endpoints de webhook da Veriff.

Endpoints:
- POST /webhooks/decision: decisão final da sessão
- POST /webhooks/verification-event: started / submitted
- POST /webhooks/proof-of-address: comprovante de endereço

Fluxo:
1. Assinatura X-HMAC-SIGNATURE validada sobre o corpo bruto, contra
   todas as credenciais configuradas
2. Extração do session id do payload
3. Handler agrega a sessão e grava no SharePoint

No modo `inline` (padrão) o status HTTP reflete o resultado do handler.
No modo `async` a rota responde 200 e processa em background.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse

from api.connectors.veriff.webhook import (
    InvalidJsonError,
    InvalidPayloadError,
    InvalidSignatureError,
    MissingSignatureError,
    parse_address_reference,
    parse_verification_reference,
    parse_webhook_request,
)
from api.routes.veriff.webhook_runtime import schedule_processing_task
from app.bootstrap.clients import create_document_store
from app.bootstrap.handlers import build_webhook_handler
from app.observability import CORRELATION_ID_HEADER, correlation_scope
from app.use_cases.veriff import (
    DecisionEventHandler,
    HandlerResult,
    HandlerStatus,
    ProofOfAddressHandler,
    VerificationEventHandler,
    WebhookHandler,
)
from config.settings import get_veriff_settings

if TYPE_CHECKING:
    from collections.abc import Callable

    from api.connectors.veriff.webhook import SessionReference
    from app.protocols import VeriffClientProtocol

logger = logging.getLogger(__name__)

router = APIRouter()

_NOT_FOUND_MESSAGES = {
    HandlerStatus.NOT_FOUND: "Data not found",
    HandlerStatus.INSUFFICIENT_DATA: "Sufficient data not found",
}


@router.post("/decision")
async def receive_decision(request: Request) -> JSONResponse:
    """Decisão final da sessão (aprovada, recusada, resubmission...)."""
    return await _receive_webhook(
        request,
        route="decision",
        parse_reference=parse_verification_reference,
        handler_cls=DecisionEventHandler,
    )


@router.post("/verification-event")
async def receive_verification_event(request: Request) -> JSONResponse:
    """Evento intermediário da sessão (7001 started, 7002 submitted)."""
    return await _receive_webhook(
        request,
        route="verification_event",
        parse_reference=parse_verification_reference,
        handler_cls=VerificationEventHandler,
    )


@router.post("/proof-of-address")
async def receive_proof_of_address(request: Request) -> JSONResponse:
    """Comprovante de endereço (payload com `id` e `addressId`)."""
    return await _receive_webhook(
        request,
        route="proof_of_address",
        parse_reference=parse_address_reference,
        handler_cls=ProofOfAddressHandler,
    )


async def _receive_webhook(
    request: Request,
    *,
    route: str,
    parse_reference: Callable[[dict[str, Any]], SessionReference],
    handler_cls: type[WebhookHandler],
) -> JSONResponse:
    with correlation_scope(request.headers.get(CORRELATION_ID_HEADER)) as correlation_id:
        raw_body = await request.body()
        authenticator = request.app.state.webhook_authenticator

        try:
            payload, signature_result = parse_webhook_request(
                raw_body=raw_body,
                headers=dict(request.headers),
                authenticator=authenticator,
            )
            reference = parse_reference(payload)
        except (MissingSignatureError, InvalidSignatureError) as exc:
            logger.warning(
                "webhook_signature_invalid",
                extra={"route": route, "error": str(exc)},
            )
            return _error_response(status.HTTP_401_UNAUTHORIZED, "Unauthorized")
        except (InvalidJsonError, InvalidPayloadError) as exc:
            logger.warning(
                "webhook_payload_invalid",
                extra={"route": route, "error": str(exc)},
            )
            return _error_response(status.HTTP_400_BAD_REQUEST, "Bad Request")

        logger.info(
            "webhook_received",
            extra={
                "route": route,
                "session_id": reference.session_id,
                "credential_index": signature_result.matched_index,
                "payload_size": len(raw_body),
            },
        )

        client: VeriffClientProtocol = request.app.state.veriff_client
        if get_veriff_settings().webhook_processing_mode == "async":
            schedule_processing_task(
                route=route,
                session_id=reference.session_id,
                correlation_id=correlation_id,
                coroutine=_process_safe(client, handler_cls, reference, route),
            )
            return JSONResponse(
                content={"status": "received", "correlation_id": correlation_id},
                status_code=status.HTTP_200_OK,
            )

        try:
            result = await process_webhook(client, handler_cls, reference)
        except Exception:
            logger.exception(
                "webhook_processing_failed",
                extra={"route": route, "session_id": reference.session_id},
            )
            return _error_response(
                status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error"
            )
        return _result_response(result)


async def process_webhook(
    client: VeriffClientProtocol,
    handler_cls: type[WebhookHandler],
    reference: SessionReference,
) -> HandlerResult:
    """Prepara o SharePoint, executa o handler e fecha a conexão."""
    store = create_document_store()
    try:
        await store.prepare()
        handler = build_webhook_handler(handler_cls, client, store)
        return await handler.execute(reference)
    finally:
        await store.aclose()


async def _process_safe(
    client: VeriffClientProtocol,
    handler_cls: type[WebhookHandler],
    reference: SessionReference,
    route: str,
) -> None:
    """Processamento em background sem propagar exceções."""
    try:
        result = await process_webhook(client, handler_cls, reference)
    except Exception:
        logger.exception(
            "webhook_processing_failed",
            extra={"route": route, "session_id": reference.session_id, "mode": "async"},
        )
        return
    logger.info(
        "webhook_processed",
        extra={"route": route, "session_id": result.session_id, "status": str(result.status)},
    )


def _result_response(result: HandlerResult) -> JSONResponse:
    if result.uploaded:
        return JSONResponse(
            content={
                "message": "success",
                "session_id": result.session_id,
                "documents": result.documents,
                "media_files": result.media_files,
            },
            status_code=status.HTTP_200_OK,
        )
    return _error_response(status.HTTP_404_NOT_FOUND, _NOT_FOUND_MESSAGES[result.status])


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(content={"error": message}, status_code=status_code)
