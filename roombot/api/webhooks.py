from __future__ import annotations

import json
import logging

from fastapi import APIRouter, BackgroundTasks, Request, Response
from pydantic import ValidationError

from roombot.application.dto.telegram_update import TelegramUpdateDTO
from roombot.core.config import settings
from roombot.infrastructure.telegram.webhook_verify import verify_secret_token
from roombot.wiring.dependencies import get_handle_update_use_case


router = APIRouter()
logger = logging.getLogger(__name__)

SECRET_HEADER = "X-Telegram-Bot-Api-Secret-Token"


@router.post("/webhooks/telegram")
async def telegram_webhook(
    request: Request,
    background_tasks: BackgroundTasks,
) -> Response:
    if not verify_secret_token(request.headers.get(SECRET_HEADER), settings.TELEGRAM_WEBHOOK_SECRET, settings.ENV):
        return Response(status_code=403)

    body = await request.body()
    try:
        payload = json.loads(body.decode("utf-8")) if body else {}
        update = TelegramUpdateDTO.model_validate(payload)
    except (ValueError, ValidationError):
        logger.exception("Failed to parse webhook body")
        return Response(status_code=400)

    try:
        use_case = get_handle_update_use_case()
        event = update.extract_event()
        if event is None:
            logger.info("Update ignored", extra={"update_id": update.update_id})
            return Response(status_code=200)

        logger.info("Update received", extra={"update_id": update.update_id, "event": type(event).__name__})
        background_tasks.add_task(use_case.handle, event)
    except Exception as e:
        # Telegram retries non-2xx responses; answering 200 avoids a retry storm.
        logger.exception("Error processing webhook update", extra={"error": str(e)})
    return Response(status_code=200)
