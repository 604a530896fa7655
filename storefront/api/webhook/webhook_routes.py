import logging
from http import HTTPStatus

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from storefront.config import get_webhook_secret

logger = logging.getLogger(__name__)

webhook_router = APIRouter(prefix="/webhook")


@webhook_router.post("/")
async def stripe_webhook(request: Request) -> JSONResponse:
    body = await request.body()
    sig = request.headers.get("stripe-signature")

    if not sig:
        return JSONResponse({"error": "No signature"}, status_code=HTTPStatus.BAD_REQUEST)

    webhook_secret = get_webhook_secret()
    if not webhook_secret:
        logger.warning("Stripe webhook secret is not set.")
        return JSONResponse(
            {"error": "Stripe webhook secret is not set"},
            status_code=HTTPStatus.BAD_REQUEST,
        )

    # TODO: verify sig against webhook_secret and dispatch the event by type
    logger.info("Accepted webhook payload of %d bytes without verification", len(body))
    return JSONResponse({"received": True}, status_code=HTTPStatus.ACCEPTED)
