import logging

from fastapi import FastAPI

from storefront import config
from storefront.api.basket.basket_routes import basket_router
from storefront.api.product.product_routes import product_router
from storefront.api.sale.sale_routes import sale_router
from storefront.api.webhook.webhook_routes import webhook_router
from storefront.store.basket_store import BasketStore

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)


def create_app(basket_store: BasketStore | None = None) -> FastAPI:
    app = FastAPI(title="Storefront API")

    if basket_store is None:
        basket_store = BasketStore(config.build_storage(), key=config.BASKET_STORAGE_KEY)
    app.state.basket_store = basket_store

    app.include_router(basket_router)
    app.include_router(product_router)
    app.include_router(sale_router)
    app.include_router(webhook_router)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("storefront.main:app", host="0.0.0.0", port=8000)
