"""
Main FastAPI application bootstrap.
Configures middleware, error handlers and includes routers.
"""
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ec2_price_compare.core.config import config
from ec2_price_compare.api.errors import register_error_handlers
from ec2_price_compare.api.pricing import router as pricing_router
from ec2_price_compare.middleware.request_logging import RequestLoggingMiddleware


logger = logging.getLogger(__name__)

# Validate configuration on startup
try:
    config.validate()
except ValueError as error:
    # Fail fast with a clear, non-secret-bearing message
    raise RuntimeError(f"Configuration error: {error}") from error

logger.info(
    "Pricing configured for region=%s, china_region=%s, cny_to_usd_rate=%s",
    config.AWS_REGION,
    config.AWS_CN_REGION,
    config.CNY_TO_USD_RATE
)


app = FastAPI(
    title="EC2 Price Comparison",
    description="Compare EC2 instance prices across AWS regions, including China",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(RequestLoggingMiddleware)

register_error_handlers(app)

app.include_router(pricing_router)


@app.get("/health")
async def health() -> dict:
    """Liveness probe."""
    return {"status": "ok"}


def run() -> None:
    """Run the API server with uvicorn."""
    import uvicorn

    logging.basicConfig(level=config.LOG_LEVEL)
    logger.info(f"Server is running on port {config.PORT}")
    uvicorn.run(app, host="0.0.0.0", port=config.PORT)


if __name__ == "__main__":
    run()
