"""FastAPI application exposing the registry webhook."""

from fastapi import FastAPI

from registry.api.routers import webhook

app = FastAPI(
    title="DApp Registry Backend Factory",
    description="Webhook receiver for the dapp catalog toolkit",
    version="0.1.0",
)

app.include_router(webhook.router)


@app.get("/")
async def root():
    """Liveness message."""
    return {"message": "DApp Registry Backend Factory is running!"}
