from fastapi import FastAPI

from trade_journal.logging_config import configure_logging
from trade_journal.routers import trades

# Configure logging at startup
configure_logging()

app = FastAPI(title="Trade Journal")

# Routers
app.include_router(trades.router, prefix="/trades", tags=["trades"])


@app.get("/health")
def health_check() -> dict[str, str]:
    return {"status": "ok"}
