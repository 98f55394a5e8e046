from fastapi import FastAPI
import logging

from awgen.api.routes import router

app = FastAPI(title="awgen-script-host", version="0.1.0")
app.include_router(router)
# Configure logging
logging.basicConfig(level=logging.DEBUG)
logger = logging.getLogger(__name__)


@app.get("/info")
async def info() -> dict[str, str]:
    return {"name": "awgen-script-host", "version": "0.1.0"}
