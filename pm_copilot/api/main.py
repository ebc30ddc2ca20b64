import logging

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from pm_copilot.api.routes.analysis import analysis_validation_handler
from pm_copilot.api.routes.analysis import router as analysis_router
from pm_copilot.config import settings

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(
    title="PM Operations Copilot API",
    description="Claude-powered extraction of action items, risks and decisions",
    version="0.1.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:3000",
        "http://localhost:8501",
    ],
    allow_origin_regex=r"http://localhost:\d+",
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(analysis_router)
app.add_exception_handler(RequestValidationError, analysis_validation_handler)


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "healthy"}
