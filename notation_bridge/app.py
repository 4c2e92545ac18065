from __future__ import annotations

from fastapi import FastAPI
from fastapi.responses import JSONResponse

from .constants import APP_NAME, BRIDGE_HOST, BRIDGE_PORT
from .inspection import inspect_notation, precheck_response, quick_validate
from .logger_config import logger
from .models import TextRequest, TextResponse
from .text_utils import quick_fix
from .utils import summarize_text
from .validator import validate_and_fix

app = FastAPI(title=APP_NAME)


@app.get("/health")
def health() -> dict:
    return {"status": "ok"}


@app.post("/validate")
def validate(request: TextRequest) -> JSONResponse:
    logger.info("Validate: %d chars", len(request.text))
    result = validate_and_fix(request.text)
    logger.info(
        "Validate result: success=%s warnings=%d fixed=%d",
        result.success,
        len(result.warnings),
        len(result.fixed),
    )
    if result.errors:
        logger.info("Validate errors: %s", summarize_text("; ".join(result.errors)))
    return JSONResponse(content=result.model_dump())


@app.post("/quick-validate")
def quick_validate_route(request: TextRequest) -> JSONResponse:
    return JSONResponse(content=quick_validate(request.text).model_dump())


@app.post("/inspect")
def inspect(request: TextRequest) -> JSONResponse:
    stats = inspect_notation(request.text)
    logger.info("Inspect: bars=%d voices=%d ratio=%.1f", stats.bars, stats.voices, stats.compression_ratio)
    return JSONResponse(content=stats.model_dump())


@app.post("/precheck")
def precheck(request: TextRequest) -> JSONResponse:
    result = precheck_response(request.text)
    if not result.valid:
        logger.info("Precheck rejected: %s", result.error)
    return JSONResponse(content=result.model_dump())


@app.post("/quick-fix")
def quick_fix_route(request: TextRequest) -> JSONResponse:
    return JSONResponse(content=TextResponse(text=quick_fix(request.text)).model_dump())


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=BRIDGE_HOST, port=BRIDGE_PORT, log_level="info")
