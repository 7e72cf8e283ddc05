import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse

from kumiki.constants import EXAMPLE_ABBREVIATIONS
from kumiki.errors import AbbreviationError
from kumiki.expander import Expansion, expand, try_expand
from kumiki.preview import PREVIEW_CSP, build_preview_document
from kumiki.renderer import OutputOptions, RenderMode

logger = structlog.get_logger()

app = FastAPI(title="Abbreviation Expander")

# Allow any origin so an editor frontend can call the expander directly.
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


def error_response(error: AbbreviationError) -> JSONResponse:
    return JSONResponse({"error": error.to_dict()}, status_code=422)


@app.get("/expand")
async def expand_endpoint(abbreviation: str = "", compact: bool = False) -> JSONResponse:
    logger.info("expand_request", abbreviation=abbreviation, compact=compact)
    options = OutputOptions(
        mode=RenderMode.COMPACT if compact else RenderMode.FORMATTED
    )
    result = try_expand(abbreviation, options)
    if isinstance(result, AbbreviationError):
        return error_response(result)
    return JSONResponse(result.to_dict())


@app.get("/preview", response_model=None)
async def preview_endpoint(abbreviation: str = "") -> HTMLResponse | JSONResponse:
    result = try_expand(abbreviation)
    if isinstance(result, AbbreviationError):
        # never hand back a stale document for an invalid abbreviation
        return error_response(result)
    return HTMLResponse(
        build_preview_document(result.html),
        headers={"Content-Security-Policy": PREVIEW_CSP},
    )


@app.get("/examples")
async def examples_endpoint() -> JSONResponse:
    examples: list[dict[str, str]] = []
    for abbreviation in EXAMPLE_ABBREVIATIONS:
        expansion: Expansion = expand(abbreviation)
        examples.append({"abbreviation": abbreviation, "html": expansion.html})
    return JSONResponse(examples)


if __name__ == "__main__":
    import uvicorn

    from kumiki.log import configure_logging

    configure_logging()
    uvicorn.run(app, host="127.0.0.1", port=8000)

# Usage:
# python -m kumiki.server
