"""FastAPI application exposing the desktop backend commands over HTTP."""

from __future__ import annotations

from pathlib import Path

from fastapi import Depends, FastAPI, File, Form, HTTPException, UploadFile
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from pdftablex import (
    ExtractionRequest,
    ExtractionResult,
    ExtractorConfig,
    FailureKind,
    PDFTableXError,
    TableExtractor,
    current_profile,
    extract_statement,
    locate_runtime,
)
from pdftablex.exceptions import (
    ConfigurationError,
    ExtractionTimeoutError,
    HostCommandError,
    IncorrectPasswordError,
    InvalidDocumentError,
    PasswordRequiredError,
    RuntimeUnavailableError,
)
from pdftablex.host import get_app_version, open_file, open_folder, save_file

app = FastAPI(title="pdftablex API", version=get_app_version())

_FAILURE_STATUS: dict[FailureKind, int] = {
    FailureKind.TOOL_REPORTED_ERROR: 422,
    FailureKind.IO_ERROR: 400,
    FailureKind.RUNTIME_UNAVAILABLE: 503,
    FailureKind.UNSUPPORTED_PLATFORM: 503,
    FailureKind.TIMED_OUT: 504,
}


class ExtractPayload(BaseModel):
    document_path: str = Field(..., description="Statement PDF on the local filesystem.")
    output_path: str = Field(..., description="Where the CSV should be written.")
    password: str | None = Field(None, description="Password for protected statements.")


class PathPayload(BaseModel):
    path: str


def get_extractor() -> TableExtractor:
    """Build an extractor from the environment for each request."""

    try:
        return TableExtractor(ExtractorConfig.from_env())
    except ConfigurationError as exc:
        raise HTTPException(status_code=503, detail=str(exc)) from exc


def _result_response(result: ExtractionResult) -> JSONResponse:
    if result.kind is None:
        return JSONResponse(result.to_dict())
    return JSONResponse(result.to_dict(), status_code=_FAILURE_STATUS[result.kind])


@app.get("/health", response_class=JSONResponse)
async def health() -> dict[str, str]:
    """Lightweight health endpoint for uptime checks."""
    return {"status": "ok"}


@app.get("/version")
async def version() -> dict[str, str]:
    return {"version": get_app_version()}


@app.get("/runtime")
async def runtime(extractor: TableExtractor = Depends(get_extractor)) -> dict[str, object]:
    """Report the platform profile and the runtime an extraction would use."""

    profile = current_profile()
    config = extractor.config
    payload: dict[str, object] = {
        "platform": profile.describe(),
        "bundle": profile.runtime_bundle_id,
        "artifact_path": str(config.artifact_path),
        "artifact_present": config.artifact_path.is_file(),
    }
    try:
        location = locate_runtime(profile, config.resource_root, runtime_dir=config.runtime_dir)
    except ConfigurationError as exc:
        raise HTTPException(status_code=503, detail=str(exc)) from exc
    payload.update(
        executable_path=location.executable_path,
        origin=location.origin.value,
        probed=list(location.probed),
    )
    return payload


@app.post("/extract")
async def extract_pdf_tables(
    payload: ExtractPayload,
    extractor: TableExtractor = Depends(get_extractor),
) -> JSONResponse:
    """Run Tabula on a local PDF and return the structured result.

    The subprocess wait happens on a worker thread so the event loop stays
    responsive while Tabula runs.
    """

    request = ExtractionRequest(payload.document_path, payload.output_path, payload.password)
    result = await run_in_threadpool(extractor.extract, request)
    return _result_response(result)


@app.post("/statement")
async def parse_statement(
    file: UploadFile = File(..., description="Statement PDF"),
    password: str | None = Form(None, description="Password for protected statements."),
    extractor: TableExtractor = Depends(get_extractor),
) -> dict[str, object]:
    """Extract and parse an uploaded statement into transactions."""

    contents = await file.read()
    if not contents:
        raise HTTPException(status_code=400, detail=f"File '{file.filename}' is empty.")

    try:
        statement = await run_in_threadpool(
            extract_statement,
            contents,
            password,
            extractor=extractor,
        )
    except PasswordRequiredError as exc:
        raise HTTPException(status_code=401, detail=str(exc)) from exc
    except IncorrectPasswordError as exc:
        raise HTTPException(status_code=403, detail=str(exc)) from exc
    except InvalidDocumentError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except ExtractionTimeoutError as exc:
        raise HTTPException(status_code=504, detail=str(exc)) from exc
    except (RuntimeUnavailableError, ConfigurationError) as exc:
        raise HTTPException(status_code=503, detail=str(exc)) from exc
    except PDFTableXError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc

    statement.file_name = Path(file.filename or "statement.pdf").name
    return statement.to_dict()


@app.post("/save")
async def save_export(
    file: UploadFile = File(..., description="Exported content"),
    destination: str = Form(..., description="Target path chosen by the user."),
    file_type: str = Form(..., description="Either 'csv' or 'xlsx'."),
) -> dict[str, str]:
    contents = await file.read()
    try:
        message = await run_in_threadpool(save_file, contents, destination, file_type)
    except HostCommandError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return {"message": message}


@app.post("/open-file")
async def open_file_endpoint(payload: PathPayload) -> dict[str, str]:
    try:
        await run_in_threadpool(open_file, payload.path)
    except HostCommandError as exc:
        raise HTTPException(status_code=404 if str(exc) == "File not found" else 500, detail=str(exc)) from exc
    return {"status": "opened"}


@app.post("/open-folder")
async def open_folder_endpoint(payload: PathPayload) -> dict[str, str]:
    try:
        folder = await run_in_threadpool(open_folder, payload.path)
    except HostCommandError as exc:
        raise HTTPException(status_code=500, detail=str(exc)) from exc
    return {"status": "opened", "path": str(folder)}
