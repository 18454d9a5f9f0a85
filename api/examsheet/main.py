"""
Main FastAPI Application
Controller layer that orchestrates the rendering, export and table services.
"""
import logging
import os
import tempfile
from pathlib import Path
from typing import Callable, Dict, List, Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, HTMLResponse, Response
from pydantic import BaseModel, Field

from examsheet.config import LOG_LEVEL, get_output_dir
from examsheet.errors import InvalidSelection, StructuralConflict
from examsheet.schemas import Exam, RenderConfig, RenderMode, TableGrid
from examsheet.services import table_grid
from examsheet.services.doc_generator import generate_docx
from examsheet.services.html_renderer import render_html
from examsheet.services.lms_export import render_moodle_xml
from examsheet.services.variants import make_variant, renumber_questions

logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger(__name__)

DOCX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"


def get_runtime_output_dir() -> Path:
    """Resolve output directory for local dev or serverless runtime."""
    if os.getenv("VERCEL"):
        return Path(tempfile.gettempdir()) / "examsheet-output"
    return get_output_dir()


class RenderRequest(BaseModel):
    exam: Exam
    config: RenderConfig = Field(default_factory=RenderConfig)
    mode: RenderMode = RenderMode.QUESTIONS
    renumber: bool = Field(False, description="Renumber questions 1..N before rendering")


class VariantRequest(BaseModel):
    exam: Exam
    variant_number: int = Field(..., ge=1)
    seed: Optional[int] = None


class TableOperationRequest(BaseModel):
    table: TableGrid
    selection: List[str] = Field(default_factory=list, description="Cell ids for merge")
    cell_id: Optional[str] = Field(None, description="Master cell id for split")
    index: Optional[int] = Field(None, description="Row/column index for removal (default: last)")


def _split(request: TableOperationRequest) -> TableGrid:
    if not request.cell_id:
        raise InvalidSelection("split requires cell_id")
    return table_grid.split(request.table, request.cell_id)


TABLE_OPERATIONS: Dict[str, Callable[[TableOperationRequest], TableGrid]] = {
    "merge": lambda request: table_grid.merge(request.table, request.selection),
    "split": _split,
    "add-row": lambda request: table_grid.add_row(request.table),
    "remove-row": lambda request: table_grid.remove_row(request.table, request.index),
    "add-column": lambda request: table_grid.add_column(request.table),
    "remove-column": lambda request: table_grid.remove_column(request.table, request.index),
}


# Initialize FastAPI App
app = FastAPI(
    title="Exam Sheet API",
    description="Exam document rendering to HTML, DOCX and Moodle XML",
    version="1.0.0"
)

# CORS Middleware (Allow all origins for development)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/")
async def read_root():
    """Return API status info."""
    return {"message": "Exam Sheet API is running."}


def _prepare(request: RenderRequest) -> Exam:
    return renumber_questions(request.exam) if request.renumber else request.exam


@app.post("/api/render-html")
async def render_html_endpoint(request: RenderRequest):
    """Render a question sheet or answer key as a standalone HTML document."""
    document = render_html(_prepare(request), request.config, request.mode)
    return HTMLResponse(content=document)


@app.post("/api/render-docx")
async def render_docx_endpoint(request: RenderRequest):
    """Render DOCX from an exam payload and return the file."""
    output_filename = f"exam_{os.urandom(4).hex()}.docx"
    runtime_output_dir = get_runtime_output_dir()
    runtime_output_dir.mkdir(parents=True, exist_ok=True)
    output_path = runtime_output_dir / output_filename

    try:
        generate_docx(_prepare(request), request.config, str(output_path), request.mode)
    except OSError as e:
        logger.error("Error writing DOCX: %s", e)
        raise HTTPException(status_code=500, detail=f"Internal error: {str(e)}")

    return FileResponse(
        str(output_path),
        filename=output_filename,
        media_type=DOCX_MEDIA_TYPE,
    )


@app.get("/download/{filename}")
async def download_file(filename: str):
    """
    Download a generated exam file.

    Args:
        filename: Name of the file to download.

    Returns:
        File response with the .docx file.
    """
    file_path = get_runtime_output_dir() / filename

    if Path(filename).name != filename or not file_path.exists():
        raise HTTPException(status_code=404, detail="File not found")

    return FileResponse(
        str(file_path),
        filename=filename,
        media_type=DOCX_MEDIA_TYPE
    )


@app.post("/api/export-moodle")
async def export_moodle(exam: Exam):
    """Export an exam as a Moodle XML question bank."""
    return Response(content=render_moodle_xml(exam), media_type="application/xml")


@app.post("/api/variant")
async def create_variant(request: VariantRequest):
    """Create a shuffled, renumbered variant of an exam."""
    variant = make_variant(request.exam, request.variant_number, request.seed)
    return {"exam": variant.model_dump(by_alias=True)}


@app.post("/api/table/{operation}")
async def table_operation(operation: str, request: TableOperationRequest):
    """
    Apply one structural operation to a table grid.

    Returns:
        JSON with the updated table.

    Raises:
        HTTPException: 404 for unknown operations, 409 when the operation would
            break a merged span, 422 for ineligible selections or indices.
    """
    handler = TABLE_OPERATIONS.get(operation)
    if handler is None:
        raise HTTPException(status_code=404, detail=f"Unknown table operation '{operation}'")

    try:
        table = handler(request)
    except StructuralConflict as e:
        raise HTTPException(status_code=409, detail=str(e))
    except (InvalidSelection, IndexError) as e:
        raise HTTPException(status_code=422, detail=str(e))

    return {"table": table.model_dump()}


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "service": "Exam Sheet API"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
