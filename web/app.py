"""
Web API for the flight logbook.

Upload the logbook spreadsheet, assign role / time of day / page to
flights, and read back per-page totals.

Usage:
    python -m uvicorn web.app:app --reload
    # Open http://localhost:8000
"""

import os
import sys
import shutil
import tempfile
from io import StringIO
from pathlib import Path
from typing import List, Optional

from fastapi import FastAPI, UploadFile, File, HTTPException
from fastapi.responses import FileResponse, HTMLResponse, JSONResponse
from pydantic import BaseModel
from starlette.background import BackgroundTask

# Ensure project root is on the path
PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from flightbook.assignments import count_incomplete
from flightbook.page_summary import compute_page_summaries, grand_totals
from flightbook.report import format_totals, write_summary_workbook
from flightbook.store import load_flights, save_flights, reimport, assign

app = FastAPI(title="Flight Logbook")

STORE_PATH = Path(os.environ.get("FLIGHTBOOK_STORE", PROJECT_ROOT / "flights.json"))

ALLOWED_EXTENSIONS = ('.xlsx', '.xlsm', '.csv', '.tsv', '.txt')


class AssignRequest(BaseModel):
    ids: List[int]
    role: Optional[str] = None
    time_of_day: Optional[str] = None
    page: Optional[int] = None


def _summary_payload(summaries):
    return {
        str(page): {
            key: {**summary[key], 'labels': format_totals(summary[key])}
            for key in ('current', 'previous', 'total')
        }
        for page, summary in summaries.items()
    }


@app.get("/", response_class=HTMLResponse)
async def index():
    """Serve the main page."""
    html_path = Path(__file__).parent / "index.html"
    if not html_path.exists():
        return HTMLResponse("<h1>Flight Logbook</h1><p>See /docs for the API.</p>")
    return HTMLResponse(html_path.read_text(encoding="utf-8"))


@app.get("/api/flights")
async def get_flights():
    """Return the stored flights and how many still lack an assignment."""
    try:
        flights = load_flights(STORE_PATH)
    except ValueError as e:
        raise HTTPException(500, str(e))
    return {'flights': flights, 'incomplete': count_incomplete(flights)}


@app.post("/api/import")
async def import_logbook(file: UploadFile = File(...)):
    """Import an uploaded spreadsheet, keeping earlier assignments."""
    if not file.filename:
        raise HTTPException(400, "No file uploaded")

    ext = os.path.splitext(file.filename)[1].lower()
    if ext not in ALLOWED_EXTENSIONS:
        raise HTTPException(400, f"Unsupported file type: {ext}. Use Excel, CSV or TSV.")

    work_dir = tempfile.mkdtemp(prefix="flightbook_")
    try:
        upload_path = os.path.join(work_dir, os.path.basename(file.filename))
        with open(upload_path, "wb") as f:
            f.write(await file.read())

        # Capture stdout
        old_stdout = sys.stdout
        sys.stdout = log_capture = StringIO()
        try:
            _, stats = reimport(STORE_PATH, upload_path)
        finally:
            sys.stdout = old_stdout
    except ValueError as e:
        return JSONResponse(status_code=400, content={'success': False, 'error': str(e)})
    except Exception as e:
        return JSONResponse(status_code=500, content={'success': False, 'error': str(e)})
    finally:
        shutil.rmtree(work_dir, ignore_errors=True)

    return {'success': True, 'stats': stats, 'log': log_capture.getvalue()}


@app.post("/api/assign")
async def assign_flights(request: AssignRequest):
    """Set role / time of day / page on the selected flights."""
    try:
        flights = assign(
            load_flights(STORE_PATH), request.ids,
            role=request.role, time_of_day=request.time_of_day, page=request.page,
        )
    except ValueError as e:
        raise HTTPException(400, str(e))
    save_flights(STORE_PATH, flights)
    return {'success': True, 'incomplete': count_incomplete(flights)}


@app.get("/api/summaries")
async def get_summaries():
    """Per-page totals with carry-forward, plus the grand total."""
    try:
        flights = load_flights(STORE_PATH)
    except ValueError as e:
        raise HTTPException(500, str(e))
    summaries = compute_page_summaries(flights)
    totals = grand_totals(summaries)
    return {
        'pages': _summary_payload(summaries),
        'grand_total': {**totals, 'labels': format_totals(totals)},
    }


@app.get("/api/export")
async def export_summary():
    """Download flights and page totals as an Excel workbook."""
    flights = load_flights(STORE_PATH)
    if not flights:
        raise HTTPException(404, "No flights imported yet")

    out_dir = tempfile.mkdtemp(prefix="flightbook_export_")
    output_file = os.path.join(out_dir, "Page_Summary.xlsx")

    old_stdout = sys.stdout
    sys.stdout = StringIO()
    try:
        write_summary_workbook(flights, output_file)
    except Exception:
        shutil.rmtree(out_dir, ignore_errors=True)
        raise
    finally:
        sys.stdout = old_stdout

    # Remove the workbook once it has been sent
    return FileResponse(
        output_file,
        media_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        filename="Page_Summary.xlsx",
        background=BackgroundTask(shutil.rmtree, out_dir, ignore_errors=True),
    )
