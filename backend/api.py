"""
FastAPI application: REST API for PDF Notes.

Endpoints
---------
GET    /api/health                       Health check
POST   /api/notes/generate               Upload a PDF and generate notes
GET    /api/notes                        List saved notes (newest first)
DELETE /api/notes                        Delete every saved note
POST   /api/notes/import                 Import a JSON note export
GET    /api/notes/{note_id}              Get one saved note
DELETE /api/notes/{note_id}              Delete one saved note
GET    /api/notes/{note_id}/stats        Keyword frequencies for a note
GET    /api/notes/{note_id}/export/{fmt} Download a note as pdf/docx/txt/json
GET    /api/settings                     Read app settings
PUT    /api/settings                     Replace app settings
GET    /api/backup                       Download a JSON backup of everything
POST   /api/annotate                     Split text into keyword segments
POST   /api/keywords/frequencies         Rank keywords by frequency in a corpus
"""

from __future__ import annotations

from datetime import date
from typing import Optional
from urllib.parse import quote

from fastapi import Depends, FastAPI, File, Form, HTTPException, Request, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from loguru import logger
from pydantic import ValidationError

from backend.schemas import (
    AnnotateRequest,
    AnnotateResponse,
    FrequencyRequest,
    GenerateResponse,
    HealthResponse,
    KeywordFrequencySchema,
    NoteSummary,
    SegmentSchema,
)
from backend.storage import BlobStore, NoteLibrary
from config import GEMINI_API_KEY, configure_logging
from modules.analytics import KeywordFrequency, frequencies, keyword_stats, reading_time_minutes
from modules.errors import (
    ExtractionError,
    GenerationInProgress,
    InputRejected,
    NotesError,
    SummarizationError,
)
from modules.exporters import EXPORT_FORMATS, export_filename, note_from_json
from modules.keywords import Match, annotate, parse_custom_keywords
from modules.models import AppSettings, ProcessingOptions, SavedNote
from modules.pipeline import NotePipeline, Summarizer
from modules.summarizer import GeminiSummarizer


# ═════════════════════════════════════════════════════════════════════════════
# App
# ═════════════════════════════════════════════════════════════════════════════

configure_logging()

app = FastAPI(
    title="PDF Notes API",
    version="1.0.0",
    description="REST API for turning PDFs into structured, keyword-aware notes.",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Most specific first.
_ERROR_STATUS: list[tuple[type[NotesError], int]] = [
    (GenerationInProgress, 409),
    (InputRejected, 400),
    (ExtractionError, 422),
    (SummarizationError, 502),
]


@app.exception_handler(NotesError)
def notes_error_handler(request: Request, exc: NotesError) -> JSONResponse:
    status = next((code for cls, code in _ERROR_STATUS if isinstance(exc, cls)), 500)
    logger.warning(f"{request.method} {request.url.path} -> {status}: {exc.user_message}")
    return JSONResponse(status_code=status, content={"detail": exc.user_message})


# ── Dependencies ─────────────────────────────────────────────────────────────
_library: Optional[NoteLibrary] = None


def get_library() -> NoteLibrary:
    global _library
    if _library is None:
        _library = NoteLibrary(BlobStore())
    return _library


def get_summarizer() -> Summarizer:
    return GeminiSummarizer()


def _frequency_schema(freq: KeywordFrequency) -> KeywordFrequencySchema:
    return KeywordFrequencySchema(
        keyword=freq.keyword,
        count=freq.count,
        provenance=freq.provenance.value if freq.provenance else None,
    )


def _require_note(library: NoteLibrary, note_id: str) -> SavedNote:
    note = library.get_note(note_id)
    if note is None:
        raise HTTPException(404, "Note not found.")
    return note


# ═════════════════════════════════════════════════════════════════════════════
# Routes
# ═════════════════════════════════════════════════════════════════════════════

# ── Health ───────────────────────────────────────────────────────────────────

@app.get("/api/health", response_model=HealthResponse)
def health_check():
    """Return API health and provider status."""
    return HealthResponse(status="ok", gemini_configured=bool(GEMINI_API_KEY))


# ── Generate ─────────────────────────────────────────────────────────────────

@app.post("/api/notes/generate", response_model=GenerateResponse)
def generate_notes(
    file: UploadFile = File(...),
    extractIntroduction: bool = Form(True),
    extractSummary: bool = Form(True),
    extractConclusion: bool = Form(True),
    customKeywords: str = Form(""),
    summarizationLevel: str = Form("detailed"),
    library: NoteLibrary = Depends(get_library),
    summarizer: Summarizer = Depends(get_summarizer),
):
    """Upload a PDF, generate notes, and auto-save them if enabled."""
    try:
        options = ProcessingOptions(
            extract_introduction=extractIntroduction,
            extract_summary=extractSummary,
            extract_conclusion=extractConclusion,
            custom_keywords=customKeywords,
            summarization_level=summarizationLevel,
        )
    except ValidationError as exc:
        raise HTTPException(422, "summarizationLevel must be 'brief' or 'detailed'.") from exc

    content = file.file.read()
    result = NotePipeline(summarizer).run(content, options, filename=file.filename)

    reading_time = reading_time_minutes(result)
    saved = None
    if library.get_settings().auto_save:
        saved = library.save_note(result, reading_time)

    stats = keyword_stats(result, options.user_keywords)
    return GenerateResponse(
        note=result,
        saved_note=saved,
        reading_time_minutes=reading_time,
        keyword_stats=[_frequency_schema(f) for f in stats],
    )


# ── Notes CRUD ───────────────────────────────────────────────────────────────

@app.get("/api/notes", response_model=list[NoteSummary])
def list_notes(q: str = "", library: NoteLibrary = Depends(get_library)):
    """List saved notes, optionally filtered by title/keyword."""
    return library.search_notes(q)


@app.delete("/api/notes")
def clear_notes(library: NoteLibrary = Depends(get_library)):
    library.clear_all_notes()
    return {"detail": "All notes deleted."}


@app.post("/api/notes/import", response_model=SavedNote)
def import_note(file: UploadFile = File(...), library: NoteLibrary = Depends(get_library)):
    """Import a note previously exported as JSON."""
    note = note_from_json(file.file.read())
    return library.import_note(note, reading_time_minutes(note))


@app.get("/api/notes/{note_id}", response_model=SavedNote)
def get_note(note_id: str, library: NoteLibrary = Depends(get_library)):
    return _require_note(library, note_id)


@app.delete("/api/notes/{note_id}")
def delete_note(note_id: str, library: NoteLibrary = Depends(get_library)):
    if not library.delete_note(note_id):
        raise HTTPException(404, "Note not found.")
    return {"detail": "Note deleted.", "id": note_id}


@app.get("/api/notes/{note_id}/stats", response_model=list[KeywordFrequencySchema])
def note_stats(
    note_id: str,
    userKeywords: str = "",
    library: NoteLibrary = Depends(get_library),
):
    """Keyword frequencies over a saved note's sections."""
    note = _require_note(library, note_id)
    stats = keyword_stats(note, parse_custom_keywords(userKeywords))
    return [_frequency_schema(f) for f in stats]


@app.get("/api/notes/{note_id}/export/{fmt}")
def export_note(note_id: str, fmt: str, library: NoteLibrary = Depends(get_library)):
    """Download a saved note in one of the export formats."""
    spec = EXPORT_FORMATS.get(fmt)
    if spec is None:
        raise HTTPException(404, f"Unknown export format {fmt!r}.")
    note = _require_note(library, note_id).as_note()
    filename = export_filename(note, spec.ext)
    return Response(
        content=spec.render(note),
        media_type=spec.mime,
        headers={"Content-Disposition": f"attachment; filename*=UTF-8''{quote(filename)}"},
    )


# ── Settings & backup ────────────────────────────────────────────────────────

@app.get("/api/settings", response_model=AppSettings)
def read_settings(library: NoteLibrary = Depends(get_library)):
    return library.get_settings()


@app.put("/api/settings", response_model=AppSettings)
def update_settings(settings: AppSettings, library: NoteLibrary = Depends(get_library)):
    library.save_settings(settings)
    return settings


@app.get("/api/backup")
def backup(library: NoteLibrary = Depends(get_library)):
    """Download every note plus settings as one JSON document."""
    filename = f"PDF_Notes_Backup_{date.today().isoformat()}.json"
    return Response(
        content=library.export_data(),
        media_type="application/json",
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )


# ── Keyword analysis ─────────────────────────────────────────────────────────

@app.post("/api/annotate", response_model=AnnotateResponse)
def annotate_text(req: AnnotateRequest):
    """Split text into plain and keyword-match segments."""
    segments = []
    for seg in annotate(req.text, req.user_keywords, req.ai_keywords):
        if isinstance(seg, Match):
            segments.append(
                SegmentSchema(
                    kind="match",
                    text=seg.text,
                    keyword=seg.keyword,
                    provenance=seg.provenance.value,
                    is_acronym=seg.is_acronym,
                )
            )
        else:
            segments.append(SegmentSchema(kind="text", text=seg.text))
    return AnnotateResponse(segments=segments)


@app.post("/api/keywords/frequencies", response_model=list[KeywordFrequencySchema])
def keyword_frequencies(req: FrequencyRequest):
    """Rank keywords by whole-word occurrences in a corpus."""
    return [_frequency_schema(f) for f in frequencies(req.corpus, req.keywords)]
