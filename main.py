"""
main.py  —  SEO Tag Analyzer  FastAPI Server
────────────────────────────────────────────
Fetches a page, scores its title / meta description / Open Graph /
Twitter Card tags and keeps a history of every analysis in memory.

HOW TO RUN LOCALLY:
  NODE_ENV=development python main.py
  or: NODE_ENV=development uvicorn main:app --reload --port 5000

URLS:
  /api/analyze              POST  →  Analyse a URL
  /api/analyses             GET   →  Analysis history (newest first)
  /api/analyses/{id}        GET   →  Single stored analysis
  /api/analyses/{id}/report GET   →  Dashboard payload (stats, previews, cards)
  /api/health               GET   →  Health check
  /docs                           →  Swagger API docs
"""
from __future__ import annotations
import time, logging
from contextlib import asynccontextmanager

from dotenv import load_dotenv

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from config     import ConfigError, load_settings
from core_async import FetchError, run_analysis_async
from report.summary import build_report
from scanner.seo_checker import AnalysisResult, SeoCheckResult
from schemas import (
    AnalyzeRequest, AnalysisResponse, StoredAnalysisModel,
    ChecksModel, SeoCheckModel, HealthResponse, ErrorResponse, ReportResponse,
)
from storage import AnalysisStorage, StoredAnalysis, get_storage

load_dotenv()

# ── Logging ───────────────────────────────────────────────────────────────────
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s  %(levelname)-8s  %(message)s",
    datefmt="%H:%M:%S",
)
log = logging.getLogger("seoanalyzer")

FETCH_ERROR_MESSAGE   = "Failed to fetch website content. Please check the URL and try again."
ANALYZE_ERROR_MESSAGE = "Failed to analyze website"
HISTORY_ERROR_MESSAGE = "Failed to fetch analysis history"
NOT_FOUND_MESSAGE     = "Analysis not found"


# ── Startup / Shutdown ────────────────────────────────────────────────────────
@asynccontextmanager
async def lifespan(app: FastAPI):
    # ConfigError propagates: the server refuses to start without NODE_ENV or with a bad PORT.
    settings = load_settings()
    app.state.settings = settings

    log.info("=" * 55)
    log.info("  SEO Tag Analyzer starting ...")
    log.info("  Environment:  {}".format(settings.node_env))
    if settings.session_secret_generated:
        log.warning("  SESSION_SECRET is not set. A random secret was generated for this run.")
    log.info("  Storage:      in-memory ({} analyses)".format(len(get_storage().list_analyses())))
    log.info("  Listening on: http://{}:{}".format(settings.host, settings.port))
    log.info("=" * 55)
    yield
    log.info("SEO Tag Analyzer shutting down.")


# ── FastAPI App ───────────────────────────────────────────────────────────────
app = FastAPI(
    title="SEO Tag Analyzer",
    description="""
## SEO Tag Analyzer

Fetch any page and score its **title**, **meta description**, **Open Graph**
and **Twitter Card** tags. Returns per-check verdicts, a 0–100 score and
prioritised recommendations.

| Method | Path | Description |
|--------|------|-------------|
| `POST` | `/api/analyze` | Analyse a URL |
| `GET` | `/api/analyses` | Analysis history, newest first |
| `GET` | `/api/analyses/{id}` | One stored analysis |
| `GET` | `/api/analyses/{id}/report` | Dashboard payload |
| `GET` | `/api/health` | Health check |
    """,
    version="1.0.0",
    lifespan=lifespan,
)

# ── CORS ──────────────────────────────────────────────────────────────────────
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ── Request timing log ────────────────────────────────────────────────────────
@app.middleware("http")
async def log_requests(request: Request, call_next):
    t0 = time.time()
    response = await call_next(request)
    ms = round((time.time() - t0) * 1000)
    if request.url.path.startswith("/api"):
        log.info("{:6}  {:<40}  {}  {}ms".format(
            request.method, str(request.url.path), response.status_code, ms))
    return response


# ── Validation errors → 400 ───────────────────────────────────────────────────
@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = []
    for err in exc.errors():
        loc = list(err.get("loc", ()))
        if loc and loc[0] == "body":
            loc = loc[1:]
        errors.append({
            "path":    loc,
            "message": str(err.get("msg", "")).removeprefix("Value error, "),
            "code":    str(err.get("type", "invalid")),
        })
    return JSONResponse(status_code=400, content={"message": "Invalid URL format", "errors": errors})


# ─────────────────────────────────────────────────────────────────────────────
# SYSTEM ENDPOINTS
# ─────────────────────────────────────────────────────────────────────────────

@app.get(
    "/api/health",
    response_model=HealthResponse,
    tags=["System"],
    summary="Health check",
)
async def health_check():
    return HealthResponse()


# ─────────────────────────────────────────────────────────────────────────────
# ANALYZER ENDPOINTS
# ─────────────────────────────────────────────────────────────────────────────

@app.post(
    "/api/analyze",
    response_model=AnalysisResponse,
    tags=["Analyzer"],
    summary="Analyse a page's SEO tags",
    description="""
Fetch the page (10 s timeout) and check:
- **Title**: presence and length (30–60 characters)
- **Meta description**: presence and length (150–160 characters)
- **Open Graph**: og:title, og:description, og:image, og:url
- **Twitter Cards**: twitter:card, twitter:title, twitter:description

The result is stored in history and returned.
    """,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid URL or page could not be fetched"},
        500: {"model": ErrorResponse, "description": "Analysis failed unexpectedly"},
    },
)
async def analyze_website(body: AnalyzeRequest, store: AnalysisStorage = Depends(get_storage)):
    url = body.url
    log.info("Analysis started   url={}".format(url))

    try:
        result = await run_analysis_async(url)
        record = store.create_analysis(result)
    except FetchError as e:
        log.warning("Fetch failed       url={}  reason={}".format(url, e.reason))
        return _error(400, FETCH_ERROR_MESSAGE)
    except Exception:
        log.exception("Analysis failed    url={}".format(url))
        return _error(500, ANALYZE_ERROR_MESSAGE)

    log.info("Analysis complete  id={}  score={}  recommendations={}".format(
        record.id, result.score, len(result.recommendations)))
    return _build_response(result)


# ─────────────────────────────────────────────────────────────────────────────
# HISTORY ENDPOINTS
# ─────────────────────────────────────────────────────────────────────────────

@app.get(
    "/api/analyses",
    response_model=list[StoredAnalysisModel],
    tags=["History"],
    summary="List stored analyses",
    description="Every analysis run since startup, most recent first.",
    responses={500: {"model": ErrorResponse}},
)
async def list_analyses(store: AnalysisStorage = Depends(get_storage)):
    try:
        records = store.list_analyses()
    except Exception:
        log.exception("Could not read analysis history")
        return _error(500, HISTORY_ERROR_MESSAGE)
    return [_build_record(r) for r in records]


@app.get(
    "/api/analyses/{analysis_id}",
    response_model=StoredAnalysisModel,
    tags=["History"],
    summary="Get a single analysis by ID",
    responses={404: {"model": ErrorResponse}},
)
async def get_analysis(analysis_id: str, store: AnalysisStorage = Depends(get_storage)):
    record = store.get_analysis(analysis_id)
    if record is None:
        return _error(404, NOT_FOUND_MESSAGE)
    return _build_record(record)


@app.get(
    "/api/analyses/{analysis_id}/report",
    response_model=ReportResponse,
    tags=["History"],
    summary="Dashboard payload for an analysis",
    description="""
Everything the results page renders:
- status and "x/y checks passed" per category
- pass / warning / fail totals
- Search Engine and Social Media section scores
- Google, Facebook and Twitter previews
- recommendation cards grouped by priority
    """,
    responses={404: {"model": ErrorResponse}},
)
async def get_analysis_report(analysis_id: str, store: AnalysisStorage = Depends(get_storage)):
    record = store.get_analysis(analysis_id)
    if record is None:
        return _error(404, NOT_FOUND_MESSAGE)
    return ReportResponse(id=record.id, created_at=record.created_at, **build_report(record.result))


# ─────────────────────────────────────────────────────────────────────────────
# HELPER FUNCTIONS
# ─────────────────────────────────────────────────────────────────────────────

def _build_response(result: AnalysisResult) -> AnalysisResponse:
    """Convert an engine AnalysisResult into the validated Pydantic response."""
    checks = result.checks
    return AnalysisResponse(
        url              = result.url,
        title            = result.title,
        meta_description = result.meta_description,
        og_tags          = result.og_tags,
        twitter_tags     = result.twitter_tags,
        all_meta_tags    = result.all_meta_tags,
        score            = result.score,
        checks           = ChecksModel(
            title            = [_check_model(c) for c in checks.title],
            meta_description = [_check_model(c) for c in checks.meta_description],
            open_graph       = [_check_model(c) for c in checks.open_graph],
            twitter_cards    = [_check_model(c) for c in checks.twitter_cards],
        ),
        recommendations  = list(result.recommendations or []),
    )


def _build_record(record: StoredAnalysis) -> StoredAnalysisModel:
    return StoredAnalysisModel(
        id         = record.id,
        created_at = record.created_at,
        **_build_response(record.result).model_dump(),
    )


def _check_model(check: SeoCheckResult) -> SeoCheckModel:
    return SeoCheckModel(
        name            = check.name,
        status          = check.status,
        message         = check.message,
        value           = check.value,
        character_count = check.character_count,
        recommendation  = check.recommendation,
    )


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"message": message})


# ─────────────────────────────────────────────────────────────────────────────
# LOCAL DEV ENTRY POINT
# ─────────────────────────────────────────────────────────────────────────────
if __name__ == "__main__":
    import uvicorn

    try:
        settings = load_settings()
    except ConfigError as e:
        log.error(str(e))
        raise SystemExit(1)

    uvicorn.run(
        "main:app",
        host      = settings.host,
        port      = settings.port,
        reload    = not settings.is_production,
        log_level = "info",
    )
