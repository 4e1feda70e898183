import logging
from contextlib import asynccontextmanager
from pathlib import Path

import config
import crud
import database
import models
import schemas
import uvicorn
from errors import DuplicateCodeError
from fastapi import Depends, FastAPI, Form, Request
from fastapi.responses import PlainTextResponse, RedirectResponse
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from validators import is_valid_code, is_valid_url

# --- Logging ---
logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s  %(levelname)-8s  %(name)s  %(message)s",
)
logger = logging.getLogger("linkshort")

APP_DIR = Path(__file__).parent
templates = Jinja2Templates(directory=APP_DIR / "templates")


def get_base_url(request: Request) -> str:
    return config.PUBLIC_BASE_URL or f"{request.url.scheme}://{request.url.netloc}"


def render_index(request: Request, db: Session, error=None, success=None, status_code=200):
    links = crud.get_links(db)
    page = schemas.IndexPage(
        records=[schemas.LinkOut.model_validate(link) for link in links],
        total=crud.count_links(db),
        error=error,
        success=success,
        base_url=get_base_url(request),
    )
    return templates.TemplateResponse(request, "index.html", page.model_dump(), status_code=status_code)


def render_failure(request: Request, db: Session, error: str):
    """Re-render the list after a store failure; an unreadable store shows an empty list."""
    db.rollback()
    try:
        return render_index(request, db, error=error, status_code=500)
    except SQLAlchemyError:
        logger.exception("Failed to reload links after error")
        page = schemas.IndexPage(error=error, base_url=get_base_url(request))
        return templates.TemplateResponse(request, "index.html", page.model_dump(), status_code=500)


def create_app(database_url: str | None = None) -> FastAPI:
    engine = database.make_engine(database_url or config.DATABASE_URL)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        models.Base.metadata.create_all(bind=engine)
        yield
        engine.dispose()

    app = FastAPI(
        title="linkshort",
        description="Shorten long URLs, redirect through short codes and count visits.",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.engine = engine
    app.state.SessionLocal = database.make_session_factory(engine)

    app.mount("/static", StaticFiles(directory=APP_DIR / "static"), name="static")
    _register_routes(app)
    return app


def _register_routes(app: FastAPI) -> None:

    @app.get("/", include_in_schema=False)
    def list_links(request: Request, db: Session = Depends(database.get_db)):
        try:
            return render_index(request, db)
        except SQLAlchemyError:
            logger.exception("Failed to load links")
            return render_failure(request, db, "Error loading URLs")

    # Health check (useful for uptime monitors & load balancers)
    @app.get("/health", response_model=schemas.Health, include_in_schema=False)
    def health():
        return {"status": "ok", "env": config.ENVIRONMENT}

    @app.post("/shorten", include_in_schema=False)
    def shorten(
        request: Request,
        originalUrl: str = Form(""),
        customCode: str = Form(""),
        db: Session = Depends(database.get_db),
    ):
        link_in = schemas.LinkCreate(originalUrl=originalUrl, customCode=customCode)
        base = get_base_url(request)
        try:
            if not is_valid_url(link_in.original_url):
                return render_index(request, db, error="Please enter a valid URL")

            if link_in.custom_code:
                if not is_valid_code(link_in.custom_code):
                    return render_index(request, db, error="Invalid custom code")
                if crud.get_link(db, link_in.custom_code):
                    return render_index(request, db, error="Custom code already taken")

            existing = crud.get_link_by_url(db, link_in.original_url)
            if existing:
                return render_index(request, db, success=f"URL already shortened: {base}/{existing.short_code}")

            try:
                link = crud.create_link(db, link_in.original_url, link_in.custom_code)
            except DuplicateCodeError as e:
                if link_in.custom_code:
                    logger.info("Lost race for code %s", e.code)
                    return render_index(request, db, error="Custom code already taken")
                logger.error("Could not store a generated code, last tried %s", e.code)
                return render_failure(request, db, "Server error")
            logger.info("Created link %s -> %s", link.short_code, link.original_url)
            return render_index(request, db, success=f"Short URL created: {base}/{link.short_code}")
        except SQLAlchemyError:
            logger.exception("Failed to shorten %s", link_in.original_url)
            return render_failure(request, db, "Server error")

    @app.post("/delete/{link_id}", include_in_schema=False)
    def delete_link(link_id: str, db: Session = Depends(database.get_db)):
        try:
            if crud.delete_link(db, link_id):
                logger.info("Deleted link id=%s", link_id)
        except SQLAlchemyError:
            logger.exception("Failed to delete link id=%s", link_id)
            db.rollback()
            return PlainTextResponse("Server error", status_code=500)
        return RedirectResponse("/", status_code=302)

    @app.get("/{code}", include_in_schema=False)
    def redirect_code(code: str, db: Session = Depends(database.get_db)):
        try:
            link = crud.increment_click(db, code)
        except SQLAlchemyError:
            logger.exception("Failed to resolve %s", code)
            db.rollback()
            return PlainTextResponse("Server error", status_code=500)
        if not link:
            return PlainTextResponse("URL not found", status_code=404)
        return RedirectResponse(url=link.original_url, status_code=302)


app = create_app()

if __name__ == "__main__":
    uvicorn.run(app, host=config.HOST, port=config.PORT)
