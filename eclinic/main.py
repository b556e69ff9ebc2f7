import logging
from contextlib import asynccontextmanager
from pathlib import Path
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware
from eclinic.config import get_settings
from eclinic.database import engine, init_db
from eclinic.exceptions import ClinicError
from eclinic.seed import seed_default_user, seed_demo_records
from eclinic.routers import auth, user, patients, consultations, medicines, dashboard, analytics, puroks

logger = logging.getLogger(__name__)

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: create tables then seed
    await init_db()
    await seed_default_user()
    if settings.seed_demo_data:
        await seed_demo_records()
    yield
    # Shutdown
    await engine.dispose()


app = FastAPI(
    title="E-clinic",
    description="Barangay Health Center patient records, inventory and analytics",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class NoCacheMiddleware(BaseHTTPMiddleware):
    """Add no-cache headers to API responses so browsers never show stale records."""
    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)
        if request.url.path.startswith("/api"):
            response.headers["Cache-Control"] = "no-store, no-cache, must-revalidate, proxy-revalidate, max-age=0"
            response.headers["Expires"] = "0"
            response.headers["Pragma"] = "no-cache"
        return response


app.add_middleware(NoCacheMiddleware)


@app.exception_handler(ClinicError)
async def clinic_error_handler(request: Request, exc: ClinicError):
    return JSONResponse(status_code=exc.status_code, content={"success": False, "message": exc.message})


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "message": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


app.include_router(auth.router, prefix="/api", tags=["Auth"])
app.include_router(user.router, prefix="/api", tags=["Profile"])
app.include_router(patients.router, prefix="/api/patients", tags=["Patients"])
app.include_router(consultations.router, prefix="/api/consultations", tags=["Consultations"])
app.include_router(medicines.router, prefix="/api/medicines", tags=["Medicines"])
app.include_router(dashboard.router, prefix="/api/dashboard", tags=["Dashboard"])
app.include_router(analytics.router, prefix="/api/analytics", tags=["Analytics"])
app.include_router(puroks.router, prefix="/api/puroks", tags=["Puroks"])


@app.get("/api/health")
async def health_check():
    return {"status": "healthy", "service": "eclinic"}


def mount_frontend(app: FastAPI, static_dir: Path) -> bool:
    """Serve a built front end with a catch-all fallback to its index.html."""
    index = static_dir / "index.html"
    if not index.is_file():
        logger.info("No front-end build at %s; serving the API only", static_dir)
        return False

    app.mount("/assets", StaticFiles(directory=static_dir / "assets", check_dir=False), name="assets")

    @app.get("/{full_path:path}", include_in_schema=False)
    async def spa_fallback(full_path: str):
        if full_path.startswith("api/"):
            return JSONResponse(status_code=404, content={"success": False, "message": "Not Found"})
        candidate = (static_dir / full_path).resolve()
        if full_path and candidate.is_file() and static_dir.resolve() in candidate.parents:
            return FileResponse(candidate)
        return FileResponse(index)

    return True


mount_frontend(app, Path(settings.static_dir))
