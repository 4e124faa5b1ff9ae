import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException

from .api import ai, config, diseases, drugs, findings, medications, prescriptions, search, therapies
from .config import settings
from .database import init_db
from .utils.logging import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    init_db()
    logger.info("🚀 Prescriptions Manager démarré")
    yield
    logger.info("👋 Arrêt du serveur")


app = FastAPI(
    title="Prescriptions Manager",
    description="Gestion des ordonnances types : maladies, médicaments, produits, thérapies et constats.",
    version="0.1.0",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ==============================================================================
# Gestion des erreurs : toujours un corps {"error": "..."}
# ==============================================================================
@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.detail}, headers=exc.headers)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"error": "Requête invalide", "details": jsonable_encoder(exc.errors())},
    )


@app.exception_handler(IntegrityError)
async def integrity_exception_handler(request: Request, exc: IntegrityError):
    logger.warning(f"Contrainte violée sur {request.method} {request.url.path} : {exc.orig}")
    return JSONResponse(status_code=status.HTTP_409_CONFLICT, content={"error": f"Constraint violation: {exc.orig}"})


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(f"Erreur sur {request.method} {request.url.path}")
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"error": str(exc)})


# ==============================================================================
# Routes
# ==============================================================================
for module in (diseases, medications, drugs, therapies, findings, prescriptions, search, config, ai):
    app.include_router(module.router, prefix="/api")


@app.get("/health")
def health():
    """
    Endpoint pour vérifier que le service est en ligne.
    """
    return {"status": "ok", "timestamp": datetime.now(timezone.utc).isoformat()}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("prescriptions.main:app", host="0.0.0.0", port=8000, reload=True)
