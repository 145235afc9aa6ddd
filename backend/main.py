import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ministore import InvalidArgument, RecordNotFound, Schema

from config import get_settings
from models import MODELS, SEED_DATA

from endpoints.owners_endpoints import router as owners_router
from endpoints.pets_endpoints import router as pets_router
from endpoints.visits_endpoints import router as visits_router

settings = get_settings()
logging.basicConfig(level=settings.log_level)
logger = logging.getLogger("ministore.api")

app = FastAPI()

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RecordNotFound)
async def record_not_found_handler(request: Request, exc: RecordNotFound):
    logger.info(f"Not found on {request.url.path}: {exc}")
    return JSONResponse(status_code=404, content={"detail": str(exc)})


@app.exception_handler(InvalidArgument)
async def invalid_argument_handler(request: Request, exc: InvalidArgument):
    logger.warning(f"Invalid argument on {request.url.path}: {exc}")
    return JSONResponse(status_code=422, content={"detail": str(exc)})


def build_schema(seed=settings.seed_fixtures):
    schema = Schema(models=MODELS)
    if seed:
        schema.load_fixtures(SEED_DATA)
    return schema


app.state.schema = build_schema()

app.include_router(owners_router)
app.include_router(pets_router)
app.include_router(visits_router)
