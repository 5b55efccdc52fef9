import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from backend.core import config, errors
from backend.database import init_db
from backend.routes import auth_routes, course_routes

logging.basicConfig(
    level=config.LOG_LEVEL,
    format='%(asctime)s %(levelname)s %(name)s: %(message)s',
)
logger = logging.getLogger(__name__)

app = FastAPI(title='Course Enrollment API')

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ALLOW_ORIGINS,
    allow_credentials=True,
    allow_methods=['*'],
    allow_headers=['*'],
)


@app.on_event('startup')
def initialize() -> None:
    config.validate_runtime_config()
    try:
        init_db()
    except SQLAlchemyError:
        logger.exception('Database initialization failed. Check DATABASE_URL and database credentials.')


@app.exception_handler(errors.ServiceError)
async def handle_service_error(request: Request, exc: errors.ServiceError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error('%s %s failed: %s', request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content={'detail': exc.message})


@app.exception_handler(RequestValidationError)
async def handle_request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    messages = exc.errors()
    detail = messages[0].get('msg', 'Invalid request.') if messages else 'Invalid request.'
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={'detail': detail.removeprefix('Value error, ')},
    )


@app.get('/')
def root():
    return {'status': 'Course Enrollment API Running'}


app.include_router(auth_routes.router, prefix='/api/user')
app.include_router(course_routes.router, prefix='/api/courses')
