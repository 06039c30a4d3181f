import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from config.logging_config import setup_logging
from config.settings import settings
from database.db import create_tables

setup_logging()
logger = logging.getLogger(__name__)

# ✅ 미들웨어 임포트
from middlewares.timing import TimingMiddleware
from middlewares.error_handler import add_error_handlers

# ✅ 라우터 임포트
from routers import (
    classes, config, courses, grades, pdf_reports,
    report_cards, students, subjects, teachers,
)

app = FastAPI(
    title=settings.APP_TITLE,
    description=settings.APP_DESCRIPTION,
    version=settings.APP_VERSION
)

# ✅ CORS 설정
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ✅ 요청 지연 측정 미들웨어 (응답 헤더 X-Latency-Ms 추가)
app.add_middleware(TimingMiddleware)

# ✅ 전역 에러 핸들러 등록 (일관된 JSON 에러 포맷)
add_error_handlers(app)

# ✅ /v1 프리픽스 라우터 등록
app.include_router(classes.router,        prefix="/v1")
app.include_router(students.router,       prefix="/v1")
app.include_router(teachers.router,       prefix="/v1")
app.include_router(subjects.router,       prefix="/v1")
app.include_router(courses.router,        prefix="/v1")
app.include_router(grades.router,         prefix="/v1")
app.include_router(report_cards.router,   prefix="/v1")   # ✅ 성적표 JSON
app.include_router(pdf_reports.router,    prefix="/v1")   # ✅ 성적표 PDF
app.include_router(config.router,         prefix="/v1")


# ✅ 헬스체크 엔드포인트
@app.get("/health")
def health_check():
    return {"status": "ok", "message": "API is running"}


@app.on_event("startup")
def _create_tables():
    if settings.DB_AUTO_CREATE:
        create_tables()
        logger.info("Database tables ensured")


# ✅ 루트 엔드포인트
@app.get("/")
def root():
    return {"message": f"{settings.APP_TITLE} - {settings.SCHOOL_NAME}"}
