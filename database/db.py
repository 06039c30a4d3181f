from sqlalchemy import create_engine               # SQLAlchemy 엔진 생성 도구
from sqlalchemy.orm import declarative_base        # 모델의 Base 클래스
from sqlalchemy.orm import sessionmaker            # 세션 팩토리 함수
from sqlalchemy.pool import StaticPool

from config.settings import settings               # ✅ 환경변수 설정 파일 불러오기


def _engine_kwargs(url: str) -> dict:
    # SQLite(테스트용)는 스레드 체크 해제, 인메모리 DB는 단일 커넥션 공유
    if url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        if url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
        return kwargs
    return {"pool_pre_ping": True}


# ✅ 환경변수에서 DB 연결 URL을 불러와 엔진 생성
engine = create_engine(settings.DATABASE_URL, **_engine_kwargs(settings.DATABASE_URL))

# ✅ 세션 팩토리: DB 연결에 사용할 세션 생성기 정의
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# ✅ 모델 정의 시 상속할 Base 클래스 (Declarative 방식 사용)
Base = declarative_base()


# ✅ 요청 단위 DB 세션 (FastAPI Depends 용)
def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def create_tables():
    """모든 모델 테이블 생성 (DB_AUTO_CREATE / 테스트용)"""
    # 모델 등록 (import 시점에 Base.metadata에 추가됨)
    from models import classes, courses, grades, students, subjects, teachers  # noqa: F401
    Base.metadata.create_all(bind=engine)
