"""
Pytest configuration and fixtures.
"""
import os
import tempfile
import pytest

# 테스트용 환경변수 (app.config import 전에 설정)
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SECRET_KEY"] = "test-secret-key-for-awards-api-0123456789"
os.environ["DEBUG"] = "false"
os.environ["UPLOAD_DIR"] = tempfile.mkdtemp(prefix="awards-uploads-")
os.environ["LOG_DIR"] = tempfile.mkdtemp(prefix="awards-logs-")

from app.database import Base, SessionLocal, engine  # noqa: E402
from app.models import user, category, nominee, media, vote  # noqa: E402,F401
from app.models.media import MediaStatus, MediaKind  # noqa: E402
from app.models.user import UserRole  # noqa: E402
from app.core.security import create_access_token  # noqa: E402
from app.services import category_service, nominee_service, media_service, user_service  # noqa: E402


@pytest.fixture(scope='function', autouse=True)
def clean_db():
    """Drop and recreate all tables so each test starts from a clean slate."""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture(scope='function')
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope='function')
def client():
    """Create test client (startup events are not run; tables come from clean_db)."""
    from fastapi.testclient import TestClient
    from main import app
    return TestClient(app)


@pytest.fixture(scope='function')
def voter(db):
    return user_service.create_user(db, username='voter', email='voter@example.com', password='password')


@pytest.fixture(scope='function')
def other_voter(db):
    return user_service.create_user(db, username='other', email='other@example.com', password='password')


@pytest.fixture(scope='function')
def admin(db):
    return user_service.create_user(
        db, username='boss', email='boss@example.com', password='password', role=UserRole.ADMIN
    )


def auth_headers(user):
    token = create_access_token(data={"sub": user.id, "role": user.role})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def voter_headers(voter):
    return auth_headers(voter)


@pytest.fixture
def admin_headers(admin):
    return auth_headers(admin)


@pytest.fixture
def make_category(db, admin):
    def _make(**overrides):
        data = {"name": "Best Picture"}
        data.update(overrides)
        return category_service.create_category(db, data, created_by=admin.id)
    return _make


@pytest.fixture
def make_nominee(db, admin):
    def _make(category, name="Nominee", **fields):
        fields["name"] = name
        approved_media_id = fields.pop("approved_media_id", None)
        return nominee_service.create_nominee(
            db, category.id, fields, approved_media_id=approved_media_id, actor_id=admin.id
        )
    return _make


@pytest.fixture
def make_media(db, voter):
    def _make(owner=None, kind=MediaKind.PHOTO, status=None, filename=None, reviewer=None):
        owner = owner or voter
        ext = ".png" if kind == MediaKind.PHOTO else ".mp4"
        media = media_service.create_media_upload(
            db,
            user_id=owner.id,
            filename=filename or f"{owner.username}-{kind.value}{ext}",
            original_filename=f"original{ext}",
            media_type=kind,
            file_size=1024,
            description="candidate clip"
        )
        if status is not None:
            reviewer_id = reviewer.id if reviewer else owner.id
            media = media_service.review_media(db, media.id, status.value, reviewer_id)
        return media
    return _make


@pytest.fixture
def ballot(make_category, make_nominee):
    """Category C (max 2, single vote) with nominees N1, N2."""
    c = make_category(name="Album of the Year", max_nominees=2)
    n1 = make_nominee(c, name="N1", display_order=1)
    n2 = make_nominee(c, name="N2", display_order=2)
    return c, n1, n2


@pytest.fixture
def headers_for():
    return auth_headers
