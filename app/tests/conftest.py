"""
Pytest configuration and fixtures
"""
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from sqlalchemy.engine import Engine
from app.main import app
from app.db.base import Base
from app.core.deps import get_db, get_geofence_config, get_photo_store
from app.core.security import hash_pin
from app.models import Employee, AttendanceEvent, AuditLog  # noqa: F401
from app.services.geofence import GeoPoint, GeofenceConfig
from app.services.photo_store import PhotoStore


# Use in-memory SQLite for testing
SQLALCHEMY_TEST_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

# Office used by API tests (London, 200 m)
TEST_OFFICE = GeoPoint(latitude=51.5074, longitude=-0.1278)
TEST_GEOFENCE = GeofenceConfig(office=TEST_OFFICE, radius_meters=200.0)


# Enable foreign keys for SQLite
@event.listens_for(Engine, "connect")
def set_sqlite_pragma(dbapi_conn, connection_record):
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="function")
def db():
    """Create a fresh database for each test"""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)

    db = TestingSessionLocal()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def uploads_dir(tmp_path):
    return tmp_path / "uploads"


@pytest.fixture(scope="function")
def client(db, uploads_dir):
    """Test client fixture with database, geofence and photo store overrides"""
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_geofence_config] = lambda: TEST_GEOFENCE
    app.dependency_overrides[get_photo_store] = lambda: PhotoStore(str(uploads_dir), max_bytes=1024)
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def test_employee(db):
    """Create a regular employee"""
    employee = Employee(id="EMP001", name="John Doe", pin_hash=hash_pin("1234"), is_admin=False, active=True)
    db.add(employee)
    db.commit()
    db.refresh(employee)
    return employee


@pytest.fixture
def second_employee(db):
    employee = Employee(id="EMP002", name="Jane Roe", pin_hash=hash_pin("4321"), is_admin=False, active=True)
    db.add(employee)
    db.commit()
    db.refresh(employee)
    return employee


@pytest.fixture
def admin_employee(db):
    """Create an administrator"""
    admin = Employee(id="ADMIN01", name="Admin User", pin_hash=hash_pin("9999"), is_admin=True, active=True)
    db.add(admin)
    db.commit()
    db.refresh(admin)
    return admin

