import pytest
import httpx
from httpx import AsyncClient, ASGITransport
from question_bank.main import app
from question_bank.database import init_storage, get_db
from question_bank.models import User
from question_bank.utils.auth_utils import UserDirectory, create_access_token, get_user_directory

REMOTE_USERS = [
    {"id": 1, "name": "Professor", "email": "professor@escola.com", "role": "professor"},
    {"id": 2, "name": "Coordenador", "email": "coordenador@escola.com", "role": "coordenador"},
]

def remote_users_handler(request: httpx.Request) -> httpx.Response:
    """Fake users endpoint: filters the fixed list by the email query parameter"""
    email = request.url.params.get("email")
    return httpx.Response(200, json=[u for u in REMOTE_USERS if u["email"] == email])

@pytest.fixture
def db(tmp_path):
    """Freshly seeded store in a temporary directory"""
    return init_storage(tmp_path / "store")

@pytest.fixture
def directory():
    return UserDirectory(base_url="http://users.test/users", transport=httpx.MockTransport(remote_users_handler))

@pytest.fixture
async def client(db, directory):
    """Create test client wired to the temporary store and fake user directory"""
    app.dependency_overrides[get_db] = lambda: db
    app.dependency_overrides[get_user_directory] = lambda: directory
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()

@pytest.fixture
def professor():
    return User(id="1", name="Professor", email="professor@escola.com", role="professor")

@pytest.fixture
def coordinator():
    return User(id="2", name="Coordenador", email="coordenador@escola.com", role="coordenador")

@pytest.fixture
def auth_headers(db):
    """Helper to sign a user in and create auth headers"""
    def _auth_headers(user: User):
        db.set_current_user(user.model_dump())
        return {"Authorization": f"Bearer {create_access_token(user)}"}
    return _auth_headers

@pytest.fixture
def question_data():
    """Sample question payload as sent by the form"""
    return {
        "category": "Matemática",
        "tags": ["frações", "aritmética"],
        "statement": "Quanto é 1/2 + 1/4?",
        "options": ["1/6", "2/6", "3/4", "1", "5/4"],
        "correctOption": 2,
    }

class TestConfig:
    """Test configuration constants"""
    TEST_USER_EMAIL = "professor@escola.com"
    TEST_COORDINATOR_EMAIL = "coordenador@escola.com"
    BASE_URL = "http://test"
