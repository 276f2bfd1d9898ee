"""
Personal Book - Test Configuration and Fixtures
"""
import os
from typing import AsyncGenerator, List, Tuple

import pytest
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.pool import NullPool
from faker import Faker

# Set testing environment
os.environ['ENVIRONMENT'] = 'testing'
os.environ['DATABASE_URL'] = 'sqlite+aiosqlite:///./test.db'
os.environ['JWT_SECRET_KEY'] = 'test-jwt-secret-key-for-testing'
os.environ['BCRYPT_ROUNDS'] = '4'
os.environ['LOG_FILE'] = ''
os.environ['NOTIFICATIONS_ENABLED'] = 'false'
os.environ['MASTER_EMAIL'] = 'master@example.com'
os.environ['MASTER_PASSWORD'] = 'master-test-password'
os.environ['MASTER_USERNAME'] = 'Master Admin'
os.environ['PUBLIC_PROFILE_BASE_URL'] = 'http://test/p'

from personalbook.main import app
from personalbook.core.database import Base, get_db
from personalbook.db.seed import seed_master_account
from personalbook.models.account import Account, AccountRole
from personalbook.modules.auth.dependencies import CallerIdentity
from personalbook.schemas.account import UserRegister
from personalbook.services.auth_service import auth_service
from personalbook.services.notification_service import get_notifier
from personalbook.services.profile_access import profile_access

fake = Faker()

MASTER_PASSWORD = os.environ['MASTER_PASSWORD']

# Test database setup
TEST_DATABASE_URL = 'sqlite+aiosqlite:///./test.db'
test_engine = create_async_engine(TEST_DATABASE_URL, echo=False, poolclass=NullPool)
TestSessionLocal = async_sessionmaker(
    bind=test_engine,
    class_=AsyncSession,
    expire_on_commit=False
)


class RecordingNotifier:
    """Collects notify() calls instead of sending email"""

    def __init__(self):
        self.sent: List[Tuple[str, str, str]] = []

    async def notify(self, username: str, secret_id: str, email: str) -> None:
        self.sent.append((username, secret_id, email))


@pytest.fixture(scope='function')
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Create a fresh database session for each test"""
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with TestSessionLocal() as session:
        yield session
        await session.rollback()

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
async def client(db_session: AsyncSession, notifier: RecordingNotifier) -> AsyncGenerator[AsyncClient, None]:
    """Create test client with database and notifier overrides"""
    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_notifier] = lambda: notifier

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url='http://test') as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
async def master_account(db_session: AsyncSession) -> Account:
    """Seed the master account"""
    return await seed_master_account(db_session)


@pytest.fixture
def master_identity(master_account: Account) -> CallerIdentity:
    return CallerIdentity(role=AccountRole.MASTER, id=master_account.id, username=master_account.username)


@pytest.fixture
def master_headers(master_account: Account) -> dict:
    """Authentication headers for the master"""
    return {'Authorization': f'Bearer {auth_service.issue_token(master_account)}'}


@pytest.fixture
async def test_user(db_session: AsyncSession, master_identity: CallerIdentity,
                    notifier: RecordingNotifier) -> Account:
    """Register a user (with its default profile) through the controller"""
    return await profile_access.register_user(
        db_session,
        master_identity,
        UserRegister(username=fake.name(), email=fake.unique.email()),
        notifier,
    )


@pytest.fixture
def user_headers(test_user: Account) -> dict:
    """Authentication headers for test_user"""
    return {'Authorization': f'Bearer {auth_service.issue_token(test_user)}'}


@pytest.fixture
async def other_user(db_session: AsyncSession, master_identity: CallerIdentity,
                     notifier: RecordingNotifier) -> Account:
    return await profile_access.register_user(
        db_session,
        master_identity,
        UserRegister(username=fake.name(), email=fake.unique.email()),
        notifier,
    )
