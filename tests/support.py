"""Shared builders for tests: isolated SQLite sessions and a fast auth stack."""

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.security import PasswordHasher
from app.models import Base
from app.services.auth import AuthService
from app.services.tokens import TokenService
from app.services.users import UserStore

TEST_SECRET = "testSecretKeyThatIsLongEnoughForHS256Algorithm"


def memory_session_factory() -> sessionmaker:
    """Fresh in-memory database with all tables; one per test for isolation."""
    engine = create_engine(
        "sqlite+pysqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def file_session_factory(path: str) -> sessionmaker:
    """SQLite file database; each session gets its own connection (used for races)."""
    engine = create_engine(
        f"sqlite+pysqlite:///{path}",
        connect_args={"check_same_thread": False, "timeout": 30},
    )
    Base.metadata.create_all(engine)
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def token_service(**kwargs: object) -> TokenService:
    return TokenService(TEST_SECRET, **kwargs)


def auth_service(db: Session, tokens: TokenService | None = None) -> AuthService:
    return AuthService(UserStore(db), tokens or token_service(), PasswordHasher(rounds=4))
