"""Shared fixtures for the notifier test-suite."""

from __future__ import annotations

import os
import threading
from dataclasses import dataclass

import pytest

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SECRET_KEY"] = "test-secret"
os.environ["ACCESS_TOKEN_EXPIRE_MINUTES"] = "30"
os.environ["SCHEDULER_ENABLED"] = "false"
os.environ["APP_TIMEZONE"] = "UTC"

from notifier.config import get_settings  # noqa: E402

get_settings.cache_clear()

from notifier.application.notifications import (  # noqa: E402
    ChannelRouter,
    DispatchEngine,
    PreferenceResolver,
)
from notifier.domain.entities import (  # noqa: E402
    DeliveryOutcome,
    EmailMessage,
    EmailProvider,
    EmailProviderSetting,
    User,
)
from notifier.infrastructure.cache import notification_cache  # noqa: E402
from notifier.infrastructure.database import (  # noqa: E402
    Base,
    SessionLocal,
    engine,
    initialize_database,
)
from notifier.infrastructure.email import EmailAdapter  # noqa: E402
from notifier.infrastructure.models import UserModel  # noqa: E402
from notifier.infrastructure.repositories import (  # noqa: E402
    EmailDeliveryLogRepository,
    EmailProviderRepository,
    NotificationPreferenceRepository,
    NotificationRepository,
    RoleRepository,
    UserRepository,
)
from notifier.infrastructure.security import (  # noqa: E402
    create_access_token,
    get_password_hash,
    password_signature,
)

TENANT_ID = 5
OTHER_TENANT_ID = 6
PASSWORD = "Secret123"
PASSWORD_HASH = get_password_hash(PASSWORD)


@pytest.fixture(autouse=True)
def reset_database():
    """Give every test an empty schema and an empty lookup cache."""

    Base.metadata.drop_all(bind=engine)
    initialize_database()
    notification_cache.clear()
    yield
    notification_cache.clear()
    Base.metadata.drop_all(bind=engine)


@pytest.fixture()
def session():
    with SessionLocal() as db:
        yield db


def add_user(
    session,
    *,
    user_id: int | None = None,
    tenant_id: int = TENANT_ID,
    name: str,
    email: str,
    role: str = "user",
    department: str | None = None,
    is_active: bool = True,
) -> User:
    role_entity = RoleRepository(session).get_or_create(name=role.title(), alias=role)
    model = UserModel(
        id=user_id,
        tenant_id=tenant_id,
        role_id=role_entity.id,
        name=name,
        email=email,
        password=PASSWORD_HASH,
        department=department,
        is_active=is_active,
    )
    session.add(model)
    session.commit()
    return UserRepository(session).get(model.id)


@dataclass
class TenantUsers:
    admin: User
    bob: User
    carol: User
    dave: User
    eve: User


@pytest.fixture()
def users(session) -> TenantUsers:
    """Tenant 5 with an admin, two members and an inactive user; tenant 6 with one user."""

    return TenantUsers(
        admin=add_user(
            session, user_id=1, name="Ada", email="ada@acme.test", role="admin", department="Ops"
        ),
        bob=add_user(session, user_id=9, name="Bob", email="bob@acme.test", department="Finance"),
        carol=add_user(
            session, user_id=10, name="Carol", email="carol@acme.test", department="Ops"
        ),
        dave=add_user(
            session, user_id=11, name="Dave", email="dave@acme.test", is_active=False
        ),
        eve=add_user(
            session, user_id=20, tenant_id=OTHER_TENANT_ID, name="Eve", email="eve@other.test"
        ),
    )


def auth_headers(user: User) -> dict[str, str]:
    token = create_access_token(
        {
            "sub": user.email,
            "tenant_id": user.tenant_id,
            "pwd_sig": password_signature(user.password, user.is_active),
        }
    )
    return {"Authorization": f"Bearer {token}"}


class RecordingAdapter(EmailAdapter):
    """Adapter double that records messages and fails for chosen recipients."""

    def __init__(
        self,
        provider: EmailProvider = EmailProvider.SMTP,
        *,
        fail_for: set[str] | None = None,
        raise_for: set[str] | None = None,
        block_for: set[str] | None = None,
    ) -> None:
        self.provider = provider
        self.fail_for = fail_for or set()
        self.raise_for = raise_for or set()
        self.block_for = block_for or set()
        self.release = threading.Event()
        self.sent: list[EmailMessage] = []
        self._lock = threading.Lock()

    def send(self, settings: EmailProviderSetting, message: EmailMessage) -> DeliveryOutcome:
        if message.to in self.block_for:
            self.release.wait(5)
        if message.to in self.raise_for:
            raise ConnectionError("connection reset")
        with self._lock:
            self.sent.append(message)
        if message.to in self.fail_for:
            return DeliveryOutcome.failed("mailbox unavailable")
        return DeliveryOutcome.ok(f"msg-{len(self.sent)}")


def add_provider(
    session,
    *,
    provider: EmailProvider = EmailProvider.SMTP,
    tenant_id: int = TENANT_ID,
    is_active: bool = True,
    **overrides,
) -> EmailProviderSetting:
    values = {
        "from_email": "alerts@acme.test",
        "from_name": "Acme Alerts",
        "api_key": "smtp-password",
        "smtp_host": "smtp.acme.test",
        "smtp_port": 587,
    }
    values.update(overrides)
    return EmailProviderRepository(session).create(
        EmailProviderSetting(
            id=None, tenant_id=tenant_id, provider=provider, is_active=is_active, **values
        )
    )


def build_engine(
    session,
    adapter: EmailAdapter | None = None,
    *,
    timeout_seconds: float | None = None,
    max_workers: int | None = None,
    batch_size: int | None = None,
) -> DispatchEngine:
    adapters = {adapter.provider: adapter} if adapter is not None else None
    router = ChannelRouter(
        EmailProviderRepository(session),
        EmailDeliveryLogRepository(session),
        adapters=adapters,
        timeout_seconds=timeout_seconds,
        max_workers=max_workers,
    )
    return DispatchEngine(
        NotificationRepository(session),
        UserRepository(session),
        PreferenceResolver(NotificationPreferenceRepository(session)),
        router,
        batch_size=batch_size,
    )
