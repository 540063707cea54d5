import pytest
from django.contrib.auth import get_user_model
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken

from core.cms.cache import get_store
from core.iam.roles import replace_user_roles

User = get_user_model()


@pytest.fixture(autouse=True)
def tag_store():
    store = get_store()
    store.clear()
    yield store
    store.clear()


@pytest.fixture
def make_user(db):
    def _make(username, roles=(), is_active=True):
        user = User.objects.create_user(
            username=username,
            email=f"{username}@clinic.test",
            password="pass12345",
            is_active=is_active,
        )
        replace_user_roles(user, roles)
        return user
    return _make


@pytest.fixture
def admin_user(make_user):
    return make_user("admin", ["admin"])


@pytest.fixture
def editor(make_user):
    return make_user("editor", ["content_editor"])


@pytest.fixture
def creator(make_user):
    return make_user("creator", ["content_creator"])


@pytest.fixture
def it_manager(make_user):
    return make_user("it", ["it_manager"])


@pytest.fixture
def client_for():
    def _client(user):
        c = APIClient()
        c.force_authenticate(user=user)
        return c
    return _client


@pytest.fixture
def jwt_client_for():
    def _client(user):
        c = APIClient()
        refresh = RefreshToken.for_user(user)
        c.credentials(HTTP_AUTHORIZATION=f"Bearer {str(refresh.access_token)}")
        return c
    return _client
