from django.urls import path
from core.iam.api import auth_me, auth_active, auth_check_active, users_list, users_detail

urlpatterns = [
    path("auth/me", auth_me, name="auth-me"),
    path("auth/active", auth_active, name="auth-active"),
    path("auth/check-active", auth_check_active, name="auth-check-active"),

    path("users", users_list, name="users-list"),
    path("users/<int:user_id>", users_detail, name="users-detail"),
]
