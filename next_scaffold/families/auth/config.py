"""Configuration model, defaults and presets for Better Auth integration."""

from __future__ import annotations

from enum import Enum

from pydantic import Field

from ...core.models import ConfigModel, PackageManager, ProjectSettings


class AuthProviderKind(str, Enum):
    BETTER_AUTH = "better-auth"


class LoginProvider(str, Enum):
    GOOGLE = "google"
    GITHUB = "github"
    DISCORD = "discord"
    MICROSOFT = "microsoft"
    EMAIL = "email"


SOCIAL_PROVIDERS = (LoginProvider.GOOGLE, LoginProvider.GITHUB, LoginProvider.DISCORD, LoginProvider.MICROSOFT)


class AuthFeature(str, Enum):
    TWO_FACTOR = "2fa"
    EMAIL_VERIFICATION = "email-verification"
    PASSWORD_RESET = "password-reset"
    SOCIAL_LOGIN = "social-login"
    PASSKEY = "passkey"
    MULTI_SESSION = "multi-session"
    ORGANIZATIONS = "organizations"


class AuthDatabase(str, Enum):
    POSTGRESQL = "postgresql"
    MYSQL = "mysql"
    SQLITE = "sqlite"


class Role(str, Enum):
    USER = "user"
    ADMIN = "admin"
    MODERATOR = "moderator"


class Theme(str, Enum):
    LIGHT = "light"
    DARK = "dark"
    SYSTEM = "system"


class SessionOptions(ConfigModel):
    """Session lifetime in seconds."""

    expires_in: int = 60 * 60 * 24 * 7
    update_age: int = 60 * 60 * 24
    cookie_cache: bool = True


class SecurityOptions(ConfigModel):
    rate_limit: bool = True
    csrf: bool = True
    require_email_verification: bool = False
    min_password_length: int = 8
    max_password_length: int = 128


class UiOptions(ConfigModel):
    theme: Theme = Theme.SYSTEM
    custom_pages: bool = Field(default=True, description="Generate login/signup/dashboard pages")
    redirect_after_login: str = "/dashboard"
    redirect_after_logout: str = "/"


class AuthConfig(ProjectSettings):
    """Full configuration of the ``auth`` family."""

    auth_provider: AuthProviderKind = AuthProviderKind.BETTER_AUTH
    providers: list[LoginProvider] = Field(
        default_factory=lambda: [LoginProvider.EMAIL, LoginProvider.GITHUB, LoginProvider.GOOGLE]
    )
    features: list[AuthFeature] = Field(
        default_factory=lambda: [
            AuthFeature.EMAIL_VERIFICATION,
            AuthFeature.PASSWORD_RESET,
            AuthFeature.SOCIAL_LOGIN,
        ]
    )
    database: AuthDatabase = AuthDatabase.POSTGRESQL
    roles: list[Role] = Field(default_factory=lambda: [Role.USER, Role.ADMIN])
    default_role: Role = Role.USER
    session: SessionOptions = Field(default_factory=SessionOptions)
    security: SecurityOptions = Field(default_factory=SecurityOptions)
    ui: UiOptions = Field(default_factory=UiOptions)

    def has(self, feature: AuthFeature | str) -> bool:
        return AuthFeature(feature).value in self.features

    @property
    def email_enabled(self) -> bool:
        return LoginProvider.EMAIL.value in self.providers

    @property
    def social_providers(self) -> list[str]:
        """Enabled OAuth providers, in configuration order."""
        social = {provider.value for provider in SOCIAL_PROVIDERS}
        return [provider for provider in self.providers if provider in social]


DEFAULTS = AuthConfig()


PRESETS: dict[str, AuthConfig] = {
    "basic": AuthConfig(
        project_name="basic-auth",
        providers=[LoginProvider.EMAIL],
        features=[AuthFeature.PASSWORD_RESET],
        database=AuthDatabase.SQLITE,
        roles=[Role.USER],
    ),
    "standard": AuthConfig(project_name="standard-auth"),
    "enterprise": AuthConfig(
        project_name="enterprise-auth",
        package_manager=PackageManager.PNPM,
        providers=list(LoginProvider),
        features=list(AuthFeature),
        roles=list(Role),
        session=SessionOptions(expires_in=60 * 60 * 24, update_age=60 * 60),
        security=SecurityOptions(require_email_verification=True, min_password_length=12),
    ),
}
