"""Section generators, package scripts and instructions for Better Auth.

Sections and the paths they own:

- ``server``      src/lib/auth.ts, app/api/auth/[...all]/route.ts,
                  src/middleware.ts, .env.example
- ``client``      src/lib/auth-client.ts, src/hooks/use-auth.ts
- ``components``  src/components/auth/*
- ``pages``       app/(auth)/*, app/dashboard/page.tsx
- ``services``    src/services/auth/*
- ``shared``      shared/types/auth.ts, shared/validation/auth.ts
"""

from __future__ import annotations

from typing import Any

from ...core.commands import add_command, exec_command, install_command, numbered_steps, run_script
from ...core.family import SectionGenerator
from ...core.models import FileRecord
from .config import AuthConfig, AuthFeature

_DRIVERS: dict[str, list[str]] = {
    "postgresql": ["pg"],
    "mysql": ["mysql2"],
    "sqlite": ["better-sqlite3"],
}

_CLIENT_PLUGINS: dict[str, tuple[str, str]] = {
    # feature -> (import, plugin call)
    "2fa": ("twoFactorClient", "twoFactorClient()"),
    "passkey": ("passkeyClient", "passkeyClient()"),
    "multi-session": ("multiSessionClient", "multiSessionClient()"),
    "organizations": ("organizationClient", "organizationClient()"),
}


def _context(config: AuthConfig) -> dict[str, Any]:
    features = set(config.features)
    return {
        "project_name": config.project_name,
        "database": config.database,
        "email": config.email_enabled,
        "social_providers": config.social_providers,
        "two_factor": AuthFeature.TWO_FACTOR.value in features,
        "email_verification": AuthFeature.EMAIL_VERIFICATION.value in features,
        "password_reset": AuthFeature.PASSWORD_RESET.value in features,
        "social_login": AuthFeature.SOCIAL_LOGIN.value in features and bool(config.social_providers),
        "passkey": AuthFeature.PASSKEY.value in features,
        "multi_session": AuthFeature.MULTI_SESSION.value in features,
        "organizations": AuthFeature.ORGANIZATIONS.value in features,
        "client_plugins": [plugin for feature, plugin in _CLIENT_PLUGINS.items() if feature in features],
        "roles": list(config.roles),
        "default_role": config.default_role,
        "session": config.session.model_dump(),
        "security": config.security.model_dump(),
        "ui": config.ui.model_dump(),
    }


def _env_lines(config: AuthConfig) -> list[str]:
    lines = ['BETTER_AUTH_SECRET="generate-a-32-character-secret"', 'BETTER_AUTH_URL="http://localhost:3000"']
    for provider in config.social_providers:
        prefix = provider.upper()
        lines.append(f'{prefix}_CLIENT_ID=""')
        lines.append(f'{prefix}_CLIENT_SECRET=""')
    return lines


# ---------------------------------------------------------------------------
# Package scripts
# ---------------------------------------------------------------------------


def package_scripts(config: AuthConfig) -> dict[str, str]:
    pm = config.package_manager
    return {
        "auth:generate": exec_command(pm, "@better-auth/cli generate"),
        "auth:migrate": exec_command(pm, "@better-auth/cli migrate"),
    }


# ---------------------------------------------------------------------------
# Instructions
# ---------------------------------------------------------------------------


def instructions(config: AuthConfig) -> list[str]:
    """Ordered setup steps for Better Auth."""
    pm = config.package_manager
    steps: list[tuple[str, list[str]]] = [
        ("Install dependencies:", [
            install_command(pm),
            add_command(pm, ["better-auth", "zod", "react-hook-form", "@hookform/resolvers", *_DRIVERS[config.database]]),
        ]),
        ("Add the auth variables to .env:", _env_lines(config)),
        (f"Create the auth tables in your {config.database} database:", [run_script(pm, "auth:migrate")]),
    ]
    if config.social_providers:
        steps.append((
            "Register OAuth callback URLs:",
            [f"http://localhost:3000/api/auth/callback/{provider}" for provider in config.social_providers],
        ))
    steps.append(("Start the development server:", [run_script(pm, "dev")]))
    if config.ui.custom_pages:
        steps.append(("Open http://localhost:3000/login to sign in", []))

    footer = [
        "Auth layout:",
        "- src/lib/auth.ts: server configuration",
        "- src/lib/auth-client.ts: React client",
        "- src/services/auth/: server actions",
    ]
    return numbered_steps("Setting up Better Auth", steps, footer=footer)


# ---------------------------------------------------------------------------
# Sections
# ---------------------------------------------------------------------------


class ServerSection(SectionGenerator):
    """Server configuration, route handler, middleware and environment."""

    name = "server"

    def generate(self, config: AuthConfig) -> list[FileRecord]:
        ctx = _context(config)
        return [
            self.render("src/lib/auth.ts", "auth/lib/auth.ts.j2", **ctx),
            self.render("app/api/auth/[...all]/route.ts", "auth/route.ts.j2", **ctx),
            self.render("src/middleware.ts", "auth/middleware.ts.j2", **ctx),
            FileRecord(path=".env.example", content="\n".join(_env_lines(config)) + "\n"),
        ]


class ClientSection(SectionGenerator):
    name = "client"

    def generate(self, config: AuthConfig) -> list[FileRecord]:
        ctx = _context(config)
        return [
            self.render("src/lib/auth-client.ts", "auth/lib/auth-client.ts.j2", **ctx),
            self.render("src/hooks/use-auth.ts", "auth/hooks/use-auth.ts.j2", **ctx),
        ]


class ComponentsSection(SectionGenerator):
    """Forms and guards under ``src/components/auth``."""

    name = "components"

    def generate(self, config: AuthConfig) -> list[FileRecord]:
        ctx = _context(config)
        names = ["login-form", "signup-form", "auth-guard", "user-menu"]
        if ctx["social_login"]:
            names.append("social-login")
        if ctx["two_factor"]:
            names.append("two-factor-form")
        return [
            self.render(f"src/components/auth/{name}.tsx", f"auth/components/{name}.tsx.j2", **ctx)
            for name in names
        ]


class PagesSection(SectionGenerator):
    """Route pages, only with ``ui.customPages``."""

    name = "pages"

    def generate(self, config: AuthConfig) -> list[FileRecord]:
        if not config.ui.custom_pages:
            return []
        ctx = _context(config)
        pages = ["login", "signup"]
        if ctx["password_reset"]:
            pages += ["forgot-password", "reset-password"]
        if ctx["email_verification"]:
            pages.append("verify-email")
        records = [
            self.render(f"app/(auth)/{page}/page.tsx", f"auth/pages/{page}.tsx.j2", **ctx)
            for page in pages
        ]
        records.append(self.render("app/dashboard/page.tsx", "auth/pages/dashboard.tsx.j2", **ctx))
        return records


class ServicesSection(SectionGenerator):
    """Server actions."""

    name = "services"

    def generate(self, config: AuthConfig) -> list[FileRecord]:
        ctx = _context(config)
        actions = ["login", "signup", "logout", "profile"]
        if ctx["password_reset"]:
            actions.append("password-reset")
        return [
            self.render(f"src/services/auth/{action}.ts", f"auth/services/{action}.ts.j2", **ctx)
            for action in actions
        ]


class SharedSection(SectionGenerator):
    """Types and Zod schemas shared by client and server."""

    name = "shared"

    def generate(self, config: AuthConfig) -> list[FileRecord]:
        ctx = _context(config)
        return [
            self.render("shared/types/auth.ts", "auth/shared/types.ts.j2", **ctx),
            self.render("shared/validation/auth.ts", "auth/shared/validation.ts.j2", **ctx),
        ]


SECTIONS = (
    ServerSection,
    ClientSection,
    ComponentsSection,
    PagesSection,
    ServicesSection,
    SharedSection,
)
