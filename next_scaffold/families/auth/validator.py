"""Semantic rules for the ``auth`` family."""

from __future__ import annotations

from ...core.validation import INVALID, ConfigInspector, check_project_name, present
from .config import SOCIAL_PROVIDERS

MIN_PASSWORD_FLOOR = 6
MAX_PASSWORD_CEILING = 256


def check_providers(inspector: ConfigInspector) -> None:
    """At least one way to sign in."""
    providers = inspector.value("providers")
    if providers is INVALID or providers:
        return
    # Entries that were all rejected structurally are already reported.
    if isinstance(inspector.partial.get("providers"), list) and inspector.partial["providers"]:
        return
    inspector.error("At least one authentication provider is required")


def check_provider_features(inspector: ConfigInspector) -> None:
    """Email flows need the email provider; social login needs an OAuth one."""
    providers = inspector.value("providers")
    features = present(inspector.value("features"))
    if providers is INVALID:
        return
    for feature in ("email-verification", "password-reset"):
        if feature in features and "email" not in providers:
            inspector.error(f"Feature {feature!r} requires provider 'email'")
    social = {provider.value for provider in SOCIAL_PROVIDERS}
    if "social-login" in features and not social.intersection(providers):
        inspector.error(
            "Feature 'social-login' requires at least one social provider "
            f"({', '.join(sorted(social))})"
        )
    if inspector.value("security", "require_email_verification") is True and "email" not in providers:
        inspector.error("'security.requireEmailVerification' requires provider 'email'")


def check_password_bounds(inspector: ConfigInspector) -> None:
    low = inspector.value("security", "min_password_length")
    high = inspector.value("security", "max_password_length")
    if low is not INVALID and low < MIN_PASSWORD_FLOOR:
        inspector.error(f"'security.minPasswordLength' must be at least {MIN_PASSWORD_FLOOR} (got {low})")
    if high is not INVALID and high > MAX_PASSWORD_CEILING:
        inspector.error(f"'security.maxPasswordLength' must be at most {MAX_PASSWORD_CEILING} (got {high})")
    if low is not INVALID and high is not INVALID and low >= high:
        inspector.error(
            f"'security.minPasswordLength' ({low}) must be less than 'security.maxPasswordLength' ({high})"
        )


def check_roles(inspector: ConfigInspector) -> None:
    """Roles are non-empty and include the default role."""
    roles = inspector.value("roles")
    if roles is INVALID:
        return
    if not roles:
        if not (isinstance(inspector.partial.get("roles"), list) and inspector.partial["roles"]):
            inspector.error("At least one role is required")
        return
    default_role = inspector.value("default_role")
    if default_role is not INVALID and default_role not in roles:
        inspector.error(f"'defaultRole' {default_role!r} must be one of the configured roles ({', '.join(roles)})")


def check_session(inspector: ConfigInspector) -> None:
    expires_in = inspector.value("session", "expires_in")
    update_age = inspector.value("session", "update_age")
    for name, value in (("expiresIn", expires_in), ("updateAge", update_age)):
        if value is not INVALID and value <= 0:
            inspector.error(f"'session.{name}' must be a positive number of seconds (got {value})")
    if expires_in is INVALID or update_age is INVALID or expires_in <= 0 or update_age <= 0:
        return
    if update_age >= expires_in:
        inspector.error(
            f"'session.updateAge' ({update_age}) must be less than 'session.expiresIn' ({expires_in})"
        )


def check_redirects(inspector: ConfigInspector) -> None:
    """Redirect targets are app-relative paths."""
    for name, wire in (("redirect_after_login", "redirectAfterLogin"), ("redirect_after_logout", "redirectAfterLogout")):
        target = inspector.value("ui", name)
        if target is not INVALID and not target.startswith("/"):
            inspector.error(f"'ui.{wire}' {target!r} must be an absolute path starting with '/'")


CHECKS = (
    check_project_name,
    check_providers,
    check_provider_features,
    check_password_bounds,
    check_roles,
    check_session,
    check_redirects,
)
