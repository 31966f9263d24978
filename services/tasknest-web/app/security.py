"""
TASKNEST Web - Configuration Checks

Startup validation of the remote backend settings.
"""

import warnings
from app.config import settings


def validate_backend_config() -> None:
    """
    Validate backend configuration on startup.

    Issues warnings for insecure configurations but does not crash the application
    (to allow tests and development to run against the in-memory backend).
    """
    if "*" in str(settings.CORS_ORIGINS):
        warnings.warn(
            "SECURITY WARNING: CORS wildcard (*) detected. "
            "Set specific origins via CORS_ORIGINS.",
            UserWarning,
        )

    if not settings.supabase_configured:
        if settings.is_production:
            warnings.warn(
                "CONFIG WARNING: SUPABASE_URL / SUPABASE_ANON_KEY are not set in production. "
                "Falling back to the in-memory backend; accounts and tasks will not persist.",
                UserWarning,
            )
        return

    # Session tokens travel with every request to the backend
    if settings.is_production and not settings.SUPABASE_URL.startswith("https://"):
        warnings.warn(
            "SECURITY WARNING: SUPABASE_URL does not use HTTPS in production. "
            "Session tokens would be sent in clear text.",
            UserWarning,
        )
