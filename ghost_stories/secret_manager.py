"""Secret Manager integration for configuration management.

Secrets are stored as 'ghost-stories-{name}-{env}' in Google Cloud Secret
Manager. Lookups only happen when GOOGLE_PROJECT_ID is configured.
"""

import os
from functools import lru_cache

from google.api_core import exceptions as gcp_exceptions
from google.cloud import secretmanager


@lru_cache
def get_secret_manager_client() -> secretmanager.SecretManagerServiceClient:
    """Get cached Secret Manager client."""
    return secretmanager.SecretManagerServiceClient()


def get_secret(
    secret_id: str,
    project_id: str | None = None,
    version: str = "latest",
    default: str | None = None,
) -> str | None:
    """Fetch a secret value from Google Cloud Secret Manager.

    Args:
        secret_id: The secret ID (e.g., 'ghost-stories-openai-api-key-dev')
        project_id: GCP project ID. If None, uses GOOGLE_PROJECT_ID env var.
        version: Secret version (default: 'latest')
        default: Default value if secret is not found

    Returns:
        The secret value as a string, or default if not found.
    """
    project = project_id or os.environ.get("GOOGLE_PROJECT_ID")
    if not project:
        return default

    try:
        client = get_secret_manager_client()
        name = f"projects/{project}/secrets/{secret_id}/versions/{version}"
        response = client.access_secret_version(request={"name": name})
        return response.payload.data.decode("UTF-8").strip()
    except (gcp_exceptions.NotFound, gcp_exceptions.PermissionDenied):
        return default
    except Exception:
        # No credentials on a developer machine
        return default


def build_secret_id(base_name: str, environment: str | None = None) -> str:
    """Build a secret ID with environment suffix.

    Args:
        base_name: Base secret name (e.g., 'openai-api-key')
        environment: Environment name (e.g., 'dev', 'prod').
                     If None, uses ENVIRONMENT env var or defaults to 'dev'.

    Returns:
        Full secret ID (e.g., 'ghost-stories-openai-api-key-dev')
    """
    env = environment or os.environ.get("ENVIRONMENT", "dev")
    return f"ghost-stories-{base_name}-{env}"


SECRET_NAMES = {
    "openai_api_key": "openai-api-key",
    "session_secret_key": "session-secret-key",
}


def get_app_secret(key: str, default: str | None = None) -> str | None:
    """Get an application secret by its config key.

    Args:
        key: Config key name (e.g., 'openai_api_key')
        default: Default value if secret is not found

    Returns:
        The secret value or default.
    """
    if key not in SECRET_NAMES:
        return default

    secret_id = build_secret_id(SECRET_NAMES[key])
    return get_secret(secret_id, default=default)
