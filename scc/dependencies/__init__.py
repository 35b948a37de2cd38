from .auth import extract_bearer_token, get_current_user, require_levels, require_permission

__all__ = ["extract_bearer_token", "get_current_user", "require_levels", "require_permission"]
