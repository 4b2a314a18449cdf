"""Role inheritance graphs, matching operators and policy helpers for role-based access control."""

__version__ = "0.1.0"
__all__ = ["default_role_manager", "operators", "role_manager", "util"]