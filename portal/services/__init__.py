from . import auth_service, policy

__all__ = ["auth_service", "policy"]
