from .profile_identity_provider import ProfileIdentityProvider

__all__ = ["ProfileIdentityProvider"]
