from afrisight.auth.credentials import CredentialService, Identity

__all__ = ["CredentialService", "Identity"]
