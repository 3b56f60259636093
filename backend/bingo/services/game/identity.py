from typing import Optional


class IdentityVerifier:
    """Decides which member a connection is allowed to act as."""

    def verify(self, claimed_name, payload: dict) -> Optional[str]:
        raise NotImplementedError


class TrustOnClaimVerifier(IdentityVerifier):
    """Accepts any roster name at face value. No credentials are checked."""

    def __init__(self, store):
        self.store = store

    def verify(self, claimed_name, payload: dict) -> Optional[str]:
        if self.store.is_member(claimed_name):
            return claimed_name
        return None
