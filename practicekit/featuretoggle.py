"""Feature flags decided by user role, environment and subscription."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class FeatureToggle:
    """Answers whether features are enabled for a given context."""

    role: str = ""
    environment: str = ""
    is_premium: bool = False
    subscription: str = ""

    def is_feature_a_enabled(self) -> bool:
        """Feature A is for administrators."""
        return self.role == "admin"

    def is_feature_b_enabled(self) -> bool:
        """Feature B is enabled in the staging environment."""
        return self.environment == "staging"

    def is_feature_c_enabled(self) -> bool:
        """Feature C is for premium subscribers."""
        return self.is_premium or self.subscription == "premium"