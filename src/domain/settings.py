"""
Structured view over the tenant settings blob.

The stored blob is flat JSON: ``features``, ``limits`` and ``suspended`` are
owned by the entitlement service, every other key belongs to the tenant.
Entitlement merges go through ``TenantSettings`` so they can only touch the
well-known fields.
"""

from typing import Any, Dict, Iterable, List, Optional

from pydantic import BaseModel, Field

RESERVED_KEYS = ("features", "limits", "suspended")


def normalize_features(features: Optional[Iterable[str]]) -> List[str]:
    """De-duplicate feature flags, keeping first-seen order."""
    seen = []
    for feature in features or []:
        if feature not in seen:
            seen.append(feature)
    return seen


class TenantSettings(BaseModel):
    features: List[str] = Field(default_factory=list)
    limits: Dict[str, int] = Field(default_factory=dict)
    suspended: bool = False
    extensions: Dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_blob(cls, blob: Optional[Dict[str, Any]]) -> "TenantSettings":
        blob = dict(blob or {})
        return cls(
            features=normalize_features(blob.pop("features", None)),
            limits=blob.pop("limits", None) or {},
            suspended=bool(blob.pop("suspended", False)),
            extensions=blob,
        )

    def to_blob(self) -> Dict[str, Any]:
        blob = dict(self.extensions)
        blob["features"] = list(self.features)
        blob["limits"] = dict(self.limits)
        if self.suspended:
            blob["suspended"] = True
        return blob

    def with_entitlements(
        self, features: Optional[Iterable[str]] = None, limits: Optional[Dict[str, int]] = None
    ) -> "TenantSettings":
        update: Dict[str, Any] = {}
        if features is not None:
            update["features"] = normalize_features(features)
        if limits is not None:
            update["limits"] = dict(limits)
        return self.model_copy(update=update)

    def with_extensions(self, extensions: Dict[str, Any]) -> "TenantSettings":
        return self.model_copy(update={"extensions": dict(extensions)})

    def with_suspended(self, suspended: bool) -> "TenantSettings":
        return self.model_copy(update={"suspended": suspended})
