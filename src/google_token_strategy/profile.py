from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict, List


PROVIDER_NAME = "google"


@dataclass(frozen=True)
class ValueObject:
    value: str


@dataclass(frozen=True)
class ProfileName:
    family_name: str = ""
    given_name: str = ""
    middle_name: str = ""


@dataclass(frozen=True)
class Profile:
    """Normalized Google user profile.

    Every string field is present, empty when Google did not return the claim.
    ``raw`` is the response body as received and ``json`` its parsed form.
    """

    id: str
    display_name: str = ""
    name: ProfileName = field(default_factory=ProfileName)
    gender: str = ""
    emails: List[ValueObject] = field(default_factory=lambda: [ValueObject("")])
    photos: List[ValueObject] = field(default_factory=lambda: [ValueObject("")])
    raw: str = ""
    json: Dict[str, Any] = field(default_factory=dict)
    provider: str = PROVIDER_NAME

    def to_dict(self, *, include_raw: bool = True) -> Dict[str, Any]:
        """Return the profile in the camelCase shape used by Passport strategies."""
        data: Dict[str, Any] = {
            "provider": self.provider,
            "id": self.id,
            "displayName": self.display_name,
            "name": {
                "familyName": self.name.family_name,
                "givenName": self.name.given_name,
                "middleName": self.name.middle_name,
            },
            "gender": self.gender,
            "emails": [{"value": e.value} for e in self.emails],
            "photos": [{"value": p.value} for p in self.photos],
        }
        if include_raw:
            data["_raw"] = self.raw
            data["_json"] = self.json
        return data


def _claim(claims: Dict[str, Any], key: str) -> str:
    value = claims.get(key)
    if not value:
        return ""
    return value if isinstance(value, str) else str(value)


def normalize_profile(body: str) -> Profile:
    """Parse a userinfo response body into a :class:`Profile`.

    ``json.JSONDecodeError`` propagates as is for a body that is not JSON.
    """
    claims = json.loads(body)
    if not isinstance(claims, dict):
        raise ValueError(f"Expected a JSON object from the userinfo endpoint, got {type(claims).__name__}")

    return Profile(
        id=_claim(claims, "sub"),
        display_name=_claim(claims, "name"),
        name=ProfileName(
            family_name=_claim(claims, "family_name"),
            given_name=_claim(claims, "given_name"),
            middle_name=_claim(claims, "middle_name"),
        ),
        gender=_claim(claims, "gender"),
        emails=[ValueObject(_claim(claims, "email"))],
        photos=[ValueObject(_claim(claims, "picture"))],
        raw=body,
        json=claims,
    )
