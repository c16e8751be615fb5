"""Token-table credential verifier."""

from __future__ import annotations

import hmac
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping

    from hokhub.domain.ports import Principal


@dataclass(slots=True, frozen=True)
class StaticTokenVerifier:
    """Resolve bearer tokens against a fixed table using constant-time comparison."""

    tokens: Mapping[str, Principal] = field(default_factory=dict[str, "Principal"])

    def verify(self, credential: str) -> Principal | None:
        candidate = credential.removeprefix("Bearer ").strip()
        if not candidate:
            return None
        for token, principal in self.tokens.items():
            if hmac.compare_digest(token.encode(), candidate.encode()):
                return principal
        return None
