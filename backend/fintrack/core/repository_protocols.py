"""Boundary Protocols — contracts between core/services and the shell.

Invariants:
    - Services depend on these Protocols, never on concrete shell classes
    - Implementations are process-wide singletons injected by the API layer

Design Decisions:
    - Protocol over ABC: structural subtyping, test doubles need no inheritance
"""

from typing import Any, Protocol

from fintrack.core.domain_types import ExternalIdentity


class IdentityProvider(Protocol):
    """Resolves the verified caller of a request — implemented by shell."""
    async def current_identity(self, request: Any) -> ExternalIdentity | None: ...


class ViewInvalidator(Protocol):
    """Fire-and-forget staleness signal for a rendered view path."""
    def revalidate_path(self, path: str) -> None: ...

