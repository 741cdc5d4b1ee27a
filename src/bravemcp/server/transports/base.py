# ==============================================================================
#                  © 2025 Dedalus Labs, Inc. and affiliates
#                            Licensed under MIT
#               github.com/dedalus-labs/brave-search-mcp/LICENSE
# ==============================================================================

"""Shared transport primitives for :mod:`bravemcp.server`.

Provides a minimal base class that transports subclass and a factory signature
that `BraveSearchServer` uses to instantiate transports lazily.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable


if TYPE_CHECKING:  # pragma: no cover - import cycle guard
    from ..core import BraveSearchServer


class BaseTransport(ABC):
    """Common base for server transports.

    Subclasses receive the active :class:`BraveSearchServer` so they can obtain
    initialization options and the search context.
    """

    TRANSPORT: tuple[str, ...] = ()

    def __init__(self, server: BraveSearchServer) -> None:
        self._server = server

    @property
    def server(self) -> BraveSearchServer:
        """Return the owning :class:`BraveSearchServer`."""
        return self._server

    @property
    def transport_display_name(self) -> str:
        return self.TRANSPORT[1] if len(self.TRANSPORT) > 1 else type(self).__name__

    @abstractmethod
    async def run(self, **kwargs: Any) -> None:
        """Start the transport and block until it shuts down."""


@runtime_checkable
class TransportFactory(Protocol):
    """Callable that produces a configured transport for a ``BraveSearchServer``."""

    def __call__(self, server: BraveSearchServer) -> BaseTransport:  # pragma: no cover - protocol
        ...


__all__ = ["BaseTransport", "TransportFactory"]
