"""Application layer - Circular dependency detection."""

from contextvars import ContextVar, Token
from typing import Any, Tuple

from modular_di.domain import CircularDependencyError


class CircularDependencyDetector:
    """Detects circular dependencies during resolution.

    Uses a context variable to track the chain of classes and keys being
    resolved. Every asyncio task works on its own copy of the context, so concurrent
    ``create`` calls never see each other's chains. The chain is stored as an
    immutable tuple and restored with the token returned by ``push``.

    Attributes:
        _chain: Context variable holding the current resolution chain.
    """

    def __init__(self) -> None:
        """Initialize the detector with an empty chain."""
        self._chain: ContextVar[Tuple[Any, ...]] = ContextVar(f"di_chain_{id(self)}", default=())

    @property
    def chain(self) -> Tuple[Any, ...]:
        """The creation chain of the current context."""
        return self._chain.get()

    def push(self, target: Any) -> "Token[Tuple[Any, ...]]":
        """Add a class or key to the resolution chain.

        Args:
            target: The class about to be created, or the key about to be resolved.

        Returns:
            Token to hand back to ``pop``.

        Raises:
            CircularDependencyError: If the target is already in the chain.

        Example:
            >>> detector = CircularDependencyDetector()
            >>> token_a = detector.push(ServiceA)
            >>> token_b = detector.push(ServiceB)
            >>> detector.push(ServiceA)  # Raises CircularDependencyError
        """
        chain = self._chain.get()

        if target in chain:
            cycle_start_index = chain.index(target)
            raise CircularDependencyError(list(chain[cycle_start_index:]) + [target])

        return self._chain.set(chain + (target,))

    def pop(self, token: "Token[Tuple[Any, ...]]") -> None:
        """Restore the chain as it was before the matching ``push``."""
        self._chain.reset(token)
