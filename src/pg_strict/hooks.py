"""Interceptor chain in front of query execution.

Each interceptor owns a reference to its successor (the previous head of the
chain, or the default executor) and always delegates to it unless it aborts
the call. Installing pushes a new head; uninstalling pops it and restores the
predecessor.
"""

from __future__ import annotations

import threading
from collections.abc import Awaitable, Callable
from typing import Any, Protocol

from pg_strict.diagnostics import DiagnosticResult
from pg_strict.errors import HookChainError
from pg_strict.policy import PRODUCT_TAG, PolicyStore, apply_decision, decide


class Executor(Protocol):
    def __call__(self, sql: str, **kwargs: Any) -> Awaitable[Any]: ...


class Interceptor:
    """Pass-through interceptor. Subclasses inspect `sql` before delegating."""

    def __init__(self, successor: Executor) -> None:
        self.successor = successor

    async def __call__(self, sql: str, **kwargs: Any) -> Any:
        return await self.successor(sql, **kwargs)


class StrictInterceptor(Interceptor):
    """Rejects or warns about UPDATE/DELETE without WHERE, then delegates."""

    def __init__(
        self,
        successor: Executor,
        store: PolicyStore,
        *,
        dialect: str | None = None,
        tag: str | None = PRODUCT_TAG,
        on_decision: Callable[[DiagnosticResult], None] | None = None,
    ) -> None:
        super().__init__(successor)
        self.store = store
        self.dialect = dialect
        self.tag = tag
        self.on_decision = on_decision

    async def __call__(self, sql: str, **kwargs: Any) -> Any:
        result = decide(sql, self.store.snapshot(), dialect=self.dialect, tag=self.tag)
        if self.on_decision is not None:
            self.on_decision(result)
        # Raises before the successor runs when the policy blocks.
        apply_decision(result)
        return await self.successor(sql, **kwargs)


InterceptorFactory = Callable[[Executor], Interceptor]


class HookChain:
    """Stack of interceptors wrapped around a default executor."""

    def __init__(self, default: Executor) -> None:
        self.default = default
        self._stack: list[Interceptor] = []
        self._lock = threading.Lock()

    @property
    def head(self) -> Executor:
        """Entry point: the most recently installed interceptor, or the default."""
        stack = self._stack
        return stack[-1] if stack else self.default

    @property
    def interceptors(self) -> tuple[Interceptor, ...]:
        return tuple(self._stack)

    def install(self, factory: InterceptorFactory) -> Interceptor:
        """Wrap the current head with `factory(head)` and publish it."""
        with self._lock:
            interceptor = factory(self.head)
            if interceptor.successor is not self.head:
                raise HookChainError("interceptor must delegate to the current head")
            self._stack = [*self._stack, interceptor]
        return interceptor

    def uninstall(self, interceptor: Interceptor | None = None) -> Interceptor:
        """Remove the head interceptor and restore its predecessor.

        When `interceptor` is given it must be the current head; removing an
        interceptor from the middle would orphan the ones wrapped around it.
        """
        with self._lock:
            if not self._stack:
                raise HookChainError("no interceptor installed")
            top = self._stack[-1]
            if interceptor is not None and interceptor is not top:
                raise HookChainError("only the most recently installed interceptor can be removed")
            self._stack = self._stack[:-1]
        return top

    async def execute(self, sql: str, **kwargs: Any) -> Any:
        return await self.head(sql, **kwargs)


def install_strict(
    chain: HookChain,
    store: PolicyStore,
    *,
    dialect: str | None = None,
    on_decision: Callable[[DiagnosticResult], None] | None = None,
) -> StrictInterceptor:
    """Put WHERE clause enforcement in front of everything already installed."""
    built: list[StrictInterceptor] = []

    def factory(successor: Executor) -> StrictInterceptor:
        interceptor = StrictInterceptor(
            successor, store, dialect=dialect, on_decision=on_decision
        )
        built.append(interceptor)
        return interceptor

    chain.install(factory)
    return built[0]


def uninstall_strict(chain: HookChain, interceptor: StrictInterceptor | None = None) -> None:
    """Remove the strict interceptor; it must be the most recently installed one."""
    if interceptor is None:
        if not isinstance(chain.head, StrictInterceptor):
            raise HookChainError("top interceptor is not a StrictInterceptor")
        interceptor = chain.head
    chain.uninstall(interceptor)
