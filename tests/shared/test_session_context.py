"""Tests for acting-principal session context providers."""

from __future__ import annotations

import threading

from packages.atrium_shared.session import (
    ContextVarSessionContextProvider,
    SessionContext,
    SessionContextProvider,
    StaticSessionContextProvider,
)


def test_static_provider_reports_explicit_context_or_absence() -> None:
    """A static provider reflects exactly the context it was built with."""
    present = StaticSessionContextProvider(SessionContext(actor_id=9, org_unit_id=4))
    absent = StaticSessionContextProvider()

    assert (present.current_actor_id(), present.current_org_unit_id()) == (9, 4)
    assert (absent.current_actor_id(), absent.current_org_unit_id()) == (None, None)
    assert isinstance(absent, SessionContextProvider)


def test_contextvar_provider_binding_is_scoped_to_block() -> None:
    """Bindings are restored on exit, including nested ones."""
    provider = ContextVarSessionContextProvider()

    assert provider.current_actor_id() is None
    with provider.bind(SessionContext(actor_id=1, org_unit_id=10)):
        with provider.bind(SessionContext(actor_id=2)):
            assert provider.current_actor_id() == 2
            assert provider.current_org_unit_id() is None
        assert provider.current_actor_id() == 1
    assert provider.current_actor_id() is None


def test_contextvar_provider_isolates_concurrent_threads() -> None:
    """Concurrent operations never observe each other's context."""
    provider = ContextVarSessionContextProvider()
    barrier = threading.Barrier(2)
    seen: dict[int, object] = {}

    def _worker(actor_id: int) -> None:
        with provider.bind(SessionContext(actor_id=actor_id)):
            barrier.wait(timeout=5)
            seen[actor_id] = provider.current_actor_id()

    threads = [threading.Thread(target=_worker, args=(actor,)) for actor in (1, 2)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join(timeout=5)

    assert seen == {1: 1, 2: 2}
