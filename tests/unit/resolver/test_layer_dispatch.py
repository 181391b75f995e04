"""Tests for host-facing helpers: resolve(), require(), chains and sessions."""
from __future__ import annotations

import pytest

from nextlayer.core.exceptions import NoNextLayerError, UnknownResumptionError
from nextlayer.core.resolver import LayeredPathResolver


@pytest.fixture
def full_stack(layered_roots, write_layer_file):
    return [str(write_layer_file(root, "test.tt")) for root in layered_roots]


def test_relative_name_resolves_to_the_hidden_layer(layered_roots, full_stack) -> None:
    resolver = LayeredPathResolver(layered_roots)

    hit = resolver.resolve("test.tt")

    assert hit is not None
    assert hit.absolute_path == full_stack[1]


def test_absolute_name_continues_below_its_layer(layered_roots, full_stack) -> None:
    resolver = LayeredPathResolver(layered_roots)

    below_c = resolver.resolve("test.tt")
    assert below_c is not None
    below_b = resolver.resolve(below_c.absolute_path)

    assert below_b is not None
    assert below_b.absolute_path == full_stack[2]
    assert resolver.resolve(below_b.absolute_path) is None


def test_resolve_relative_name_missing_everywhere(layered_roots) -> None:
    assert LayeredPathResolver(layered_roots).resolve("nope.tt") is None


def test_resolve_relative_name_only_in_bottom_layer(layered_roots, write_layer_file) -> None:
    write_layer_file(layered_roots[2], "test.tt")
    assert LayeredPathResolver(layered_roots).resolve("test.tt") is None


def test_require_raises_when_no_layer_remains(layered_roots, full_stack) -> None:
    resolver = LayeredPathResolver(layered_roots)
    resolver.chain("test.tt")

    with pytest.raises(NoNextLayerError) as excinfo:
        resolver.require(full_stack[2])

    assert excinfo.value.context["name"] == full_stack[2]


def test_require_returns_hit(layered_roots, full_stack) -> None:
    hit = LayeredPathResolver(layered_roots).require("test.tt")
    assert hit.absolute_path == full_stack[1]


def test_iter_chain_is_lazy(layered_roots, full_stack) -> None:
    resolver = LayeredPathResolver(layered_roots)

    chain = resolver.iter_chain("test.tt")
    first = next(chain)

    assert first.absolute_path == full_stack[0]
    assert list(resolver.record) == [full_stack[0]]
    assert [h.absolute_path for h in chain] == full_stack[1:]


def test_chain_of_missing_path_is_empty(layered_roots) -> None:
    assert LayeredPathResolver(layered_roots).chain("missing.tt") == []


def test_sessions_share_roots_but_not_records(layered_roots, full_stack) -> None:
    base = LayeredPathResolver(layered_roots)
    one = base.session()
    two = base.session()

    one.resolve_first("test.tt")

    assert one.search_path is two.search_path is base.search_path
    assert full_stack[0] in one.record
    assert len(two.record) == 0
    assert len(base.record) == 0


def test_context_manager_discards_the_record_on_exit(layered_roots, full_stack) -> None:
    resolver = LayeredPathResolver(layered_roots)

    with resolver.session() as session:
        hit = session.resolve_first("test.tt")
        assert hit is not None
        token = hit.absolute_path

    with pytest.raises(UnknownResumptionError):
        session.resolve_next(token)
