from __future__ import annotations

from depster.domain.ports import BundleIterator
from tests.support.catalogs import ListBundleStream, make_bundle


def test_next_returns_bundles_in_order_then_none() -> None:
    first = make_bundle("a.v1", "a")
    second = make_bundle("b.v1", "b")
    iterator = BundleIterator(ListBundleStream([first, second]))

    assert iterator.next() == first
    assert iterator.next() == second
    assert iterator.next() is None
    assert iterator.next() is None


def test_exhausted_iterator_stops_pulling_from_stream() -> None:
    stream = ListBundleStream([make_bundle("a.v1", "a")])
    iterator = BundleIterator(stream)

    assert list(iterator) == [make_bundle("a.v1", "a")]
    assert iterator.next() is None
    assert stream.pulls == 2


def test_empty_stream_ends_immediately() -> None:
    assert list(BundleIterator(ListBundleStream([]))) == []
