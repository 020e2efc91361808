"""Tests for regeneration on parameter change."""

import threading

import pytest

from galaxy_cloud.generator import GalaxyGenerator
from galaxy_cloud.params import InvalidParameter, ParameterSet
from galaxy_cloud.regeneration import Regenerator


class BlockingGenerator(GalaxyGenerator):
    """Generator that waits on an event before building clouds of a given count."""

    def __init__(self, block_count: int):
        super().__init__(seed=0)
        self.block_count = block_count
        self.started = threading.Event()
        self.release = threading.Event()
        self.calls = []

    def generate(self, params):
        self.calls.append(params)
        if params.count == self.block_count:
            self.started.set()
            assert self.release.wait(timeout=10)
        return super().generate(params)


def test_first_change_generates():
    regen = Regenerator(GalaxyGenerator(seed=1))
    assert regen.current is None

    params = ParameterSet(count=200)
    cloud = regen.on_parameter_change(params)

    assert len(cloud) == 200
    assert regen.current is cloud
    assert regen.params == params


def test_equal_params_keep_cloud():
    regen = Regenerator(GalaxyGenerator(seed=1))
    cloud = regen.on_parameter_change(ParameterSet(count=200))

    assert regen.on_parameter_change(ParameterSet(count=200)) is cloud


def test_changed_params_replace_cloud():
    """Any field change builds a new cloud with no shared buffers."""
    regen = Regenerator(GalaxyGenerator(seed=1))
    first = regen.on_parameter_change(ParameterSet(count=200))
    second = regen.on_parameter_change(ParameterSet(count=200, color_outside="#ffffff"))

    assert second is not first
    assert second.positions is not first.positions
    assert regen.current is second


def test_invalid_change_keeps_previous():
    regen = Regenerator(GalaxyGenerator(seed=1))
    cloud = regen.on_parameter_change(ParameterSet(count=200))

    with pytest.raises(InvalidParameter):
        regen.on_parameter_change(ParameterSet(count=200, radius=0))
    with pytest.raises(InvalidParameter):
        regen.request(ParameterSet(count=0))

    assert regen.current is cloud
    regen.close()


def test_listeners_see_commits():
    regen = Regenerator(GalaxyGenerator(seed=1))
    seen = []
    regen.add_listener(seen.append)

    cloud = regen.on_parameter_change(ParameterSet(count=150))
    regen.on_parameter_change(ParameterSet(count=150))

    assert len(seen) == 1 and seen[0] is cloud


def test_async_request_commits():
    regen = Regenerator(GalaxyGenerator(seed=1))
    try:
        future = regen.request(ParameterSet(count=300))
        cloud = future.result(timeout=10)
        assert len(cloud) == 300
        assert regen.current is cloud
    finally:
        regen.close()


def test_superseded_request_is_discarded():
    """A result finishing after a newer request never becomes current."""
    generator = BlockingGenerator(block_count=400)
    regen = Regenerator(generator)
    old_params = ParameterSet(count=400)
    new_params = ParameterSet(count=500)
    committed = []
    regen.add_listener(committed.append)
    try:
        old_future = regen.request(old_params)
        assert generator.started.wait(timeout=10)
        new_future = regen.request(new_params)
        generator.release.set()

        assert old_future.result(timeout=10) is None
        new_cloud = new_future.result(timeout=10)
        assert new_cloud.params == new_params
        assert regen.current is new_cloud
        assert regen.params == new_params
        assert len(committed) == 1 and committed[0] is new_cloud
    finally:
        generator.release.set()
        regen.close()


def test_queued_request_is_skipped():
    """Requests superseded before they start are never generated."""
    generator = BlockingGenerator(block_count=400)
    regen = Regenerator(generator)
    try:
        first = regen.request(ParameterSet(count=400))
        assert generator.started.wait(timeout=10)
        skipped = regen.request(ParameterSet(count=450))
        last = regen.request(ParameterSet(count=500))
        generator.release.set()

        assert first.result(timeout=10) is None
        assert skipped.result(timeout=10) is None
        assert len(last.result(timeout=10)) == 500
        assert [p.count for p in generator.calls] == [400, 500]
    finally:
        generator.release.set()
        regen.close()


def test_returning_to_committed_params_while_pending():
    """Re-requesting the committed snapshot still supersedes a pending change."""
    generator = BlockingGenerator(block_count=400)
    regen = Regenerator(generator)
    base = ParameterSet(count=300)
    try:
        base_cloud = regen.on_parameter_change(base)
        pending = regen.request(ParameterSet(count=400))
        assert generator.started.wait(timeout=10)
        back = regen.request(base)
        generator.release.set()

        assert pending.result(timeout=10) is None
        assert back.result(timeout=10).params == base
        assert regen.params == base
        assert regen.current is not base_cloud
    finally:
        generator.release.set()
        regen.close()
