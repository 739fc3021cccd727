"""Tests for TrailSampler - throttled passive trail recording."""

import pytest

from route_learner.config import PipelineSettings
from route_learner.data_collection.trail_sampler import TrailSampler
from route_learner.utils.interfaces import ManualClock

from conftest import wp


@pytest.fixture
def sampler(clock):
    return TrailSampler(clock=clock)


class TestShouldSample:
    """Time and distance throttling."""

    def test_first_sample_always_accepted(self, sampler, clock):
        assert sampler.should_sample(clock, wp(0, 0)) is True

    def test_missing_position_is_not_sampled(self, sampler, clock):
        assert sampler.should_sample(clock, None) is False
        assert sampler.record_sample(clock, None) is False
        assert sampler.count() == 0

    def test_rejects_sample_within_interval(self, sampler, clock):
        sampler.record_sample(clock, wp(0, 0))
        clock.advance(499)

        assert sampler.should_sample(clock, wp(3, 0)) is False

    def test_rejects_sample_too_close(self, sampler, clock):
        sampler.record_sample(clock, wp(0, 0))
        clock.advance(500)

        assert sampler.should_sample(clock, wp(0, 0)) is False
        assert sampler.should_sample(clock, wp(1, 0)) is True

    def test_diagonal_step_counts_as_movement(self, sampler, clock):
        sampler.record_sample(clock, wp(0, 0))
        clock.advance(500)

        assert sampler.should_sample(clock, wp(1, 1)) is True

    def test_uses_own_clock_when_none_passed(self, clock):
        sampler = TrailSampler(clock=clock)
        sampler.record_sample(None, wp(0, 0))

        assert sampler.should_sample(None, wp(5, 5)) is False
        clock.advance(500)
        assert sampler.should_sample(None, wp(5, 5)) is True


class TestRecordSample:
    """Buffer updates and recording flag."""

    def test_records_accepted_samples_with_timestamps(self, sampler, clock):
        assert sampler.record_sample(clock, wp(0, 0)) is True
        clock.advance(500)
        assert sampler.record_sample(clock, wp(1, 0)) is True

        trail = sampler.get_trail()
        assert [(p.x, p.y, p.z) for p in trail] == [(0, 0, 7), (1, 0, 7)]
        assert [p.timestamp for p in trail] == [1_000, 1_500]

    def test_rejected_sample_does_not_move_trackers(self, sampler, clock):
        sampler.record_sample(clock, wp(0, 0))
        clock.advance(100)
        assert sampler.record_sample(clock, wp(4, 0)) is False

        clock.advance(400)
        # Interval measured from the accepted sample at 1000 ms
        assert sampler.record_sample(clock, wp(4, 0)) is True

    def test_disabled_recording_is_noop(self, sampler, clock):
        assert sampler.toggle() is False

        assert sampler.record_sample(clock, wp(0, 0)) is False
        assert sampler.count() == 0

        assert sampler.toggle() is True
        assert sampler.record_sample(clock, wp(0, 0)) is True

    def test_get_trail_returns_copy(self, sampler, clock):
        sampler.record_sample(clock, wp(0, 0))
        trail = sampler.get_trail()
        trail.clear()

        assert sampler.count() == 1
        assert len(sampler) == 1

    def test_without_clock_samples_are_unthrottled_and_unstamped(self):
        sampler = TrailSampler()

        assert sampler.record_sample(None, wp(0, 0)) is True
        assert sampler.record_sample(None, wp(0, 1)) is True

        assert [p.timestamp for p in sampler.get_trail()] == [0, 0]
        assert sampler.duration() == 0.0


class TestTrailState:
    """Duration, clearing and bounded length."""

    def test_duration_in_seconds(self, sampler, clock):
        for x in range(4):
            sampler.record_sample(clock, wp(x, 0))
            clock.advance(750)

        assert sampler.duration() == pytest.approx(2.25)

    def test_duration_zero_for_single_point(self, sampler, clock):
        sampler.record_sample(clock, wp(0, 0))
        assert sampler.duration() == 0.0

    def test_clear_forgets_last_sample(self, sampler, clock):
        sampler.record_sample(clock, wp(0, 0))
        sampler.clear()

        assert sampler.count() == 0
        # Same tile and same time are accepted again after clearing
        assert sampler.record_sample(clock, wp(0, 0)) is True

    def test_long_trail_is_thinned(self, clock):
        sampler = TrailSampler(clock=clock, max_points=5)
        for x in range(6):
            sampler.record_sample(clock, wp(x, 0))
            clock.advance(500)

        assert [p.x for p in sampler.get_trail()] == [0, 2, 4, 5]

    def test_thinning_keeps_trail_bounded(self, clock):
        sampler = TrailSampler(clock=clock, max_points=10)
        for x in range(200):
            sampler.record_sample(clock, wp(x, 0))
            clock.advance(500)
            assert sampler.count() <= 10

        trail = sampler.get_trail()
        assert trail[0].x == 0
        assert trail[-1].x == 199

    def test_repeated_thinning_keeps_even_spacing(self, clock):
        sampler = TrailSampler(clock=clock, max_points=5)
        for x in range(21):
            sampler.record_sample(clock, wp(x, 0))
            clock.advance(500)

        assert [p.x for p in sampler.get_trail()] == [0, 8, 16, 20]

    def test_long_walk_spacing_is_even_from_the_start(self, clock):
        sampler = TrailSampler(clock=clock, max_points=20)
        for x in range(200):
            sampler.record_sample(clock, wp(x, 0))
            clock.advance(600)

        trail = sampler.get_trail()
        gaps = [b.timestamp - a.timestamp for a, b in zip(trail, trail[1:])]

        # Only the gap to the newest point may be shorter
        assert len(set(gaps[:-1])) == 1
        assert gaps[-1] <= gaps[0]
        assert trail[-1].x == 199

    def test_clear_resets_thinning(self, clock):
        sampler = TrailSampler(clock=clock, max_points=5)
        for x in range(12):
            sampler.record_sample(clock, wp(x, 0))
            clock.advance(500)
        sampler.clear()

        for x in range(3):
            sampler.record_sample(clock, wp(x, 0))
            clock.advance(500)

        assert [p.x for p in sampler.get_trail()] == [0, 1, 2]


class TestConfiguration:
    """Clamped setters and settings wiring."""

    def test_setters_clamp_to_minimums(self, sampler):
        sampler.set_min_distance(0.2)
        sampler.set_sample_interval(10)

        assert sampler.min_distance == 1.0
        assert sampler.sample_interval_ms == 100

    def test_from_settings(self):
        settings = PipelineSettings(
            _env_file=None, sample_interval_ms=1_000, min_sample_distance=3.0
        )
        clock = ManualClock()
        sampler = TrailSampler.from_settings(settings, clock=clock)

        assert sampler.clock is clock
        assert sampler.sample_interval_ms == 1_000
        assert sampler.min_distance == 3.0
        assert sampler.max_points == settings.max_trail_points
