"""
Unit tests for SampleWindow (bounded FIFO latency storage)
"""

import pytest

from trustmonitor.monitoring.sample_window import SampleWindow


class TestSampleWindow:
    """Test SampleWindow append/eviction/read behaviour"""

    def test_default_capacity(self):
        """Default window retains 1000 samples"""
        window = SampleWindow()
        assert window.capacity == 1000
        assert len(window) == 0

    def test_invalid_capacity_rejected(self):
        """Non-positive capacity raises ValueError"""
        with pytest.raises(ValueError):
            SampleWindow(capacity=0)

    def test_values_preserve_insertion_order(self):
        """values() returns samples oldest first"""
        window = SampleWindow(capacity=5)
        for value in [3.0, 1.0, 2.0]:
            window.append(value)

        assert window.values().tolist() == [3.0, 1.0, 2.0]
        assert len(window) == 3

    def test_length_never_exceeds_capacity(self):
        """Window length stays bounded under overflow"""
        window = SampleWindow(capacity=10)
        for i in range(25):
            window.append(float(i))
            assert len(window) <= 10

        assert len(window) == 10

    def test_oldest_sample_evicted_first(self):
        """FIFO eviction drops the oldest sample and keeps order after wrap"""
        window = SampleWindow(capacity=3)
        for value in [1.0, 2.0, 3.0, 4.0, 5.0]:
            window.append(value)

        assert window.values().tolist() == [3.0, 4.0, 5.0]
        assert window.evicted_count == 2

    def test_recent_returns_trailing_samples(self):
        """recent(n) returns the last n samples, fewer if not available"""
        window = SampleWindow(capacity=10)
        for i in range(6):
            window.append(float(i))

        assert window.recent(3).tolist() == [3.0, 4.0, 5.0]
        assert window.recent(100).tolist() == [0.0, 1.0, 2.0, 3.0, 4.0, 5.0]
        assert window.recent(0).tolist() == []

    def test_values_returns_copy(self):
        """Mutating the returned array does not touch the window"""
        window = SampleWindow(capacity=3)
        window.append(1.0)

        values = window.values()
        values[0] = 99.0

        assert window.values().tolist() == [1.0]

    def test_clear(self):
        """clear() empties the window and resets diagnostics"""
        window = SampleWindow(capacity=2)
        for value in [1.0, 2.0, 3.0]:
            window.append(value)

        window.clear()

        assert len(window) == 0
        assert window.values().tolist() == []
        assert window.evicted_count == 0

        window.append(7.0)
        assert window.values().tolist() == [7.0]
