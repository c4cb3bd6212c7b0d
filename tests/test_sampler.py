"""
Tests for the secure length sampler.
"""

import sys
from collections import Counter
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from veil.errors import EntropyFailure, InvalidRange
from veil.sampler import LengthSampler, uniform_int


def _scripted(data: bytes):
    """Entropy source replaying fixed bytes."""
    stream = iter(data)

    def read(n):
        return bytes(next(stream) for _ in range(n))
    return read


def _broken(n):
    raise OSError("no entropy")


def test_values_stay_in_range():
    """Every sample lands inside the closed range."""
    print("Testing sampler range...", end=" ")
    sampler = LengthSampler()
    for low, high in [(0, 1), (0, 4096), (96, 1024), (32, 256), (1024, 4096), (7, 8)]:
        for _ in range(500):
            value = sampler.uniform_int(low, high)
            assert low <= value <= high, f"{value} outside [{low}, {high}]"
    print("PASS")


def test_distribution_is_uniform():
    """Chi-square against a flat distribution over ten buckets."""
    print("Testing sampler uniformity...", end=" ")
    trials = 20000
    counts = Counter(uniform_int(0, 9) for _ in range(trials))
    assert set(counts) == set(range(10))
    expected = trials / 10
    chi2 = sum((counts[k] - expected) ** 2 / expected for k in range(10))
    # 9 degrees of freedom; 50 is far beyond p = 1e-6
    assert chi2 < 50, f"chi-square too large: {chi2:.1f}"
    print(f"PASS (chi2={chi2:.1f})")


def test_degenerate_range_uses_no_entropy():
    """min == max returns min without touching the entropy source."""
    print("Testing degenerate range...", end=" ")
    sampler = LengthSampler(entropy=_broken)
    for value in (0, 10, 4096):
        assert sampler.uniform_int(value, value) == value
    print("PASS")


def test_inverted_range_raises():
    """min > max is a programming error, bounds are never swapped."""
    print("Testing inverted range...", end=" ")
    try:
        uniform_int(10, 5)
        assert False, "should have raised InvalidRange"
    except InvalidRange as e:
        assert e.low == 10
        assert e.high == 5
        assert isinstance(e, ValueError)
    print("PASS")


def test_rejection_sampling_discards_out_of_span():
    """Masked draws above the span are redrawn instead of folded by modulo."""
    print("Testing rejection sampling...", end=" ")
    # span 3 needs 2 bits: 0xff -> 3 (rejected), 0x02 -> 2
    sampler = LengthSampler(entropy=_scripted(b"\xff\x02"))
    assert sampler.uniform_int(0, 2) == 2

    # span 300 needs 9 bits over 2 bytes: 0x01ff -> 511 (rejected), 0x012b -> 299
    sampler = LengthSampler(entropy=_scripted(b"\x01\xff\x01\x2b"))
    assert sampler.uniform_int(100, 399) == 399
    print("PASS")


def test_entropy_failure_is_wrapped():
    """Source errors and short reads surface as EntropyFailure."""
    print("Testing entropy failure...", end=" ")
    try:
        LengthSampler(entropy=_broken).uniform_int(0, 10)
        assert False, "should have raised EntropyFailure"
    except EntropyFailure as e:
        assert isinstance(e.__cause__, OSError)

    def unavailable(n):
        raise NotImplementedError("no randomness source found")

    try:
        LengthSampler(entropy=unavailable).uniform_int(0, 10)
        assert False, "should have raised EntropyFailure"
    except EntropyFailure as e:
        assert isinstance(e.__cause__, NotImplementedError)

    try:
        LengthSampler(entropy=lambda n: b"").uniform_int(0, 10)
        assert False, "should have raised EntropyFailure"
    except EntropyFailure:
        pass
    print("PASS")


def main():
    print("=" * 50)
    print("  Sampler Tests")
    print("=" * 50)
    print()

    tests = [
        test_values_stay_in_range,
        test_distribution_is_uniform,
        test_degenerate_range_uses_no_entropy,
        test_inverted_range_raises,
        test_rejection_sampling_discards_out_of_span,
        test_entropy_failure_is_wrapped,
    ]

    passed = 0
    failed = 0
    for test in tests:
        try:
            test()
            passed += 1
        except Exception as e:
            print(f"FAIL: {e}")
            failed += 1

    print()
    print(f"Results: {passed} passed, {failed} failed")
    return failed == 0


if __name__ == "__main__":
    success = main()
    sys.exit(0 if success else 1)
