"""Unit tests for Thompson Sampling allocation."""

import pytest
from decision_engine.bandit import thompson
from decision_engine.core.sampling import RandomSampler
from decision_engine.exceptions import PreconditionError


class TestArmState:
    """Tests for ArmState."""

    def test_from_counts(self):
        """Test uniform prior plus observed counts."""
        arm = thompson.ArmState.from_counts(successes=9, failures=90)
        assert arm.alpha == 10
        assert arm.beta == 91
        assert arm.expected_value == pytest.approx(10 / 101)

    def test_invalid_arm(self):
        """Test error handling for invalid parameters."""
        with pytest.raises(PreconditionError, match="must be positive"):
            thompson.ArmState(alpha=0, beta=1)
        with pytest.raises(PreconditionError, match="non-negative"):
            thompson.ArmState.from_counts(successes=-1, failures=3)


class TestSelectArm:
    """Tests for Thompson arm selection."""

    def test_strong_arm_selected(self):
        """Test arm with much higher success rate wins almost always."""
        arms = [thompson.ArmState(100, 1), thompson.ArmState(1, 100)]
        sampler = RandomSampler(seed=42)

        counts = [0, 0]
        for _ in range(100):
            counts[thompson.select_arm(arms, sampler)] += 1

        assert counts[0] > 90

    def test_uncertain_arms_explored(self):
        """Test equal arms each get selected a fair share of the time."""
        arms = [thompson.ArmState(2, 2), thompson.ArmState(2, 2)]
        sampler = RandomSampler(seed=3)

        wins = sum(thompson.select_arm(arms, sampler) for _ in range(1000))
        assert 400 < wins < 600

    def test_single_arm(self):
        """Test a single arm is always selected."""
        assert thompson.select_arm([thompson.ArmState(1, 1)], RandomSampler(seed=0)) == 0

    def test_empty_arms(self):
        """Test error handling for no arms."""
        with pytest.raises(PreconditionError, match="At least one arm"):
            thompson.select_arm([])


class TestAllocateTraffic:
    """Tests for proportional traffic allocation."""

    def test_allocation_proportional(self):
        """Test allocation favours strong arms and sums to 1."""
        arms = [
            thompson.ArmState(50, 10),  # strong
            thompson.ArmState(10, 50),  # weak
            thompson.ArmState(5, 5),    # uncertain
        ]
        allocation = thompson.allocate_traffic(arms)

        assert len(allocation) == 3
        assert allocation[0] > allocation[2] > allocation[1]
        assert sum(allocation) == pytest.approx(1.0)

    def test_equal_arms_split_evenly(self):
        """Test identical arms share traffic equally."""
        allocation = thompson.allocate_traffic([thompson.ArmState(3, 3)] * 4)
        assert allocation == pytest.approx([0.25] * 4)

    def test_empty_arms(self):
        """Test error handling for no arms."""
        with pytest.raises(PreconditionError, match="At least one arm"):
            thompson.allocate_traffic([])
