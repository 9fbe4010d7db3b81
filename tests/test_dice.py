"""
Tests for d20 skill checks.
"""

import random

from mandate.tools.dice import RollResult, roll_check, roll_d20


class TestRollCheck:

    def test_meets_dc(self, dice):
        result = roll_check(modifier=6, dc=12, rng=dice(6))

        assert result.success
        assert result.total == 12
        assert result.margin == 0

    def test_below_dc(self, dice):
        result = roll_check(modifier=6, dc=12, rng=dice(5))

        assert not result.success
        assert result.margin == -1

    def test_criticals(self, dice):
        assert roll_check(0, 10, dice(20)).critical
        assert roll_check(0, 10, dice(1)).critical_failure
        assert not roll_check(0, 10, dice(19)).critical

    def test_describe(self):
        result = RollResult(d20=14, modifier=7, total=21, dc=12, success=True)

        assert result.describe() == "Rolled 14 + 7 = 21 (DC 12)."

    def test_narrative(self):
        assert RollResult(d20=20, modifier=0, total=20, dc=5, success=True).narrative == "critical success"
        assert RollResult(d20=10, modifier=0, total=10, dc=9, success=True).narrative == "narrow success"
        assert RollResult(d20=10, modifier=0, total=10, dc=20, success=False).narrative == "clear failure"

    def test_seeded_rolls_replay(self):
        rng_a, rng_b = random.Random(7), random.Random(7)
        first = [roll_d20(rng_a) for _ in range(10)]
        second = [roll_d20(rng_b) for _ in range(10)]

        assert first == second
        assert all(1 <= r <= 20 for r in first)
