from __future__ import annotations

import pytest

from block_sudoku.game import ScoringRules


def test_no_lines_no_bonus() -> None:
    assert ScoringRules().clear_bonus(0, 0, 0, combo=4) == 0


def test_single_line() -> None:
    assert ScoringRules().clear_bonus(1, 0, 0) == 10


@pytest.mark.parametrize(
    "lines,multiplier",
    [(1, 1.0), (2, 1.5), (3, 2.0), (4, 3.0), (6, 3.0)],
)
def test_multi_clear_multiplier(lines: int, multiplier: float) -> None:
    assert ScoringRules.multi_clear_multiplier(lines) == multiplier


def test_combo_and_multi_clear_stack() -> None:
    rules = ScoringRules()
    # 4 lines, combo 5: 40 * 1.5 * 3
    assert rules.clear_bonus(2, 1, 1, combo=5) == 180


def test_combo_multiplier_is_capped() -> None:
    rules = ScoringRules()
    assert rules.combo_multiplier(100) == 3.0
    assert rules.clear_bonus(1, 0, 0, combo=100) == 30


def test_placement_points() -> None:
    assert ScoringRules().placement_points(5) == 5
