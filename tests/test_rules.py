from tetris_engine.game import ScoringRules


def test_quadratic_line_bonus():
    rules = ScoringRules()
    assert [rules.score_for_lines(n) for n in range(5)] == [0, 100, 400, 900, 1600]


def test_lock_score_adds_flat_bonus():
    rules = ScoringRules()
    assert rules.score_for_lock(0) == 10
    assert rules.score_for_lock(2) == 410
