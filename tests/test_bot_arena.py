from bots.bot_arena import main, run_match
from bots.heuristic import HeuristicBot
from bots.random_bot import RandomBot


def test_run_match_executes():
    results = run_match([HeuristicBot(), RandomBot(seed=3), HeuristicBot()], seed=7)
    assert results["winner_id"] is not None
    assert results["moves"] > 0
    assert results["total_cards"] == 108
    assert 0 in results["hand_sizes"]


def test_main_prints_summary(capsys):
    main(["--bots", "heuristic", "random", "--n", "2", "--seed", "1"])
    out = capsys.readouterr().out
    assert "wins" in out
