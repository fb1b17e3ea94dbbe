from ranked_tracker.features.players.ranks import (
    RankSnapshot,
    calculate_lp_difference,
    has_rank_changed,
    rank_sort_key,
)


def snap(tier, rank, lp, wins=0, losses=0):
    return RankSnapshot(tier=tier, rank=rank, league_points=lp, wins=wins, losses=losses)


class TestCalculateLPDifference:
    def test_same_division_is_plain_difference(self):
        assert calculate_lp_difference(snap("GOLD", "II", 50), snap("GOLD", "II", 80)) == 30
        assert calculate_lp_difference(snap("GOLD", "II", 80), snap("GOLD", "II", 62)) == -18

    def test_division_promotion(self):
        """GOLD II 90 -> GOLD I 0 is a 10 LP gain."""
        assert calculate_lp_difference(snap("GOLD", "II", 90), snap("GOLD", "I", 0)) == 10

    def test_division_demotion(self):
        """GOLD II 0 -> GOLD III 80 is a 20 LP loss."""
        assert calculate_lp_difference(snap("GOLD", "II", 0), snap("GOLD", "III", 80)) == -20

    def test_tier_promotion(self):
        assert (
            calculate_lp_difference(snap("GOLD", "I", 95), snap("PLATINUM", "IV", 15)) == 20
        )

    def test_tier_demotion(self):
        assert (
            calculate_lp_difference(snap("PLATINUM", "IV", 0), snap("GOLD", "I", 75)) == -25
        )

    def test_skipped_divisions_count_as_one_boundary(self):
        assert calculate_lp_difference(snap("GOLD", "IV", 90), snap("GOLD", "II", 10)) == 20

    def test_apex_tiers_without_division(self):
        assert (
            calculate_lp_difference(snap("DIAMOND", "I", 90), snap("MASTER", "I", 5)) == 15
        )
        assert calculate_lp_difference(snap("MASTER", "I", 120), snap("MASTER", "I", 160)) == 40

    def test_unknown_tier_falls_back_to_plain_difference(self):
        assert calculate_lp_difference(snap("WOOD", "II", 40), snap("GOLD", "II", 10)) == -30


class TestHasRankChanged:
    def test_lp_change_counts(self):
        assert has_rank_changed(snap("GOLD", "II", 50), snap("GOLD", "II", 51))

    def test_identical_snapshots(self):
        assert not has_rank_changed(snap("GOLD", "II", 50), snap("GOLD", "II", 50))

    def test_games_alone_do_not_count(self):
        assert not has_rank_changed(
            snap("GOLD", "II", 50, wins=1), snap("GOLD", "II", 50, wins=2)
        )


class TestRankSnapshot:
    def test_unranked_defaults(self):
        snapshot = RankSnapshot()
        assert not snapshot.has_ranked_data
        assert snapshot.win_rate == 0.0

    def test_win_rate_percentage(self):
        snapshot = snap("GOLD", "II", 0, wins=3, losses=1)
        assert snapshot.total_games == 4
        assert snapshot.win_rate == 75.0

    def test_games_without_tier_still_count_as_ranked_data(self):
        assert RankSnapshot(wins=2).has_ranked_data


def test_rank_sort_key_orders_leaderboard():
    players = [
        RankSnapshot(),
        snap("GOLD", "I", 10),
        snap("MASTER", "I", 50),
        snap("GOLD", "II", 99),
        snap("MASTER", None, 300),
        snap("CHALLENGER", "I", 1000),
        snap("GOLD", "I", 60),
    ]

    ordered = sorted(players, key=rank_sort_key)

    assert ordered == [
        snap("CHALLENGER", "I", 1000),
        snap("MASTER", None, 300),
        snap("MASTER", "I", 50),
        snap("GOLD", "I", 60),
        snap("GOLD", "I", 10),
        snap("GOLD", "II", 99),
        RankSnapshot(),
    ]
