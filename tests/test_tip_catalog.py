from tipstream.services.tip_catalog import (
    FUN_TIERS,
    filter_tiers_by_amount,
    get_base_tier_set,
    suggest_example_tips,
)


def test_defaults_to_fun_theme_in_eur():
    tier_set = suggest_example_tips()

    assert tier_set.theme == "fun"
    assert tier_set.currency == "EUR"
    assert len(tier_set.tiers) == 9
    assert [tier.amount for tier in tier_set.tiers] == [0.5, 1, 2, 5, 10, 25, 50, 100, 250]


def test_tier_ids_are_unique_and_themed():
    ids = [tier.id for tier in FUN_TIERS]

    assert len(ids) == len(set(ids))
    assert all(tier_id.startswith("fun-") for tier_id in ids)


def test_theme_without_dedicated_set_falls_back():
    tier_set = get_base_tier_set("space", "USD")

    assert tier_set.theme == "space"
    assert tier_set.currency == "USD"
    assert tier_set.tiers == FUN_TIERS


def test_returned_tiers_are_a_copy():
    tier_set = suggest_example_tips()
    tier_set.tiers.clear()

    assert len(suggest_example_tips().tiers) == 9


def test_filter_by_amount_range():
    tiers = filter_tiers_by_amount(FUN_TIERS, 10, 50)

    assert [tier.amount for tier in tiers] == [10, 25, 50]


def test_filter_with_single_bound():
    assert [t.amount for t in filter_tiers_by_amount(FUN_TIERS, min_amount=100)] == [100, 250]
    assert [t.amount for t in filter_tiers_by_amount(FUN_TIERS, max_amount=1)] == [0.5, 1]


def test_filter_with_no_matches_returns_unfiltered():
    tiers = filter_tiers_by_amount(FUN_TIERS, 1000, 2000)

    assert tiers == FUN_TIERS
