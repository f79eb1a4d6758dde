"""Tests for the decay and happiness engine."""

from dataclasses import replace
from decimal import Decimal

import pytest

from zombie_farm import decay
from zombie_farm.config.engine_config import EngineConfig
from zombie_farm.enums import QualityTier, ZombieMood, ZombieStatus, ZombieTier, ZombieType
from zombie_farm.events.domain_events import (
    ContainmentChangedEvent,
    MoodChangedEvent,
    ShelterChangedEvent,
    ZombieDecayedEvent,
    ZombieFedEvent,
    ZombiePettedEvent,
)
from zombie_farm.exceptions import (
    InsufficientResourceError,
    InvalidStateError,
    OnCooldownError,
    ZombieContainedError,
)
from zombie_farm.models import StatBlock
from zombie_farm.raising import floor_stat

DAY = 24 * 60 * 60
MEAT = {"Rotten Meat": Decimal(3)}


class TestEvaluate:
    """Daily condition decay and happiness loss."""

    def test_less_than_a_day_is_a_no_op(self, make_zombie, config):
        zombie = make_zombie()
        evaluation = decay.evaluate(zombie, DAY - 1, config)
        assert evaluation.zombie is zombie
        assert evaluation.events == ()

    def test_one_neglected_day(self, make_zombie, config):
        zombie = make_zombie(quality=QualityTier.SILVER, happiness=50, mood=ZombieMood.NEUTRAL)
        evaluation = decay.evaluate(zombie, DAY, config)

        # happiness 50 sits in the 0.9 band
        assert evaluation.zombie.condition == pytest.approx(1 - 0.015 * 0.9)
        assert evaluation.zombie.happiness == 45
        assert evaluation.zombie.decay.last_evaluated_at == DAY
        (event,) = evaluation.events
        assert isinstance(event, ZombieDecayedEvent)
        assert event.days == 1
        assert not event.hit_floor

    def test_gold_sheltered_three_offline_days(self, make_zombie):
        config = EngineConfig.from_overrides({"decay.shelter_reduction": 0.2})
        zombie = make_zombie(
            quality=QualityTier.GOLD, happiness=80, decay={"sheltered": True}
        )
        evaluation = decay.evaluate(zombie, 3 * DAY, config)

        expected = (1 - 0.02 * 0.75 * 0.8) ** 3
        assert evaluation.zombie.condition == pytest.approx(expected)
        assert evaluation.zombie.decay.decay_amount == pytest.approx(1 - expected)
        assert evaluation.zombie.condition >= 0.70
        assert evaluation.zombie.happiness == 65

    def test_condition_never_drops_below_floor(self, make_zombie, config):
        zombie = make_zombie(quality=QualityTier.BRONZE, decay={"condition": 0.505})
        evaluation = decay.evaluate(zombie, 7 * DAY, config)
        assert evaluation.zombie.condition == 0.5
        assert evaluation.events[0].hit_floor

    @pytest.mark.parametrize("quality", list(QualityTier))
    def test_floor_holds_for_every_tier(self, make_zombie, config, quality):
        floor = decay.decay_floor(quality, config)
        zombie = make_zombie(quality=quality, happiness=0, decay={"condition": floor})
        evaluation = decay.evaluate(zombie, 7 * DAY, config)
        assert evaluation.zombie.condition == floor

    @pytest.mark.parametrize("days", [1, 2, 3, 5, 7])
    def test_single_pass_matches_daily_passes(self, make_zombie, config, days):
        zombie = make_zombie(quality=QualityTier.DIAMOND, happiness=95)

        at_once = decay.evaluate(zombie, days * DAY, config).zombie
        stepped = zombie
        for k in range(1, days + 1):
            stepped = decay.evaluate(stepped, k * DAY, config).zombie

        assert at_once.condition == stepped.condition
        assert at_once.happiness == stepped.happiness
        assert at_once.decay.last_evaluated_at == stepped.decay.last_evaluated_at

    def test_catch_up_is_capped(self, make_zombie, config):
        zombie = make_zombie(quality=QualityTier.GOLD, happiness=100)
        capped = decay.evaluate(zombie, 30 * DAY, config).zombie
        seven = decay.evaluate(zombie, 7 * DAY, config).zombie

        assert capped.condition == seven.condition
        assert capped.happiness == seven.happiness == 65
        assert capped.decay.last_evaluated_at == 30 * DAY

    def test_day_with_feeding_is_not_neglected(self, make_zombie, config):
        zombie = make_zombie(happiness=60, decay={"last_fed_at": 100.0})
        evaluation = decay.evaluate(zombie, 2 * DAY, config)
        assert evaluation.events[0].days == 1
        assert evaluation.zombie.happiness == 55

    def test_evaluating_the_past_raises(self, make_zombie, config):
        zombie = make_zombie(decay={"last_evaluated_at": 5 * DAY})
        with pytest.raises(ValueError):
            decay.evaluate(zombie, DAY, config)

    def test_mood_change_emits_event(self, make_zombie, config):
        zombie = make_zombie(happiness=32, mood=ZombieMood.NEUTRAL)
        evaluation = decay.evaluate(zombie, DAY, config)

        assert evaluation.zombie.mood is ZombieMood.UNHAPPY
        mood_events = [e for e in evaluation.events if isinstance(e, MoodChangedEvent)]
        assert len(mood_events) == 1
        assert mood_events[0].old_mood is ZombieMood.NEUTRAL
        assert mood_events[0].new_mood is ZombieMood.UNHAPPY

    def test_happiness_never_negative(self, make_zombie, config):
        zombie = make_zombie(happiness=7, mood=ZombieMood.UNHAPPY)
        assert decay.evaluate(zombie, 3 * DAY, config).zombie.happiness == 0

    def test_input_zombie_untouched(self, make_zombie, config):
        zombie = make_zombie()
        decay.evaluate(zombie, 3 * DAY, config)
        assert zombie.condition == 1.0
        assert zombie.decay.last_evaluated_at == 0.0


class TestRates:
    """Rate lookups and multipliers."""

    def test_base_rates(self, config):
        assert decay.decay_rate(QualityTier.BRONZE, config) == 0.01
        assert decay.decay_rate(QualityTier.DIAMOND, config) == 0.03

    def test_happier_zombies_decay_slower(self, config):
        multipliers = [decay.happiness_decay_multiplier(h, config) for h in (100, 70, 40, 10)]
        assert multipliers == sorted(multipliers)
        assert all(m <= 1.0 for m in multipliers)

    def test_shelter_is_slower_but_not_zero(self, make_zombie, config):
        open_air = make_zombie(quality=QualityTier.GOLD)
        sheltered = make_zombie(quality=QualityTier.GOLD, decay={"sheltered": True})

        a = decay.evaluate(open_air, 3 * DAY, config).zombie
        b = decay.evaluate(sheltered, 3 * DAY, config).zombie
        assert a.condition < b.condition < 1.0


class TestFeed:
    """Feeding resets neglect and costs resources."""

    def test_feed_consumes_cost_and_boosts_happiness(self, make_zombie, config):
        zombie = make_zombie(happiness=50)
        outcome = decay.feed(zombie, MEAT, 10.0, config)

        assert outcome.inventory["Rotten Meat"] == Decimal(2)
        assert outcome.consumed == {"Rotten Meat": Decimal(1)}
        assert outcome.zombie.happiness == 60
        assert outcome.zombie.decay.last_fed_at == 10.0
        assert MEAT["Rotten Meat"] == Decimal(3)

    def test_feed_settles_pending_days_first(self, make_zombie, config):
        zombie = make_zombie(happiness=50, mood=ZombieMood.NEUTRAL)
        outcome = decay.feed(zombie, MEAT, 2 * DAY + 10, config)

        assert outcome.zombie.happiness == 50
        assert outcome.zombie.condition < 1.0
        assert isinstance(outcome.events[0], ZombieDecayedEvent)
        assert any(isinstance(e, ZombieFedEvent) for e in outcome.events)

    def test_fed_today_prevents_decay_for_that_day(self, make_zombie, config):
        zombie = make_zombie(happiness=50)
        fed = decay.feed(zombie, MEAT, 10.0, config).zombie
        evaluation = decay.evaluate(fed, DAY, config)
        assert evaluation.zombie.condition == 1.0
        assert evaluation.zombie.happiness == 60

    def test_feed_cooldown(self, make_zombie, config):
        zombie = make_zombie(decay={"last_fed_at": 0.0})
        with pytest.raises(OnCooldownError) as exc_info:
            decay.feed(zombie, MEAT, DAY / 2, config)
        assert exc_info.value.remaining == pytest.approx(DAY / 2)

    def test_tier_costs(self, make_zombie, config):
        assert decay.feeding_cost(make_zombie(tier=ZombieTier.BLUE), config) == {
            "Rotten Meat": Decimal(2)
        }
        assert decay.feeding_cost(make_zombie(tier=ZombieTier.RED), config) == {
            "Brains": Decimal(1)
        }

    def test_insufficient_food(self, make_zombie, config):
        zombie = make_zombie(tier=ZombieTier.RED)
        with pytest.raises(InsufficientResourceError):
            decay.feed(zombie, MEAT, 10.0, config)

    def test_contained_zombie_cannot_be_fed(self, make_zombie, config):
        zombie = make_zombie(
            decay={"contained": True}, status=ZombieStatus.IDLE, is_wandering=False
        )
        with pytest.raises(ZombieContainedError):
            decay.feed(zombie, MEAT, 10.0, config)

    def test_happiness_capped_at_100(self, make_zombie, config):
        zombie = make_zombie(happiness=95)
        outcome = decay.feed(zombie, MEAT, 10.0, config)
        assert outcome.zombie.happiness == 100
        fed_event = next(e for e in outcome.events if isinstance(e, ZombieFedEvent))
        assert fed_event.happiness_gained == 5

    def test_feeding_never_lowers_happiness(self, make_zombie, config):
        zombie = make_zombie(happiness=80, mood=ZombieMood.HAPPY)
        outcome = decay.feed(zombie, MEAT, 3 * DAY + 10, config)

        # three neglected days take 80 down to 65 before the boost
        assert outcome.events[0].happiness_after == 65
        assert outcome.zombie.happiness == 80
        assert outcome.zombie.decay.last_fed_at == 3 * DAY + 10
        assert outcome.zombie.condition < 1.0


class TestPet:
    """Petting gives a small boost on a daily cooldown."""

    def test_pet(self, make_zombie, config):
        zombie = make_zombie(happiness=50)
        evaluation = decay.pet(zombie, 10.0, config)
        assert evaluation.zombie.happiness == 55
        assert evaluation.zombie.decay.last_pet_at == 10.0
        assert isinstance(evaluation.events[-1], ZombiePettedEvent)

    def test_pet_cooldown(self, make_zombie, config):
        petted = decay.pet(make_zombie(), 10.0, config).zombie
        with pytest.raises(OnCooldownError):
            decay.pet(petted, 20.0, config)
        assert decay.pet(petted, DAY + 10.0, config).zombie.decay.last_pet_at == DAY + 10.0


class TestContainment:
    """Containment freezes decay; release resumes without back-charging."""

    def test_contained_zombie_does_not_decay(self, make_zombie, config):
        contained = decay.contain(make_zombie(), 0.0, config).zombie
        assert contained.contained
        assert contained.status is ZombieStatus.IDLE
        assert not contained.is_wandering

        evaluation = decay.evaluate(contained, 30 * DAY, config)
        assert evaluation.zombie is contained
        assert evaluation.events == ()

    def test_release_does_not_charge_contained_time(self, make_zombie, config):
        contained = decay.contain(make_zombie(), 0.0, config).zombie
        released = decay.release(contained, 30 * DAY, config)

        assert released.zombie.decay.last_evaluated_at == 30 * DAY
        assert released.zombie.status is ZombieStatus.WANDERING
        assert released.events == (
            ContainmentChangedEvent(zombie_id="z1", contained=False, at=30 * DAY),
        )
        later = decay.evaluate(released.zombie, 30 * DAY + DAY / 2, config)
        assert later.zombie.condition == 1.0

    def test_contain_settles_first(self, make_zombie, config):
        result = decay.contain(make_zombie(), 2 * DAY, config)
        assert result.zombie.condition < 1.0
        assert isinstance(result.events[-1], ContainmentChangedEvent)

    def test_double_contain_and_bad_release(self, make_zombie, config):
        zombie = make_zombie()
        with pytest.raises(InvalidStateError):
            decay.release(zombie, 0.0, config)
        contained = decay.contain(zombie, 0.0, config).zombie
        with pytest.raises(InvalidStateError):
            decay.contain(contained, 1.0, config)


class TestShelter:
    """Shelter toggling."""

    def test_toggle_emits_event(self, make_zombie, config):
        result = decay.set_sheltered(make_zombie(), True, 0.0, config)
        assert result.zombie.decay.sheltered
        assert result.events == (ShelterChangedEvent(zombie_id="z1", sheltered=True, at=0.0),)

    def test_same_setting_is_quiet(self, make_zombie, config):
        result = decay.set_sheltered(make_zombie(), False, 0.0, config)
        assert result.events == ()


class TestTypeModifier:
    """Per-type stability scales the quality rate."""

    def test_modifier_values(self):
        assert decay.decay_type_modifier(ZombieType.NORMAL) == 1.0
        assert decay.decay_type_modifier(ZombieType.ZOMBIE_KING) == 0.5
        assert decay.decay_type_modifier(ZombieType.CRAZY) == 1.5

    def test_effective_rate_includes_type(self, config):
        rate = decay.effective_decay_rate(
            QualityTier.GOLD, 80, False, config, zombie_type=ZombieType.MONSTER
        )
        assert rate == pytest.approx(0.02 * 0.75 * 0.6)

    def test_stable_type_keeps_more_condition(self, make_zombie, config):
        normal = make_zombie(zombie_type=ZombieType.NORMAL)
        king = make_zombie(zombie_type=ZombieType.ZOMBIE_KING)

        a = decay.evaluate(normal, 3 * DAY, config).zombie
        b = decay.evaluate(king, 3 * DAY, config).zombie

        # happiness 50, 45, 40 all sit in the 0.9 band
        assert a.condition == pytest.approx((1 - 0.015 * 0.9) ** 3)
        assert b.condition == pytest.approx((1 - 0.015 * 0.9 * 0.5) ** 3)
        assert a.condition < b.condition


class TestDecayedStats:
    """Combat stats follow condition."""

    @pytest.fixture
    def gold_zombie(self, make_zombie):
        return make_zombie(
            quality=QualityTier.GOLD,
            happiness=80,
            max_hp=120,
            current_hp=120,
            attack=12,
            defense=5,
            raised_stats=StatBlock(120, 12, 5),
        )

    def test_stats_scale_with_condition(self, gold_zombie, config):
        zombie = decay.evaluate(gold_zombie, 3 * DAY, config).zombie

        assert zombie.condition == pytest.approx(0.985 ** 3)
        assert zombie.max_hp == floor_stat(120 * zombie.condition) == 114
        assert zombie.current_hp == 114
        assert zombie.attack == 11
        assert zombie.defense == 4
        assert zombie.raised_stats == StatBlock(120, 12, 5)

    def test_wounded_zombie_keeps_its_hp(self, gold_zombie, config):
        wounded = replace(gold_zombie, current_hp=40)
        zombie = decay.evaluate(wounded, 3 * DAY, config).zombie
        assert zombie.current_hp == 40
        assert zombie.current_hp <= zombie.max_hp

    def test_stats_never_below_base_share(self, make_zombie, config):
        # raised unhappy, so its stats start below the type's base stats
        zombie = make_zombie(
            quality=QualityTier.BRONZE,
            happiness=0,
            mood=ZombieMood.UNHAPPY,
            max_hp=60,
            current_hp=60,
            attack=6,
            defense=3,
            decay={"condition": 0.505},
        )
        decayed = decay.evaluate(zombie, 7 * DAY, config).zombie

        assert decayed.condition == 0.5
        assert (decayed.max_hp, decayed.attack, decayed.defense) == (50, 5, 2)

    def test_peak_recorded_on_first_decay(self, make_zombie, config):
        zombie = make_zombie(max_hp=100, current_hp=100, attack=10, defense=5)
        assert zombie.raised_stats is None

        once = decay.evaluate(zombie, 7 * DAY, config).zombie
        twice = decay.evaluate(once, 14 * DAY, config).zombie

        assert once.raised_stats == StatBlock(100, 10, 5)
        assert twice.raised_stats == StatBlock(100, 10, 5)
        assert twice.max_hp == max(floor_stat(100 * twice.condition), 60)

    @pytest.mark.parametrize("days", [2, 5, 7])
    def test_stepped_stats_match_single_pass(self, gold_zombie, config, days):
        at_once = decay.evaluate(gold_zombie, days * DAY, config).zombie
        stepped = gold_zombie
        for k in range(1, days + 1):
            stepped = decay.evaluate(stepped, k * DAY, config).zombie

        assert at_once == stepped

    def test_fed_days_leave_stats_alone(self, gold_zombie, config):
        fed = replace(gold_zombie, decay=replace(gold_zombie.decay, last_fed_at=100.0))
        zombie = decay.evaluate(fed, DAY, config).zombie
        assert zombie.max_hp == 120
        assert zombie.raised_stats == StatBlock(120, 12, 5)
