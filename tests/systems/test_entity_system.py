"""Tests for EntitySystem derived membership.

Critical Invariants:
- Membership equals the set of alive entities matching the predicate
- Membership is seeded on add and kept current by notifications
- Destroyed entities always leave the set
- Per-entity hooks run in join order over a snapshot, skipping departed members
"""

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from ringecs import PRESENT, EntitySystem, World, WorldSettings
from ringecs.core.errors import UnimplementedBehaviorError


class Dying(EntitySystem):
    """Members: entities whose health dropped to zero or below."""

    def __init__(self):
        super().__init__()
        self.updated = []
        self.processed = []

    def matches(self, entity):
        hp = self.world.get_component(entity, "health", "hp")
        return hp is not None and hp <= 0

    def update_entity(self, entity, dt):
        self.updated.append((entity, dt))

    def process_entity(self, entity):
        self.processed.append(entity)


class Tagged(EntitySystem):
    """Members: entities carrying the 'player' tag."""

    def matches(self, entity):
        return self.world.has_component(entity, "player")

    def update_entity(self, entity, dt):
        pass

    def process_entity(self, entity):
        pass


def test_membership_seeded_from_existing_entities(world):
    dead = world.create_entity({"health": {"hp": 0}})
    world.create_entity({"health": {"hp": 5}})

    system = world.add_system(Dying())

    assert system.entities == (dead,)


def test_component_added_and_removed_update_membership(world):
    system = world.add_system(Tagged())
    hero = world.create_entity()
    assert hero not in system

    world.add_component(hero, "player")
    assert hero in system

    world.remove_component(hero, "player")
    assert hero not in system


def test_component_change_updates_membership(world):
    """CRITICAL: Value predicates follow set_component without re-adding."""
    system = world.add_system(Dying())
    hero = world.create_entity({"health": {"hp": 110}})
    assert len(system) == 0

    world.set_component(hero, "health", "hp", 0)
    assert list(system) == [hero]

    world.set_component(hero, "health", "hp", 50)
    assert list(system) == []


def test_created_entity_joins_after_initial_components(world):
    system = world.add_system(Tagged())
    hero = world.create_entity({"player": PRESENT})
    assert system.entities == (hero,)


def test_destroyed_entity_leaves(world):
    system = world.add_system(Tagged())
    hero = world.create_entity({"player": PRESENT})
    world.destroy_entity(hero)
    assert hero not in system
    assert len(system) == 0


def test_unrelated_entities_untouched(world):
    system = world.add_system(Tagged())
    hero = world.create_entity({"player": PRESENT})
    other = world.create_entity({"player": PRESENT})
    world.destroy_entity(other)
    assert system.entities == (hero,)


def test_per_entity_hooks_run_in_join_order(world):
    system = world.add_system(Dying())
    first = world.create_entity({"health": {"hp": 1}})
    second = world.create_entity({"health": {"hp": 0}})
    world.set_component(first, "health", "hp", -1)

    world.update(0.25)
    world.process()

    assert system.updated == [(second, 0.25), (first, 0.25)]
    assert system.processed == [second, first]


def test_member_destroyed_mid_pass_is_skipped(world):
    class Reaper(Dying):
        def update_entity(self, entity, dt):
            super().update_entity(entity, dt)
            for other in self.entities:
                if other != entity:
                    self.world.destroy_entity(other)

    system = world.add_system(Reaper())
    first = world.create_entity({"health": {"hp": 0}})
    world.create_entity({"health": {"hp": 0}})

    world.update(1.0)

    assert system.updated == [(first, 1.0)]


def test_member_joining_mid_pass_waits_for_next_tick(world):
    class Spawner(Dying):
        def update_entity(self, entity, dt):
            super().update_entity(entity, dt)
            if len(self.updated) == 1:
                self.world.create_entity({"health": {"hp": 0}})

    system = world.add_system(Spawner())
    world.create_entity({"health": {"hp": 0}})

    world.update(1.0)
    assert len(system.updated) == 1
    assert len(system) == 2

    world.update(1.0)
    assert len(system.updated) == 3


def test_removal_clears_membership_and_subscriptions(world):
    system = world.add_system(Tagged())
    world.create_entity({"player": PRESENT})
    world.remove_system(system)

    assert len(system) == 0
    assert world.bus.subscriber_count() == 0


def test_membership_is_read_only(world):
    system = world.add_system(Tagged())
    world.create_entity({"player": PRESENT})
    assert isinstance(system.entities, tuple)
    with pytest.raises(AttributeError):
        system.entities = ()


def test_missing_hooks_raise_when_needed(world):
    class Bare(EntitySystem):
        pass

    world.create_entity()
    with pytest.raises(UnimplementedBehaviorError, match="matches"):
        world.add_system(Bare())
    assert world.systems == ()


def test_muted_mutations_do_not_update_membership(world):
    system = world.add_system(Tagged())
    with world.muted():
        hero = world.create_entity({"player": PRESENT})
    assert hero not in system


def test_silent_world_does_not_track_membership():
    world = World(WorldSettings(notify=False))
    system = world.add_system(Tagged())
    world.create_entity({"player": PRESENT})
    assert len(system) == 0


operations = st.lists(
    st.tuples(st.sampled_from(["create", "destroy", "tag", "untag", "hurt", "heal"]), st.integers(0, 5)),
    max_size=40,
)


@settings(max_examples=50, deadline=None)
@given(operations)
def test_membership_matches_predicate_after_any_mutations(ops):
    """CRITICAL: Membership equals {e alive : matches(e)} after every step."""
    world = World(WorldSettings())
    tagged = world.add_system(Tagged())
    dying = world.add_system(Dying())
    created = []

    for op, index in ops:
        alive = world.entities()
        target = alive[index % len(alive)] if alive else None
        if op == "create":
            created.append(world.create_entity({"health": {"hp": index - 2}}))
        elif target is None:
            continue
        elif op == "destroy":
            world.destroy_entity(target)
        elif op == "tag" and not world.has_component(target, "player"):
            world.add_component(target, "player")
        elif op == "untag" and world.has_component(target, "player"):
            world.remove_component(target, "player")
        elif op == "hurt":
            world.set_component(target, "health", "hp", -index)
        elif op == "heal":
            world.set_component(target, "health", "hp", index + 1)

        alive = world.entities()
        assert set(tagged) == {e for e in alive if world.has_component(e, "player")}
        assert set(dying) == {e for e in alive if world.get_component(e, "health", "hp") <= 0}
