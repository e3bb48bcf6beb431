"""Tests for building systems from definition tables.

Critical Invariants:
- Missing optional hooks become no-ops
- Missing required hooks raise UnimplementedBehaviorError when driven
- Each built system gets its own deep copy of the definition data
"""

import pytest

from ringecs import (
    PRESENT,
    SystemDefinition,
    make_entity_system,
    make_event_system,
    make_system,
)
from ringecs.core.errors import UnimplementedBehaviorError


def test_provided_hooks():
    definition = SystemDefinition(update=lambda s, dt: None, matches=lambda s, e: True)
    assert definition.provided_hooks() == frozenset({"update", "matches"})


def test_make_system_runs_hooks_with_system_first(world):
    calls = []
    system = make_system(
        name="counter",
        data={"ticks": 0},
        initialize=lambda s: calls.append("init"),
        update=lambda s, dt: s.data.update(ticks=s.data["ticks"] + 1),
        process=lambda s: calls.append(("process", s.data["ticks"])),
        destroy=lambda s: calls.append("destroy"),
    )
    assert system.name == "counter"

    world.add_system(system)
    world.tick(0.1)
    world.tick(0.1)
    world.remove_system(system)

    assert calls == ["init", ("process", 1), ("process", 2), "destroy"]


def test_make_system_without_update_raises_when_driven(world):
    system = world.add_system(make_system(process=lambda s: None))
    with pytest.raises(UnimplementedBehaviorError) as excinfo:
        world.update(0.1)
    assert excinfo.value.hook == "update"
    assert excinfo.value.behavior == system.name == "DefinedSystem"


def test_optional_hooks_default_to_noops(world):
    system = make_system(update=lambda s, dt: None, process=lambda s: None)
    world.add_system(system)
    world.remove_system(system)


def test_data_is_deep_copied_per_instance():
    definition = SystemDefinition(data={"seen": []})
    first = make_event_system(definition)
    second = make_event_system(definition)
    first.data["seen"].append(1)
    assert second.data == {"seen": []}
    assert definition.data == {"seen": []}


def test_make_event_system_wires_listeners(world):
    system = make_event_system(
        data={"spawned": []},
        listeners={"#.+": lambda s, entity: s.data["spawned"].append(entity)},
    )
    world.add_system(system)
    entity = world.create_entity()
    world.tick(0.1)

    assert system.data["spawned"] == [entity]


def test_make_entity_system(world):
    log = []
    system = make_entity_system(
        matches=lambda s, e: s.world.has_component(e, "player"),
        update_entity=lambda s, e, dt: log.append(("update", e)),
        process_entity=lambda s, e: log.append(("process", e)),
        process=lambda s: log.append("after"),
    )
    world.add_system(system)
    hero = world.create_entity({"player": PRESENT})

    world.tick(0.1)

    assert hero in system
    assert log == [("update", hero), ("process", hero), "after"]


def test_make_entity_system_requires_matches(world):
    world.create_entity()
    with pytest.raises(UnimplementedBehaviorError, match="matches"):
        world.add_system(make_entity_system(update_entity=lambda s, e, dt: None))


def test_definition_and_keyword_hooks_are_exclusive():
    with pytest.raises(TypeError):
        make_system(SystemDefinition(), update=lambda s, dt: None)


def test_definition_is_frozen():
    definition = SystemDefinition()
    with pytest.raises(AttributeError):
        definition.name = "other"  # type: ignore[misc]
