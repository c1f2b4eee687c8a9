from __future__ import annotations

from typing import Any

import pytest

from pyartifacts.hooks import Hooks
from pyartifacts.state.events import ArtifactsUpdated
from pyartifacts.state.store import ArtifactStore


def _example_payload() -> dict[str, Any]:
    return {
        "result": {
            "G1": {
                "latE6": 51_000_000,
                "lngE6": -1_000_000,
                "title": "Target portal",
                "timestamp": 100,
                "artifactBrief": {"target": {"alpha": {}}, "fragment": {}},
            },
            "G2": {
                "latE6": 52_000_000,
                "lngE6": -2_000_000,
                "title": "Shard portal",
                "timestamp": 200,
                "artifactBrief": {"fragment": {"alpha": {}}},
            },
            "G3": {
                "latE6": 53_000_000,
                "lngE6": -3_000_000,
                "title": "Shard moved away",
                "timestamp": 300,
            },
        }
    }


def _recording_store() -> tuple[ArtifactStore, list[ArtifactsUpdated]]:
    hooks = Hooks()
    events: list[ArtifactsUpdated] = []
    hooks.add_hook("artifactsUpdated", events.append)
    return ArtifactStore(hooks=hooks), events


def test_end_to_end_target_and_fragment() -> None:
    store, _ = _recording_store()

    assert store.apply_refresh(_example_payload()) is True

    assert store.list_known_kinds() == ["alpha"]
    assert store.is_known_kind("alpha")
    assert not store.is_known_kind("beta")
    assert set(store.list_relevant_locations()) == {"G1", "G2"}

    g1 = store.get_detail("G1", "alpha")
    g2 = store.get_detail("G2", "alpha")
    assert g1 is not None and g1.is_target is True
    assert g1.has_fragments is False
    assert g2 is not None and g2.has_fragments is True
    assert g2.is_target is False


def test_target_detail_carries_no_ownership() -> None:
    store, _ = _recording_store()
    store.apply_refresh(_example_payload())

    detail = store.get_detail("G1", "alpha")
    assert detail is not None
    assert set(detail.model_dump()) == {"is_target", "has_fragments"}


def test_location_without_brief_is_listed_as_entity_only() -> None:
    store, _ = _recording_store()
    store.apply_refresh(_example_payload())

    assert not store.is_relevant_location("G3")
    assert "G3" not in store.list_relevant_locations()
    assert store.get_location("G3") is None

    entities = {entity.location_id: entity for entity in store.list_entities()}
    assert set(entities) == {"G1", "G2", "G3"}
    assert entities["G3"].timestamp == 300
    assert entities["G3"].raw["title"] == "Shard moved away"


def test_unknown_pairs_return_none() -> None:
    store, _ = _recording_store()
    store.apply_refresh(_example_payload())

    assert store.get_detail("G1", "beta") is None
    assert store.get_detail("nowhere", "alpha") is None
    assert ArtifactStore().get_detail("G1", "alpha") is None


def test_location_position_in_degrees() -> None:
    store, _ = _recording_store()
    store.apply_refresh(_example_payload())

    fact = store.get_location("G2")
    assert fact is not None
    assert fact.title == "Shard portal"
    assert fact.latitude == pytest.approx(52.0)
    assert fact.longitude == pytest.approx(-2.0)


@pytest.mark.parametrize(
    "payload",
    [
        {},
        {"error": "missing version"},
        {"error": "out of quota", "result": {}},
        {"result": None},
        {"result": ["not", "a", "mapping"]},
    ],
)
def test_bad_payload_leaves_store_untouched(payload: dict[str, Any], caplog: pytest.LogCaptureFixture) -> None:
    store, events = _recording_store()
    store.apply_refresh(_example_payload())
    before = store.snapshot
    events.clear()

    with caplog.at_level("WARNING"):
        assert store.apply_refresh(payload) is False

    assert store.snapshot is before
    assert store.generation == 1
    assert events == []
    assert "Failed to find result" in caplog.text


def test_refresh_replaces_everything() -> None:
    store, _ = _recording_store()
    store.apply_refresh(_example_payload())

    store.apply_refresh(
        {"result": {"G9": {"title": "Elsewhere", "artifactBrief": {"target": {"beta": {}}}}}}
    )

    assert store.list_known_kinds() == ["beta"]
    assert store.list_relevant_locations() == ["G9"]
    assert [entity.location_id for entity in store.list_entities()] == ["G9"]
    assert store.get_detail("G1", "alpha") is None


def test_same_payload_twice_is_idempotent() -> None:
    store, _ = _recording_store()

    store.apply_refresh(_example_payload())
    first = store.snapshot
    store.apply_refresh(_example_payload())
    second = store.snapshot

    assert first is not second
    assert first.facts == second.facts
    assert first.known_kinds == second.known_kinds
    assert first.entities == second.entities
    assert len(store.list_entities()) == 3


def test_change_event_carries_old_and_new_entities() -> None:
    store, events = _recording_store()

    store.apply_refresh(_example_payload())
    store.apply_refresh({"result": {}})

    assert len(events) == 2
    assert events[0].old == ()
    assert [entity.location_id for entity in events[0].new] == ["G1", "G2", "G3"]
    assert events[0].generation == 1
    assert [entity.location_id for entity in events[1].old] == ["G1", "G2", "G3"]
    assert events[1].new == ()
    assert events[1].generation == 2


def test_failing_listener_does_not_break_refresh() -> None:
    hooks = Hooks()

    def _boom(_: ArtifactsUpdated) -> None:
        raise RuntimeError("listener bug")

    seen: list[ArtifactsUpdated] = []
    hooks.add_hook("artifactsUpdated", _boom)
    hooks.add_hook("artifactsUpdated", seen.append)
    store = ArtifactStore(hooks=hooks)

    assert store.apply_refresh(_example_payload()) is True
    assert len(seen) == 1
    assert store.is_relevant_location("G1")


def test_clear_empties_all_containers() -> None:
    store, _ = _recording_store()
    store.apply_refresh(_example_payload())

    store.clear()

    assert store.list_known_kinds() == []
    assert store.list_relevant_locations() == []
    assert store.list_entities() == []


def test_published_generation_is_read_only() -> None:
    store, _ = _recording_store()
    store.apply_refresh(_example_payload())

    with pytest.raises(TypeError):
        store.snapshot.facts["G9"] = store.snapshot.facts["G1"]  # type: ignore[index]

    location = store.get_location("G1")
    assert location is not None
    with pytest.raises(TypeError):
        location.kinds["beta"] = location.kinds["alpha"]  # type: ignore[index]

    assert set(store.list_relevant_locations()) == {"G1", "G2"}
    assert store.get_detail("G1", "beta") is None
    assert location.model_dump()["kinds"] == {"alpha": {"is_target": True, "has_fragments": False}}
