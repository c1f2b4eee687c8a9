from __future__ import annotations

import pytest

from pyartifacts.state.store import ArtifactStore
from pyartifacts.views import build_artifact_tables, build_markers, display_name


def _store() -> ArtifactStore:
    store = ArtifactStore()
    store.apply_refresh(
        {
            "result": {
                "b-shard": {
                    "latE6": 1_000_000,
                    "lngE6": 2_000_000,
                    "title": "Shard B",
                    "artifactBrief": {"fragment": {"jarvis": {}}},
                },
                "z-target": {
                    "latE6": 3_000_000,
                    "lngE6": 4_000_000,
                    "title": "Target Z",
                    "artifactBrief": {"target": {"jarvis": {}}, "fragment": {"jarvis": {}, "amar": {}}},
                },
                "a-shard": {
                    "title": "Position unknown",
                    "artifactBrief": {"fragment": {"jarvis": {}}},
                },
            }
        }
    )
    return store


def test_display_name() -> None:
    assert display_name("jarvis") == "Jarvis shards"


def test_markers_prefer_target_icon() -> None:
    markers = {(m.location_id, m.kind): m for m in build_markers(_store())}

    assert set(markers) == {("b-shard", "jarvis"), ("z-target", "jarvis"), ("z-target", "amar")}

    target = markers[("z-target", "jarvis")]
    assert target.icon_url.endswith("/jarvis_shard_target.png")
    assert target.icon_size == 50
    assert target.opacity == 1.0
    assert target.latitude == pytest.approx(3.0)

    shard = markers[("b-shard", "jarvis")]
    assert shard.icon_url.endswith("/jarvis_shard.png")
    assert shard.icon_size == 30
    assert shard.opacity == 0.6
    assert shard.is_target is False


def test_tables_sort_targets_first_then_by_location() -> None:
    tables = {table.kind: table for table in build_artifact_tables(_store())}

    assert list(tables) == ["amar", "jarvis"]
    jarvis = tables["jarvis"]
    assert jarvis.display_name == "Jarvis shards"
    assert [row.location_id for row in jarvis.rows] == ["z-target", "a-shard", "b-shard"]
    assert jarvis.rows[0].is_target and jarvis.rows[0].has_fragments
    assert jarvis.rows[1].latitude is None

    assert [row.location_id for row in tables["amar"].rows] == ["z-target"]


def test_empty_store_has_no_views() -> None:
    store = ArtifactStore()
    assert build_markers(store) == []
    assert build_artifact_tables(store) == []
