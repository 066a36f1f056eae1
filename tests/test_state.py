"""Tests for the application state and the PDJ metadata schema.

The metadata document is what the trailer carries, so these tests pin its
wire shape (camelCase keys) and the state <-> document round trip.
"""

from __future__ import annotations

import copy

import pytest

from path_export import __version__
from path_export.app import (
    DEFAULT_FORMAT_NAME,
    ApplicationState,
    MetadataError,
    PDJDocument,
    load_pdj_document,
)
from path_export.configs import GeneralConfig
from path_export.paths import Control, Path, PathConfig, SpeedKeyframe, curve, line
from path_export.units import UnitOfLength, UnitOfSpeed


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def state() -> ApplicationState:
    path = Path(
        "Auton 1",
        (
            curve(
                Control(0, 0, 90.0), Control(10, 0), Control(20, 10), Control(30, 10),
                SpeedKeyframe(0.0, 1.0), SpeedKeyframe(0.5, 0.25),
            ),
            line(Control(30, 10), Control(30, 40, 180.0)),
        ),
        uid="abcdefghij",
    )
    return ApplicationState().with_paths(path)


@pytest.fixture()
def metadata(state: ApplicationState) -> dict:
    return state.export_metadata()


# ---------------------------------------------------------------------------
# Export
# ---------------------------------------------------------------------------


class TestExportMetadata:
    def test_top_level_keys(self, metadata: dict) -> None:
        assert set(metadata) == {"appVersion", "format", "gc", "paths"}
        assert metadata["appVersion"] == __version__
        assert metadata["format"] == DEFAULT_FORMAT_NAME

    def test_general_config_keys(self, metadata: dict) -> None:
        gc = metadata["gc"]
        assert gc["uol"] == "cm"
        assert gc["speedUnit"] == "rpm"
        assert gc["pointDensity"] == 2.0
        assert gc["pathDefaults"] == {"speedMin": 20.0, "speedMax": 100.0}

    def test_path_layout(self, metadata: dict) -> None:
        (path,) = metadata["paths"]
        assert path["uid"] == "abcdefghij"
        assert path["name"] == "Auton 1"
        assert path["pc"] == {"speedMin": 20.0, "speedMax": 100.0}
        first, second = path["segments"]
        assert len(first["controls"]) == 4
        assert first["speed"] == [
            {"xPos": 0.0, "yPos": 1.0},
            {"xPos": 0.5, "yPos": 0.25},
        ]
        assert second["speed"] == []

    def test_heading_only_when_set(self, metadata: dict) -> None:
        controls = metadata["paths"][0]["segments"][0]["controls"]
        assert controls[0] == {"x": 0.0, "y": 0.0, "heading": 90.0}
        assert controls[1] == {"x": 10.0, "y": 0.0}

    def test_no_paths(self) -> None:
        assert ApplicationState().export_metadata()["paths"] == []

    def test_state_is_not_modified(self, state: ApplicationState) -> None:
        before = copy.deepcopy(state)
        state.export_metadata()
        assert state == before


# ---------------------------------------------------------------------------
# Import
# ---------------------------------------------------------------------------


class TestFromMetadata:
    def test_round_trip(self, state: ApplicationState, metadata: dict) -> None:
        assert ApplicationState.from_metadata(metadata) == state

    def test_functional_alias(self, state: ApplicationState, metadata: dict) -> None:
        assert load_pdj_document(metadata) == state

    def test_snake_case_keys_accepted(self, state: ApplicationState) -> None:
        doc = PDJDocument.from_parts(
            __version__, DEFAULT_FORMAT_NAME, state.config, state.paths,
        )
        raw = doc.model_dump(mode="json")
        assert "app_version" in raw
        assert ApplicationState.from_metadata(raw) == state

    def test_other_units(self) -> None:
        cfg = GeneralConfig(
            uol=UnitOfLength.INCH,
            speed_unit=UnitOfSpeed.INCH_PER_SECOND,
            point_density=1.0,
            path_defaults=PathConfig(5.0, 50.0, UnitOfSpeed.INCH_PER_SECOND),
        )
        original = ApplicationState(config=cfg)
        loaded = ApplicationState.from_metadata(original.export_metadata())
        assert loaded.config == cfg

    def test_format_mismatch(self, metadata: dict) -> None:
        metadata["format"] = "LemLib v0.4"
        with pytest.raises(MetadataError, match="LemLib"):
            ApplicationState.from_metadata(metadata)

    def test_missing_config(self, metadata: dict) -> None:
        del metadata["gc"]
        with pytest.raises(MetadataError, match="Invalid metadata"):
            ApplicationState.from_metadata(metadata)

    def test_unknown_unit(self, metadata: dict) -> None:
        metadata["gc"]["uol"] = "yd"
        with pytest.raises(MetadataError):
            ApplicationState.from_metadata(metadata)

    def test_single_control_segment(self, metadata: dict) -> None:
        metadata["paths"][0]["segments"][0]["controls"] = [{"x": 0, "y": 0}]
        with pytest.raises(MetadataError):
            ApplicationState.from_metadata(metadata)

    def test_non_finite_control(self, metadata: dict) -> None:
        metadata["paths"][0]["segments"][1]["controls"][0]["x"] = float("nan")
        with pytest.raises(MetadataError):
            ApplicationState.from_metadata(metadata)

    def test_unsorted_keyframes(self, metadata: dict) -> None:
        metadata["paths"][0]["segments"][0]["speed"].reverse()
        with pytest.raises(MetadataError):
            ApplicationState.from_metadata(metadata)

    def test_inverted_speed_limits(self, metadata: dict) -> None:
        metadata["paths"][0]["pc"] = {"speedMin": 80, "speedMax": 10}
        with pytest.raises(MetadataError):
            ApplicationState.from_metadata(metadata)

    def test_unknown_keys_ignored(self, state: ApplicationState, metadata: dict) -> None:
        metadata["paths"][0]["lock"] = False
        metadata["gc"]["showRobot"] = True
        assert ApplicationState.from_metadata(metadata) == state
