"""Pydantic schema of the PDJ metadata document.

The metadata trailer embedded at the end of every exported file is this
document serialised as compact JSON.  Keys are camelCase on the wire
(``appVersion``, ``pointDensity``, ``xPos``) and snake_case in Python.

Document layout::

    {
      "appVersion": "0.1.0",
      "format": "path.jerryio v0.1",
      "gc": {"uol": "cm", "speedUnit": "rpm", "pointDensity": 2.0,
             "robot": {...}, "pathDefaults": {...}},
      "paths": [
        {"uid": "...", "name": "Path 1",
         "pc": {"speedMin": 20.0, "speedMax": 100.0},
         "segments": [{"controls": [{"x": 0.0, "y": 0.0}, ...],
                       "speed": [{"xPos": 0.0, "yPos": 1.0}]}]}
      ]
    }

Each model converts to and from the frozen domain dataclasses so the
dataclasses stay free of serialisation concerns.
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from path_export.configs.loader import GeneralConfig, RobotConfig
from path_export.paths.model import (
    Control,
    Path,
    PathConfig,
    Segment,
    SpeedKeyframe,
)
from path_export.units import UnitOfLength, UnitOfSpeed


class _CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


# ============================================================================
# GEOMETRY
# ============================================================================

class ControlModel(_CamelModel):
    """Segment control point in the editor unit of length."""
    x: float = Field(..., allow_inf_nan=False, description="X coordinate")
    y: float = Field(..., allow_inf_nan=False, description="Y coordinate")
    heading: Optional[float] = Field(None, description="Heading in degrees")

    @classmethod
    def from_control(cls, c: Control) -> ControlModel:
        return cls(x=c.x, y=c.y, heading=c.heading)

    def to_control(self) -> Control:
        return Control(self.x, self.y, self.heading)


class KeyframeModel(_CamelModel):
    """Normalised speed keyframe."""
    x_pos: float = Field(..., ge=0.0, lt=1.0, description="Fraction along segment")
    y_pos: float = Field(..., ge=0.0, le=1.0, description="Normalised speed")


class SegmentModel(_CamelModel):
    """Segment with controls and speed keyframes."""
    controls: List[ControlModel] = Field(..., min_length=2)
    speed: List[KeyframeModel] = Field(default_factory=list)

    @field_validator('speed')
    @classmethod
    def validate_sorted(cls, v: List[KeyframeModel]) -> List[KeyframeModel]:
        positions = [kf.x_pos for kf in v]
        if positions != sorted(positions):
            raise ValueError(f"speed keyframes must be sorted by xPos, got {positions}")
        return v

    @classmethod
    def from_segment(cls, seg: Segment) -> SegmentModel:
        return cls(
            controls=[ControlModel.from_control(c) for c in seg.controls],
            speed=[
                KeyframeModel(x_pos=kf.x_pos, y_pos=kf.y_pos)
                for kf in seg.speed_keyframes
            ],
        )

    def to_segment(self) -> Segment:
        return Segment(
            tuple(c.to_control() for c in self.controls),
            tuple(SpeedKeyframe(kf.x_pos, kf.y_pos) for kf in self.speed),
        )


# ============================================================================
# PATHS
# ============================================================================

class PathConfigModel(_CamelModel):
    """Per-path speed limits (unit taken from the general config)."""
    speed_min: float = Field(..., ge=0.0)
    speed_max: float = Field(..., ge=0.0)

    @model_validator(mode='after')
    def validate_order(self) -> PathConfigModel:
        if self.speed_min > self.speed_max:
            raise ValueError(
                f"speedMin {self.speed_min} exceeds speedMax {self.speed_max}"
            )
        return self


class PathModel(_CamelModel):
    """One path with its segments."""
    uid: str = Field(..., min_length=1)
    name: str
    pc: PathConfigModel
    segments: List[SegmentModel] = Field(default_factory=list)

    @classmethod
    def from_path(cls, path: Path) -> PathModel:
        return cls(
            uid=path.uid,
            name=path.name,
            pc=PathConfigModel(
                speed_min=path.config.speed_min,
                speed_max=path.config.speed_max,
            ),
            segments=[SegmentModel.from_segment(s) for s in path.segments],
        )

    def to_path(self, speed_unit: UnitOfSpeed) -> Path:
        return Path(
            name=self.name,
            segments=tuple(s.to_segment() for s in self.segments),
            config=PathConfig(self.pc.speed_min, self.pc.speed_max, speed_unit),
            uid=self.uid,
        )


# ============================================================================
# GENERAL CONFIG
# ============================================================================

class RobotModel(_CamelModel):
    width: float = Field(..., gt=0.0)
    height: float = Field(..., gt=0.0)
    holonomic: bool = False


class GeneralConfigModel(_CamelModel):
    """Serialised :class:`GeneralConfig`."""
    uol: str = Field(..., description="Unit of length symbol")
    speed_unit: str = Field(..., description="Unit of speed symbol")
    point_density: float = Field(..., gt=0.0, allow_inf_nan=False)
    robot: RobotModel
    path_defaults: PathConfigModel

    @field_validator('uol')
    @classmethod
    def validate_uol(cls, v: str) -> str:
        UnitOfLength.from_symbol(v)
        return v

    @field_validator('speed_unit')
    @classmethod
    def validate_speed_unit(cls, v: str) -> str:
        UnitOfSpeed.from_symbol(v)
        return v

    @classmethod
    def from_config(cls, cfg: GeneralConfig) -> GeneralConfigModel:
        return cls(
            uol=cfg.uol.symbol,
            speed_unit=cfg.speed_unit.symbol,
            point_density=cfg.point_density,
            robot=RobotModel(
                width=cfg.robot.width,
                height=cfg.robot.height,
                holonomic=cfg.robot.holonomic,
            ),
            path_defaults=PathConfigModel(
                speed_min=cfg.path_defaults.speed_min,
                speed_max=cfg.path_defaults.speed_max,
            ),
        )

    def to_config(self) -> GeneralConfig:
        speed_unit = UnitOfSpeed.from_symbol(self.speed_unit)
        return GeneralConfig(
            uol=UnitOfLength.from_symbol(self.uol),
            speed_unit=speed_unit,
            point_density=self.point_density,
            robot=RobotConfig(
                width=self.robot.width,
                height=self.robot.height,
                holonomic=self.robot.holonomic,
            ),
            path_defaults=PathConfig(
                self.path_defaults.speed_min,
                self.path_defaults.speed_max,
                speed_unit,
            ),
        )


# ============================================================================
# DOCUMENT
# ============================================================================

class PDJDocument(_CamelModel):
    """Top-level metadata document."""
    app_version: str
    format: str = Field(..., min_length=1, description="Name of the exporting format")
    gc: GeneralConfigModel
    paths: List[PathModel] = Field(default_factory=list)

    @classmethod
    def from_parts(
        cls,
        app_version: str,
        format_name: str,
        config: GeneralConfig,
        paths: tuple[Path, ...],
    ) -> PDJDocument:
        return cls(
            app_version=app_version,
            format=format_name,
            gc=GeneralConfigModel.from_config(config),
            paths=[PathModel.from_path(p) for p in paths],
        )

    def dump(self) -> dict:
        """JSON-compatible mapping with wire (camelCase) keys."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
