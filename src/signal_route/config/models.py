import os
from math import isfinite
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator, model_validator


class LogModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    debug: bool = False


# ----------------- GRAPH ---------------------


class AttributeNamesModel(BaseModel):
    """GraphML attribute names per field; *_key are positional key ids kept for old exports."""

    model_config = ConfigDict(extra="forbid")
    lat: list[str] = Field(default_factory=lambda: ["lat", "y"])
    lon: list[str] = Field(default_factory=lambda: ["lon", "x"])
    length: list[str] = Field(default_factory=lambda: ["length"])
    name: list[str] = Field(default_factory=lambda: ["name"])
    oneway: list[str] = Field(default_factory=lambda: ["oneway"])
    lat_key: str | None = "d4"
    lon_key: str | None = "d5"
    length_key: str | None = "d16"
    name_key: str | None = "d13"


class GraphByPath(BaseModel):
    model_config = ConfigDict(extra="forbid")
    file: str
    fmt: Literal["graphml"] = "graphml"
    attributes: AttributeNamesModel = Field(default_factory=AttributeNamesModel)

    @field_validator("file")
    @classmethod
    def _expand(cls, v: str) -> str:
        return os.path.expandvars(os.path.expanduser(v))


# ----------------- LOCATORS ---------------------


class LocatorNearestModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    kind: Literal["nearest"] = "nearest"
    snap_tolerance_m: float = Field(default=20.0, ge=0)


LocatorUnion = Annotated[LocatorNearestModel, Field(discriminator="kind")]

# ----------------- COST MODELS ---------------------


class CostDistanceModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    kind: Literal["distance"] = "distance"


class CostTimeWithDelayModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    kind: Literal["time_with_delay"] = "time_with_delay"
    avg_speed_mps: float = Field(default=13.9, gt=0)
    # which end of an edge a per-node signal delay is charged on
    delay_key: Literal["origin", "destination"] = "destination"


CostUnion = Annotated[
    CostDistanceModel | CostTimeWithDelayModel,
    Field(discriminator="kind"),
]

# ----------------- ROUTERS / SAMPLERS ---------------------


class RouterDijkstraModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    kind: Literal["dijkstra"] = "dijkstra"


RouterUnion = Annotated[RouterDijkstraModel, Field(discriminator="kind")]


class SamplerRandomWalkModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    kind: Literal["random_walk"] = "random_walk"
    trials: int = 2000
    max_steps: int = 1000

    @field_validator("trials", "max_steps")
    def _nonneg(cls, v: int, info: ValidationInfo) -> int:
        if v < 0:
            raise ValueError(f"{info.field_name} must be >= 0")
        return v


SamplerUnion = Annotated[SamplerRandomWalkModel, Field(discriminator="kind")]

# ------------------ SIGNALS -----------------------------


class SignalEntryModel(BaseModel):
    """Either `node` or both `from_node` and `to_node`."""

    model_config = ConfigDict(extra="forbid")
    node: str | None = None
    from_node: str | None = None
    to_node: str | None = None
    delay_s: float

    @field_validator("delay_s")
    @classmethod
    def _finite_nonneg(cls, v: float) -> float:
        if not isfinite(v) or v < 0:
            raise ValueError("delay_s must be finite and >= 0")
        return v

    @model_validator(mode="after")
    def _one_shape(self):
        pair = self.from_node is not None or self.to_node is not None
        if self.node is not None and pair:
            raise ValueError("give either node or from_node/to_node, not both")
        if pair and (self.from_node is None or self.to_node is None):
            raise ValueError("from_node and to_node must be given together")
        if self.node is None and not pair:
            raise ValueError("signal entry needs node or from_node/to_node")
        return self

    def as_entry(self) -> tuple:
        if self.node is not None:
            return (self.node, self.delay_s)
        return (self.from_node, self.to_node, self.delay_s)


# ------------------------------------------------------------------


class MechanicsModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    seed: int | None = None  # None: fresh entropy each run

    locator: LocatorUnion = Field(default_factory=LocatorNearestModel)
    cost: CostUnion = Field(default_factory=CostTimeWithDelayModel)
    router: RouterUnion = Field(default_factory=RouterDijkstraModel)
    sampler: SamplerUnion = Field(default_factory=SamplerRandomWalkModel)


class RoutingModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    name: str = "default"
    run_id: str = "local"
    graph: GraphByPath | None = None  # may be omitted when a prebuilt graph is passed to build()
    log: LogModel = LogModel()
    mechanics: MechanicsModel = Field(default_factory=MechanicsModel)
    signals: list[SignalEntryModel] = Field(default_factory=list)
