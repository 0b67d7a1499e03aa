"""
Core data models for GA Hull.

These models define the points, contours, boxes and results that flow
through the pipeline, from raw traced contours to serialized polylines.
"""

from enum import Enum
from typing import Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator


# =============================================================================
# Enumerations
# =============================================================================

class ViewName(str, Enum):
    """View of a General Arrangement drawing."""

    TOP = "top"
    SIDE = "side"
    PROFILE = "profile"
    BODY = "body"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, value: "str | ViewName") -> "ViewName":
        """Parse a view name, returning UNKNOWN for anything unrecognized."""
        if isinstance(value, ViewName):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return cls.UNKNOWN


class ContourRole(str, Enum):
    """Semantic role assigned to a traced contour."""

    # Top (plan) view
    PLAN_OUTLINE = "PLAN_OUTLINE"
    DECK_SHAPE = "DECK_SHAPE"

    # Side view
    SHEER = "SHEER"
    KEEL = "KEEL"
    WATERLINE = "WATERLINE"

    # Body plan
    STATION = "STATION"
    BUTTOCK = "BUTTOCK"

    UNASSIGNED = "UNASSIGNED"


# =============================================================================
# Geometry
# =============================================================================

class Point2D(BaseModel):
    """2D point in image space (origin top-left, y down)."""

    model_config = ConfigDict(frozen=True)

    x: float
    y: float


class BoundingBox(BaseModel):
    """Axis-aligned box in pixel space."""

    model_config = ConfigDict(frozen=True)

    x: float = Field(description="X coordinate of top-left corner")
    y: float = Field(description="Y coordinate of top-left corner")
    width: float = Field(description="Width of bounding box")
    height: float = Field(description="Height of bounding box")

    @property
    def x2(self) -> float:
        """Right edge X coordinate."""
        return self.x + self.width

    @property
    def y2(self) -> float:
        """Bottom edge Y coordinate."""
        return self.y + self.height

    @property
    def area(self) -> float:
        """Area of bounding box."""
        return self.width * self.height

    @property
    def aspect_ratio(self) -> float:
        """Width over height, with the height clamped to at least 1."""
        return self.width / max(self.height, 1)

    @classmethod
    def from_points(cls, points: Sequence[Point2D]) -> Optional["BoundingBox"]:
        """
        Compute the bounding box of a point sequence.

        Returns None for an empty sequence.
        """
        if not points:
            return None

        xs = [p.x for p in points]
        ys = [p.y for p in points]
        min_x, min_y = min(xs), min(ys)

        return cls(
            x=min_x,
            y=min_y,
            width=max(xs) - min_x,
            height=max(ys) - min_y,
        )


class RegionCandidate(BaseModel):
    """A candidate view region found on a full page."""

    model_config = ConfigDict(frozen=True)

    box: BoundingBox
    area: Optional[float] = Field(default=None, validate_default=True)
    index: int = Field(default=0, description="Discovery order on the page")

    @field_validator("area")
    @classmethod
    def _default_area(cls, value: Optional[float], info: ValidationInfo) -> float:
        """Fall back to the box area when no contour area is given."""
        if value is None:
            box = info.data.get("box")
            return box.area if box is not None else 0.0
        return value


# =============================================================================
# Contours and polylines
# =============================================================================

class Contour(BaseModel):
    """Ordered boundary trace of a connected region."""

    model_config = ConfigDict(frozen=True)

    id: str
    points: list[Point2D] = Field(default_factory=list)


class ClassifiedContour(BaseModel):
    """A contour annotated with its role, CAD layer and display color."""

    model_config = ConfigDict(frozen=True)

    id: str
    points: list[Point2D] = Field(default_factory=list)
    view: ViewName = ViewName.UNKNOWN
    role: ContourRole = ContourRole.UNASSIGNED
    layer: str = ""
    color: str = ""


class Polyline(BaseModel):
    """Simplified polyline derived from exactly one contour."""

    model_config = ConfigDict(frozen=True)

    source_id: str
    points: list[Point2D]
    role: ContourRole = ContourRole.UNASSIGNED
    layer: str = ""
    color: str = ""


class ViewAssignment(BaseModel):
    """Mapping from view to at most one page region."""

    boxes: dict[ViewName, BoundingBox] = Field(default_factory=dict)

    def get(self, view: ViewName) -> Optional[BoundingBox]:
        return self.boxes.get(view)

    def __contains__(self, view: ViewName) -> bool:
        return view in self.boxes

    def __len__(self) -> int:
        return len(self.boxes)


# =============================================================================
# OCR
# =============================================================================

class OCRToken(BaseModel):
    """A recognized word with its bounding box."""

    text: str
    box: BoundingBox
    confidence: float = 100.0


# =============================================================================
# Pipeline results
# =============================================================================

class ViewResult(BaseModel):
    """Everything produced for one view during a run."""

    view: ViewName
    canvas_width: int
    canvas_height: int
    scale: float = 1.0
    region: Optional[BoundingBox] = None
    contours: list[Contour] = Field(default_factory=list)
    classified: list[ClassifiedContour] = Field(default_factory=list)
    polylines: list[Polyline] = Field(default_factory=list)
    document: str = ""

    def role_counts(self) -> dict[str, int]:
        """Count classified contours per role."""
        counts: dict[str, int] = {}
        for contour in self.classified:
            counts[contour.role.value] = counts.get(contour.role.value, 0) + 1
        return counts


class PipelineResult(BaseModel):
    """Caller-owned result of one pipeline run, keyed by view."""

    views: dict[ViewName, ViewResult] = Field(default_factory=dict)
    assignment: ViewAssignment = Field(default_factory=ViewAssignment)
    notes: list[str] = Field(default_factory=list)

    def add_note(self, note: str):
        """Add a processing note."""
        self.notes.append(note)

    def summary(self) -> dict:
        """JSON-friendly summary of the run."""
        return {
            "views": {
                view.value: {
                    "canvas": [result.canvas_width, result.canvas_height],
                    "region": result.region.model_dump() if result.region else None,
                    "contours": len(result.contours),
                    "polylines": len(result.polylines),
                    "roles": result.role_counts(),
                }
                for view, result in self.views.items()
            },
            "notes": list(self.notes),
        }
