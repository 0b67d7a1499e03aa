"""
DXF layer management.
"""

from typing import Any

from gahull.shared.models import ContourRole


# DXF color indices
class DXFColors:
    RED = 1
    YELLOW = 2
    GREEN = 3
    CYAN = 4
    BLUE = 5
    MAGENTA = 6
    WHITE = 7
    GRAY = 8


class LayerManager:
    """
    Manages DXF layers for the drawing.
    """

    # Standard layers
    STANDARD_LAYERS = {
        "0": DXFColors.WHITE,
        "UNASSIGNED": DXFColors.GRAY,
    }

    # Role colors (ACI fallback for viewers without true color)
    ROLE_COLORS = {
        ContourRole.PLAN_OUTLINE: DXFColors.RED,
        ContourRole.DECK_SHAPE: DXFColors.CYAN,
        ContourRole.SHEER: DXFColors.RED,
        ContourRole.KEEL: DXFColors.BLUE,
        ContourRole.WATERLINE: DXFColors.CYAN,
        ContourRole.STATION: DXFColors.MAGENTA,
        ContourRole.BUTTOCK: DXFColors.YELLOW,
        ContourRole.UNASSIGNED: DXFColors.GRAY,
    }

    def create_standard_layers(self, doc: Any):
        """Create standard layers in the document."""
        for layer_name, color in self.STANDARD_LAYERS.items():
            if layer_name not in doc.layers:
                doc.layers.add(layer_name, color=color)

    def create_layer(
        self,
        doc: Any,
        name: str,
        color: int = DXFColors.WHITE,
        rgb: tuple[int, int, int] | None = None,
        linetype: str = "CONTINUOUS",
    ):
        """Create a layer in the document if it does not exist yet."""
        if name in doc.layers:
            return doc.layers.get(name)

        layer = doc.layers.add(name, color=color, linetype=linetype)
        if rgb is not None:
            layer.rgb = rgb
        return layer

    def get_role_color(self, role: ContourRole) -> int:
        """Get ACI color for a contour role."""
        return self.ROLE_COLORS.get(role, DXFColors.WHITE)


def hex_to_rgb(color: str) -> tuple[int, int, int] | None:
    """Convert '#RRGGBB' to an RGB tuple, or None if malformed."""
    value = color.strip().lstrip("#")
    if len(value) != 6:
        return None
    try:
        return (int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16))
    except ValueError:
        return None
