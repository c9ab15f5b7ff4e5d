"""
Zone Visualizer Module
======================

Pure visualization layer for a planning session.

Design:
- Stateless rendering (draws data produced by the engine, computes nothing)
- Configurable styles
- Uses supervision drawing utilities for outlines, lines and text
- Region cells are blended in one numpy pass per kind

Dependencies:
- supervision (draw utilities, Color, Point)
- numpy (arrays, masks)
- cv2 (text metrics)

Frames are BGR uint8 arrays (see rendering.image.read_image).
"""

from typing import Dict, Optional, Sequence

import cv2
import numpy as np
import supervision as sv

from irrigation_zone.analytics.segmenter import NO_REGION, Segmentation
from irrigation_zone.capture.polygon import PolygonCapture
from irrigation_zone.geometry.classifier import KIND_PRIORITY
from irrigation_zone.geometry.primitives import Point
from irrigation_zone.geometry.shapes import DrawingTool, Ruler, Shape, ZoneKind


DEFAULT_TOOL_COLORS: Dict[DrawingTool, sv.Color] = {
    DrawingTool.REGULAR: sv.Color.from_hex("#2ecc71"),
    DrawingTool.EXCLUSION: sv.Color.from_hex("#e74c3c"),
    DrawingTool.DRIP: sv.Color.from_hex("#9b59b6"),
    DrawingTool.RULER: sv.Color.from_hex("#f1c40f"),
    DrawingTool.DELETE: sv.Color.from_hex("#e74c3c"),
}

# Pixels between the cursor and the tooltip box
TOOLTIP_OFFSET = 10


def _to_polygon(points: Sequence[Point]) -> np.ndarray:
    return np.array([[round(p.x), round(p.y)] for p in points], dtype=np.int32)


def _to_sv_point(point: Point) -> sv.Point:
    return sv.Point(x=round(point.x), y=round(point.y))


def _blend(frame: np.ndarray, mask: np.ndarray, color: sv.Color, opacity: float) -> None:
    """Alpha-blend color into frame where mask is True (in place)."""
    if not mask.any():
        return
    bgr = np.array(color.as_bgr(), dtype=np.float32)
    pixels = frame[mask].astype(np.float32)
    frame[mask] = np.round(pixels * (1.0 - opacity) + bgr * opacity).astype(np.uint8)


class ZoneVisualizer:
    """
    Stateless visualizer for zones, regions, ruler and previews.

    Usage:
        visualizer = ZoneVisualizer(thickness=3)
        frame = visualizer.draw_session(frame, session)
    """

    def __init__(
        self,
        tool_colors: Optional[Dict[DrawingTool, sv.Color]] = None,
        text_color: sv.Color = sv.Color(r=255, g=255, b=255),
        text_background_color: sv.Color = sv.Color(r=0, g=0, b=0),
        thickness: int = 4,
        text_scale: float = 0.5,
        text_thickness: int = 1,
        text_padding: int = 5,
        shape_opacity: float = 0.2,
        region_opacity: float = 0.2,
        hover_opacity: float = 0.6,
    ):
        """
        Initialize visualizer with style configuration.

        Args:
            tool_colors: Colour per drawing tool (zone kinds, ruler, delete)
            text_color: Colour for labels and tooltips
            text_background_color: Background colour for text
            thickness: Outline thickness
            text_scale: Scale factor for text
            text_thickness: Thickness for text
            text_padding: Padding around text background
            shape_opacity: Fill opacity of closed shapes (0-1)
            region_opacity: Fill opacity of region cells (0-1)
            hover_opacity: Fill opacity of the hovered region (0-1)
        """
        self.tool_colors = dict(DEFAULT_TOOL_COLORS)
        if tool_colors:
            self.tool_colors.update(tool_colors)
        self.text_color = text_color
        self.text_background_color = text_background_color
        self.thickness = thickness
        self.text_scale = text_scale
        self.text_thickness = text_thickness
        self.text_padding = text_padding
        self.shape_opacity = shape_opacity
        self.region_opacity = region_opacity
        self.hover_opacity = hover_opacity

    def color_for(self, kind: ZoneKind | DrawingTool) -> sv.Color:
        return self.tool_colors[DrawingTool(kind.value)]

    def draw_shape(self, frame: np.ndarray, shape: Shape) -> np.ndarray:
        """Fill and outline one closed shape."""
        if len(shape.points) < 3:
            return frame
        color = self.color_for(shape.kind)
        polygon = _to_polygon(shape.points)

        frame = sv.draw_filled_polygon(
            scene=frame,
            polygon=polygon,
            color=color,
            opacity=self.shape_opacity,
        )
        frame = sv.draw_polygon(
            scene=frame,
            polygon=polygon,
            color=color,
            thickness=self.thickness,
        )
        return frame

    def draw_shapes(self, frame: np.ndarray, shapes: Sequence[Shape]) -> np.ndarray:
        for shape in shapes:
            frame = self.draw_shape(frame, shape)
        return frame

    def draw_regions(
        self,
        frame: np.ndarray,
        segmentation: Segmentation,
        hovered_index: Optional[int] = None,
    ) -> np.ndarray:
        """
        Fill region cells by kind; the hovered region gets hover_opacity.

        Args:
            frame: Frame to draw on
            segmentation: Regions to paint
            hovered_index: Index into segmentation.regions to highlight
        """
        grid = segmentation.grid
        if grid is None or not segmentation.regions:
            return frame

        frame = frame.copy()
        cell = grid.cell_size
        height = min(frame.shape[0], grid.dimensions.height)
        width = min(frame.shape[1], grid.dimensions.width)

        # Per-cell owner -> per-pixel owner
        owner = segmentation.owner.reshape(grid.shape)
        pixel_owner = np.repeat(np.repeat(owner, cell, axis=0), cell, axis=1)[:height, :width]

        region_codes = np.array(
            [KIND_PRIORITY[r.kind] for r in segmentation.regions], dtype=np.int8
        )
        pixel_codes = np.where(
            pixel_owner != NO_REGION,
            region_codes[np.clip(pixel_owner, 0, None)],
            0,
        )
        hovered = (
            pixel_owner == hovered_index
            if hovered_index is not None
            else np.zeros(pixel_owner.shape, dtype=bool)
        )

        view = frame[:height, :width]
        for kind, code in KIND_PRIORITY.items():
            kind_mask = pixel_codes == code
            color = self.color_for(kind)
            _blend(view, kind_mask & ~hovered, color, self.region_opacity)
            _blend(view, kind_mask & hovered, color, self.hover_opacity)

        return frame

    def draw_ruler(self, frame: np.ndarray, ruler: Optional[Ruler]) -> np.ndarray:
        """Draw the ruler segment and its '<length> <unit>' label."""
        if ruler is None:
            return frame
        color = self.tool_colors[DrawingTool.RULER]
        frame = sv.draw_line(
            scene=frame,
            start=_to_sv_point(ruler.start),
            end=_to_sv_point(ruler.end),
            color=color,
            thickness=self.thickness,
        )
        midpoint = sv.Point(
            x=int((ruler.start.x + ruler.end.x) / 2),
            y=int((ruler.start.y + ruler.end.y) / 2),
        )
        frame = sv.draw_text(
            scene=frame,
            text=ruler.label,
            text_anchor=midpoint,
            text_color=color,
            text_scale=self.text_scale,
            text_thickness=self.text_thickness,
            text_padding=self.text_padding,
        )
        return frame

    def draw_path(
        self,
        frame: np.ndarray,
        points: Sequence[Point],
        tool: DrawingTool,
    ) -> np.ndarray:
        """Draw an open polyline (in-progress polygon or drag preview)."""
        color = self.tool_colors[DrawingTool(tool)]
        for start, end in zip(points, points[1:]):
            frame = sv.draw_line(
                scene=frame,
                start=_to_sv_point(start),
                end=_to_sv_point(end),
                color=color,
                thickness=self.thickness,
            )
        return frame

    def draw_in_progress(
        self,
        frame: np.ndarray,
        capture: PolygonCapture,
        tool: DrawingTool,
    ) -> np.ndarray:
        """Committed vertices plus the preview edge to the cursor."""
        points = list(capture.vertices)
        edge = capture.preview_edge()
        if edge is not None:
            points.append(edge[1])
        if len(points) < 2:
            return frame
        return self.draw_path(frame, points, tool)

    def draw_tooltip(self, frame: np.ndarray, text: str, position: Point) -> np.ndarray:
        """
        Draw text on a background box up and right of position.

        The box is measured with cv2.getTextSize and shifted to stay inside
        the frame.
        """
        # Hershey fonts are ASCII-only
        text = text.replace("²", "^2")
        (text_w, text_h), baseline = cv2.getTextSize(
            text, cv2.FONT_HERSHEY_SIMPLEX, self.text_scale, self.text_thickness
        )
        half_w = text_w // 2 + self.text_padding
        half_h = (text_h + baseline) // 2 + self.text_padding

        height, width = frame.shape[:2]
        x = min(max(int(position.x) + TOOLTIP_OFFSET + half_w, half_w), max(width - half_w, 0))
        y = min(max(int(position.y) - TOOLTIP_OFFSET - half_h, half_h), max(height - half_h, 0))
        return sv.draw_text(
            scene=frame,
            text=text,
            text_anchor=sv.Point(x=x, y=y),
            text_color=self.text_color,
            text_scale=self.text_scale,
            text_thickness=self.text_thickness,
            text_padding=self.text_padding,
            background_color=self.text_background_color,
        )

    def draw_session(self, frame: np.ndarray, session) -> np.ndarray:
        """
        Composite everything a session exposes.

        Order: ruler, shapes, regions (hover highlighted), tooltip,
        in-progress polygon, ruler drag preview.
        """
        frame = self.draw_ruler(frame, session.ruler)
        frame = self.draw_shapes(frame, session.shapes)
        frame = self.draw_regions(frame, session.regions(), session.hovered_region_index)

        measurement = session.hovered_measurement()
        if measurement is not None and session.hover_position is not None:
            frame = self.draw_tooltip(frame, measurement.format(), session.hover_position)

        if session.capture.is_drawing:
            frame = self.draw_in_progress(frame, session.capture, session.tool)

        drag = session.ruler_drag
        if drag is not None:
            frame = self.draw_path(frame, drag, DrawingTool.RULER)

        return frame
