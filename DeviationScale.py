#!/usr/bin/env python3

"""
Deviation Scale Gauge
Renders a linear deviation scale (-50..+50) as PNG or SVG.

Table of Contents
   1. Setup
   2. Fundamental Functions
   3. Geometry
   4. Pointer
   5. Style
   6. Rendering
   7. Views and Models
   8. Commands
"""

# ----------------------1. Setup----------------------------

import logging
import os
import re
import time
from dataclasses import dataclass, fields, replace
from enum import Enum
from functools import cache
from typing import Callable

import toml
from PIL import Image, ImageFont, ImageDraw
import drawsvg as svg

logger = logging.getLogger(__name__)

FF = 255
WH = tuple[int, int]
RGBA = tuple[int, int, int, int]
Point = tuple[float, float]


class Color(Enum):
    WHITE, BLACK = (FF, FF, FF), (0, 0, 0)
    RED, GREEN, BLUE = (FF, 0, 0), (0, FF, 0), (0, 0, FF)
    YELLOW, CYAN, MAGENTA = (FF, FF, 0), (0, FF, FF), (FF, 0, FF)
    GREY = (127, 127, 127)

    SCALE_BG = (236, 239, 241)
    SCALE_CENTRAL = (211, 47, 47)
    SCALE_FRONTIER = (200, 230, 201)
    SCALE_CONTOUR = (38, 50, 56)
    SCALE_FONT = SCALE_CONTOUR

    @staticmethod
    def argb(a: int, r: int, g: int, b: int) -> int:
        """Packs channels into a 32-bit ARGB integer."""
        return (a & FF) << 24 | (r & FF) << 16 | (g & FF) << 8 | (b & FF)

    @staticmethod
    def unpack(argb: int) -> RGBA:
        return (argb >> 16) & FF, (argb >> 8) & FF, argb & FF, (argb >> 24) & FF

    @classmethod
    def from_argb(cls, *argb: int) -> RGBA:
        """Accepts either one packed ARGB int or the (a, r, g, b) channels."""
        if len(argb) == 1:
            return cls.unpack(argb[0])
        if len(argb) == 4:
            return cls.unpack(cls.argb(*argb))
        raise ValueError(f'Expected a packed ARGB color or 4 channels, got {len(argb)} values')

    @classmethod
    def from_str(cls, color: str) -> RGBA:
        if color.startswith('#'):
            digits = color[1:]
            if len(digits) == 6:
                return cls.unpack(0xFF000000 | int(digits, 16))
            if len(digits) == 8:
                return cls.unpack(int(digits, 16))
            raise ValueError(f'Unrecognized color: {color}')
        member = cls.__members__.get(color.upper())
        if member is None:
            raise ValueError(f'Unrecognized color: {color}')
        return cls.to_rgba(member)

    @classmethod
    def to_rgba(cls, col_spec) -> RGBA:
        if isinstance(col_spec, cls):
            col_spec = col_spec.value
        if isinstance(col_spec, str):
            return cls.from_str(col_spec)
        if isinstance(col_spec, int) and not isinstance(col_spec, bool):
            return cls.unpack(col_spec)
        if isinstance(col_spec, (tuple, list)) and len(col_spec) in (3, 4):
            if all(isinstance(c, int) and 0 <= c <= FF for c in col_spec):
                return tuple(col_spec) if len(col_spec) == 4 else (*col_spec, FF)
        raise ValueError(f'Unrecognized color: {col_spec!r}')

    @staticmethod
    def to_str(col: RGBA) -> str:
        return f'rgb({col[0]},{col[1]},{col[2]})'


class Orientation(Enum):
    VERTICAL, HORIZONTAL = 'vertical', 'horizontal'

    @property
    def proportions(self):
        return PROPORTIONS[self]


# The long axis is always cut into the vertical total, the short axis into the horizontal total;
# orientation decides whether height or width is the long one.
VERTICAL_TOTAL_PARTS = 22
HORIZONTAL_TOTAL_PARTS = 11
LONG_PARTS = VERTICAL_TOTAL_PARTS
CENTRAL_PART = LONG_PARTS // 2
AVAILABLE_PARTS = CENTRAL_PART - 1
BACKGROUND_LIMIT = LONG_PARTS - 1
FRONTIER_LIMITS = (CENTRAL_PART - 2, CENTRAL_PART + 2)
START_PART = 1
END_PART = 9

NUMBER_OF_MARKS = 10
LARGE_MARK_SPANS = ((1, 2), (8, 9))
"""short-axis extent of major ticks, near side then far side"""
SMALL_MARK_SPANS = ((1, 1.5), (8.5, 9))
"""short-axis extent of minor ticks, near side then far side"""
LABEL_COUNT = 11
LABEL_STEP = 2

POSITION_MIN, POSITION_CENTER, POSITION_MAX = -50, 0, 50
POSITION_PROPORTION = 50

DEFAULT_LABELS = ('+50', '+40', '+30', '+20', '+10', '0', '-10', '-20', '-30', '-40', '-50')


@dataclass(frozen=True)
class Proportions:
    """Orientation-specific layout constants"""
    total_parts: int
    """parts the height is cut into"""
    width_parts: int
    end_part: float
    font_proportion: float
    """height divided by this gives the label font size"""
    primary_line_proportion: float
    """height divided by this gives the central line and pointer stroke"""
    secondary_line_proportion: float
    """height divided by this gives the tick and contour stroke"""
    label_long_start: float
    label_short_part: float
    pointer_sign: int
    """direction the pointer travels along the long axis as the position grows"""
    long_axis_is_x: bool
    reverse_labels: bool


PROPORTIONS: dict[Orientation, Proportions] = {
    Orientation.VERTICAL: Proportions(
        total_parts=VERTICAL_TOTAL_PARTS, width_parts=HORIZONTAL_TOTAL_PARTS, end_part=END_PART,
        font_proportion=42.0, primary_line_proportion=107.5, secondary_line_proportion=215.0,
        label_long_start=1.0, label_short_part=9.5,
        pointer_sign=-1, long_axis_is_x=False, reverse_labels=False),
    Orientation.HORIZONTAL: Proportions(
        total_parts=HORIZONTAL_TOTAL_PARTS, width_parts=VERTICAL_TOTAL_PARTS, end_part=END_PART,
        font_proportion=21.0, primary_line_proportion=53.75, secondary_line_proportion=107.5,
        label_long_start=0.75, label_short_part=10.0,
        pointer_sign=1, long_axis_is_x=True, reverse_labels=True),
}


class OutFormat(Enum):
    PNG, SVG = 'png', 'svg'


class MeasureMode(Enum):
    EXACTLY, AT_MOST, UNSPECIFIED = 'exactly', 'at_most', 'unspecified'


# ----------------------2. Fundamental Functions----------------------------


def large_mark_offset(i: int) -> int: return 2 + 2 * i
def odd_small_mark_offset(i: int) -> float: return 2 * i + 0.5
def even_small_mark_offset(i: int) -> float: return 2 * i - 0.5


def clamp_position(pos: int) -> int:
    return max(POSITION_MIN, min(POSITION_MAX, pos))


@dataclass(frozen=True)
class Line:
    x1: float
    y1: float
    x2: float
    y2: float

    @property
    def coords(self):
        return self.x1, self.y1, self.x2, self.y2

    @classmethod
    def between(cls, p1: Point, p2: Point):
        return cls(p1[0], p1[1], p2[0], p2[1])


@dataclass(frozen=True)
class Rect:
    left: int
    top: int
    right: int
    bottom: int

    @property
    def width(self):
        return self.right - self.left

    @property
    def height(self):
        return self.bottom - self.top

    @classmethod
    def between(cls, p1: Point, p2: Point):
        return cls(int(min(p1[0], p2[0])), int(min(p1[1], p2[1])),
                   int(max(p1[0], p2[0])), int(max(p1[1], p2[1])))


@dataclass(frozen=True)
class Grid:
    """Maps (long part, short part) coordinates onto pixels for a widget size."""
    width: int
    height: int
    orientation: Orientation

    @classmethod
    def make(cls, width: int, height: int, orientation: Orientation):
        if width <= 0 or height <= 0:
            raise ValueError(f'Widget size must be positive, got {width}x{height}')
        return cls(width, height, orientation)

    def point(self, long_part: float, short_part: float) -> Point:
        p = self.orientation.proportions
        (x_part, y_part) = (long_part, short_part) if p.long_axis_is_x else (short_part, long_part)
        return x_part * self.width / p.width_parts, y_part * self.height / p.total_parts

    def across(self, long_part: float, short_start: float, short_end: float) -> Line:
        """A segment perpendicular to the long axis"""
        return Line.between(self.point(long_part, short_start), self.point(long_part, short_end))

    def rect(self, long_span: tuple[float, float], short_span: tuple[float, float]) -> Rect:
        return Rect.between(self.point(long_span[0], short_span[0]), self.point(long_span[1], short_span[1]))


# ----------------------3. Geometry----------------------------


def mark_lines(grid: Grid) -> list[Line]:
    """Majors on both sides, then odd and even minor series per side: 60 lines."""
    result = []
    for span in LARGE_MARK_SPANS:
        result += [grid.across(large_mark_offset(i), *span) for i in range(NUMBER_OF_MARKS)]
    for span in SMALL_MARK_SPANS:
        for offset in (odd_small_mark_offset, even_small_mark_offset):
            result += [grid.across(offset(i), *span) for i in range(1, NUMBER_OF_MARKS + 1)]
    return result


def contour_lines(grid: Grid) -> list[Line]:
    """Background outline traversed clockwise from the top-left corner"""
    (left, top) = grid.point(START_PART, START_PART)
    (right, bottom) = grid.point(BACKGROUND_LIMIT, END_PART)
    corners = [(left, top), (right, top), (right, bottom), (left, bottom)]
    return [Line.between(corners[i], corners[(i + 1) % 4]) for i in range(4)]


@dataclass(frozen=True)
class Geometry:
    """Everything size-dependent needed to draw one frame"""
    width: int
    height: int
    orientation: Orientation
    background: Rect
    frontier: Rect
    central_line: Line
    marks: tuple[Line, ...]
    contour: tuple[Line, ...]
    label_anchors: tuple[Point, ...]
    """left end of each label's baseline"""
    font_size: float
    primary_stroke: float
    secondary_stroke: float

    PixelsPerIN = 160
    PixelsPerCM = PixelsPerIN / 2.54

    @classmethod
    def make(cls, width: int, height: int, orientation: Orientation):
        grid = Grid.make(width, height, orientation)
        p = orientation.proportions
        short_span = (START_PART, p.end_part)
        return cls(
            width=width, height=height, orientation=orientation,
            background=grid.rect((START_PART, BACKGROUND_LIMIT), short_span),
            frontier=grid.rect(FRONTIER_LIMITS, short_span),
            central_line=grid.across(CENTRAL_PART, *short_span),
            marks=tuple(mark_lines(grid)),
            contour=tuple(contour_lines(grid)),
            label_anchors=tuple(grid.point(p.label_long_start + LABEL_STEP * i, p.label_short_part)
                                for i in range(LABEL_COUNT)),
            font_size=height / p.font_proportion,
            primary_stroke=height / p.primary_line_proportion,
            secondary_stroke=height / p.secondary_line_proportion)

    @classmethod
    def dim_to_pixels(cls, dim) -> int:
        if matches := re.match(r'^\s*([\d.]+)\s*(\w*)\s*$', dim) if isinstance(dim, str) else None:
            num, units = matches.group(1), matches.group(2)
            result = float(num) if '.' in num else int(num)
            if units == 'cm':
                result *= cls.PixelsPerCM
            elif units == 'mm':
                result *= cls.PixelsPerCM / 10
            elif units == 'in':
                result *= cls.PixelsPerIN
            elif units == 'pt':
                result *= cls.PixelsPerIN / 72
            elif units not in ('', 'px'):
                raise ValueError(f'Unrecognized unit: {units}')
            return int(result)
        if isinstance(dim, str):
            raise ValueError(f'Unrecognized dimension: {dim}')
        return dim


# ----------------------4. Pointer----------------------------


def pointer_part(pos: int, orientation: Orientation) -> float:
    """Long-axis part the pointer sits on; exactly the central part at zero deviation."""
    pos = clamp_position(pos)
    if pos == POSITION_CENTER:
        return CENTRAL_PART
    return CENTRAL_PART + orientation.proportions.pointer_sign * AVAILABLE_PARTS * pos / POSITION_PROPORTION


def map_position(pos: int, orientation: Orientation, width: int, height: int) -> Line:
    grid = Grid.make(width, height, orientation)
    return grid.across(pointer_part(pos, orientation), START_PART, orientation.proportions.end_part)


# ----------------------5. Style----------------------------


@dataclass(frozen=True)
class Style:
    background: RGBA = Color.to_rgba(Color.SCALE_BG)
    central: RGBA = Color.to_rgba(Color.SCALE_CENTRAL)
    frontier: RGBA = Color.to_rgba(Color.SCALE_FRONTIER)
    contour: RGBA = Color.to_rgba(Color.SCALE_CONTOUR)
    """color of the outline and of every tick mark"""
    font: RGBA = Color.to_rgba(Color.SCALE_FONT)
    pointer: RGBA = Color.to_rgba(Color.SCALE_CONTOUR)
    pointer_visible: bool = False
    contour_visible: bool = False
    font_family: str = None
    """TrueType font for labels; Pillow's default font when unset"""

    ELEMENTS = ('background', 'central', 'frontier', 'contour', 'font', 'pointer')

    @classmethod
    def from_dict(cls, style_def: dict):
        style_def = dict(style_def)
        unknown = set(style_def) - {f.name for f in fields(cls)}
        if unknown:
            raise ValueError(f"Unrecognized style keys: {', '.join(sorted(unknown))}")
        for key in cls.ELEMENTS:
            if key in style_def:
                style_def[key] = Color.to_rgba(style_def[key])
        if 'pointer' not in style_def and 'contour' in style_def:
            style_def['pointer'] = style_def['contour']
        return cls(**style_def)

    def with_color(self, element: str, color: RGBA):
        if element not in self.ELEMENTS:
            raise ValueError(f'Unrecognized style element: {element}')
        return replace(self, **{element: color})


# ----------------------6. Rendering----------------------------


class Font:
    @staticmethod
    @cache
    def font_for(size: int, font_family: str = None):
        if font_family:
            return ImageFont.truetype(font_family, size)
        return ImageFont.load_default(size)


class Out:
    def __init__(self, r):
        self.r = r
    def fill_rect(self, rect: Rect, col: RGBA): pass
    def draw_line(self, line: Line, col: RGBA, width: float): pass
    def draw_text(self, anchor: Point, symbol: str, font_size: float, col: RGBA, font_family: str = None): pass


class RasterOut(Out):
    r: ImageDraw.ImageDraw = None

    @classmethod
    def for_image(cls, i: Image.Image):
        return cls(ImageDraw.Draw(i, 'RGBA'))

    def fill_rect(self, rect: Rect, col: RGBA):
        if rect.width <= 0 or rect.height <= 0:
            return
        # Pillow fills both end pixels; Rect excludes right and bottom
        self.r.rectangle((rect.left, rect.top, rect.right - 1, rect.bottom - 1), fill=col)

    def draw_line(self, line: Line, col: RGBA, width: float):
        self.r.line(line.coords, fill=col, width=max(1, round(width)))

    def draw_text(self, anchor: Point, symbol: str, font_size: float, col: RGBA, font_family: str = None):
        font = Font.font_for(max(1, round(font_size)), font_family)
        self.r.text(anchor, symbol, font=font, fill=col, anchor='ls')


class SVGOut(Out):
    r: svg.Drawing = None

    @classmethod
    def for_drawing(cls, i: svg.Drawing):
        return cls(i)

    @staticmethod
    def paint(col: RGBA, kind: str) -> dict:
        result = {kind: Color.to_str(col)}
        if col[3] != FF:
            result[f'{kind}_opacity'] = round(col[3] / FF, 3)
        return result

    def fill_rect(self, rect: Rect, col: RGBA):
        self.r.append(svg.Rectangle(rect.left, rect.top, rect.width, rect.height, **self.paint(col, 'fill')))

    def draw_line(self, line: Line, col: RGBA, width: float):
        self.r.append(svg.Line(*line.coords, stroke_width=width, **self.paint(col, 'stroke')))

    def draw_text(self, anchor: Point, symbol: str, font_size: float, col: RGBA, font_family: str = None):
        font_args = {'font_family': font_family} if font_family else {}
        self.r.append(svg.Text(symbol, font_size, anchor[0], anchor[1], text_anchor='start',
                               **font_args, **self.paint(col, 'fill')))


@dataclass(frozen=True)
class Frame:
    """Read-only snapshot consumed by a render pass"""
    geometry: Geometry
    pointer: Line
    style: Style
    labels: tuple[str, ...]


@dataclass(frozen=True)
class Renderer:
    r: Out = None

    @classmethod
    def to_image(cls, i):
        out = None
        if isinstance(i, Image.Image):
            out = RasterOut.for_image(i)
        elif isinstance(i, svg.Drawing):
            out = SVGOut.for_drawing(i)
        return cls(out)

    def render(self, frame: Frame):
        """Issues the draw calls for a frame. Nothing is drawn until a size has been laid out."""
        g, s = frame.geometry, frame.style
        if g is None:
            return
        self.r.fill_rect(g.background, s.background)
        self.r.fill_rect(g.frontier, s.frontier)
        self.r.draw_line(g.central_line, s.central, g.primary_stroke)
        for anchor, label in zip(g.label_anchors, frame.labels):
            if label:
                self.r.draw_text(anchor, label, g.font_size, s.font, s.font_family)
        for mark in g.marks:
            self.r.draw_line(mark, s.contour, g.secondary_stroke)
        if s.pointer_visible and frame.pointer is not None:
            self.r.draw_line(frame.pointer, s.pointer, g.primary_stroke)
        if s.contour_visible:
            for line in g.contour:
                self.r.draw_line(line, s.contour, g.secondary_stroke)


# --------------------------7. Views and Models----------------------------


@dataclass(frozen=True)
class MeasureSpec:
    mode: MeasureMode = MeasureMode.UNSPECIFIED
    size: int = 0


def measure_dimension(desired_size: int, spec: MeasureSpec) -> int:
    if spec.mode == MeasureMode.EXACTLY:
        return spec.size
    if spec.mode == MeasureMode.AT_MOST:
        return min(desired_size, spec.size)
    return desired_size


class DeviationView:
    """
    Deviation gauge state: orientation, style, labels and pointer position,
    with the geometry of the last laid-out size cached for rendering.
    """

    def __init__(self, orientation: Orientation = Orientation.VERTICAL, style: Style = Style(),
                 labels=DEFAULT_LABELS, min_size: WH = (0, 0), padding: int = 0,
                 on_invalidate: Callable[[], None] = None):
        self.orientation = orientation
        self.style = style
        labels = tuple(labels)
        if len(labels) > LABEL_COUNT:
            logger.warning('Only %d labels are drawn, %d given', LABEL_COUNT, len(labels))
        labels = labels[:LABEL_COUNT]
        self.labels = tuple(reversed(labels)) if orientation.proportions.reverse_labels else labels
        self.min_size = min_size
        self.padding = padding
        self.on_invalidate = on_invalidate
        self.invalidations = 0
        self.width, self.height = 0, 0
        self.geometry: Geometry = None
        self.pointer_line: Line = None
        self._position = POSITION_CENTER

    def __repr__(self):
        return f'DeviationView({self.orientation.value}, {self.width}x{self.height}, pos={self._position})'

    def invalidate(self):
        """Requests a redraw from the host."""
        self.invalidations += 1
        if self.on_invalidate:
            self.on_invalidate()

    def on_size_changed(self, width: int, height: int):
        self.width, self.height = width, height
        if width <= 0 or height <= 0:
            logger.debug('Skipping layout for size %dx%d', width, height)
            self.geometry, self.pointer_line = None, None
            return
        self.geometry = Geometry.make(width, height, self.orientation)
        self.pointer_line = map_position(self._position, self.orientation, width, height)
        logger.debug('Laid out %r', self)

    @property
    def pointer_position(self) -> int:
        return self._position

    @pointer_position.setter
    def pointer_position(self, value: int):
        position = clamp_position(value)
        if position != value:
            logger.debug('Clamped pointer position %s to %d', value, position)
        self._position = position
        if self.geometry is not None:
            self.pointer_line = map_position(position, self.orientation, self.width, self.height)
        self.invalidate()

    @property
    def pointer_visible(self) -> bool:
        return self.style.pointer_visible

    @pointer_visible.setter
    def pointer_visible(self, value: bool):
        self.style = replace(self.style, pointer_visible=value)
        self.invalidate()

    @property
    def contour_visible(self) -> bool:
        return self.style.contour_visible

    @contour_visible.setter
    def contour_visible(self, value: bool):
        self.style = replace(self.style, contour_visible=value)
        self.invalidate()

    def set_color(self, element: str, *argb: int):
        self.style = self.style.with_color(element, Color.from_argb(*argb))
        self.invalidate()

    def set_pointer_color(self, *argb: int): self.set_color('pointer', *argb)
    def set_contour_color(self, *argb: int): self.set_color('contour', *argb)
    def set_scale_background_color(self, *argb: int): self.set_color('background', *argb)
    def set_central_sector_color(self, *argb: int): self.set_color('central', *argb)
    def set_frontier_sector_color(self, *argb: int): self.set_color('frontier', *argb)
    def set_font_color(self, *argb: int): self.set_color('font', *argb)

    def desired_size(self) -> WH:
        return self.min_size[0] + 2 * self.padding, self.min_size[1] + 2 * self.padding

    def measure(self, width_spec: MeasureSpec, height_spec: MeasureSpec) -> WH:
        desired_w, desired_h = self.desired_size()
        return measure_dimension(desired_w, width_spec), measure_dimension(desired_h, height_spec)

    def frame(self) -> Frame:
        return Frame(self.geometry, self.pointer_line, self.style, self.labels)

    def draw(self, r: Renderer):
        r.render(self.frame())


@dataclass(frozen=True)
class Model:
    name: str
    orientation: Orientation = Orientation.VERTICAL
    size: WH = (1100, 2200)
    position: int = POSITION_CENTER
    labels: tuple[str, ...] = DEFAULT_LABELS
    min_size: WH = (0, 0)
    padding: int = 0
    style: Style = Style()

    @classmethod
    def from_dict(cls, model_def: dict):
        size_def = model_def.get('size', {})
        layout_def = model_def.get('layout', {})
        px = Geometry.dim_to_pixels
        return cls(name=model_def.get('name'),
                   orientation=Orientation(model_def.get('orientation', Orientation.VERTICAL.value).lower()),
                   size=(px(size_def.get('width', cls.size[0])), px(size_def.get('height', cls.size[1]))),
                   position=int(model_def.get('position', POSITION_CENTER)),
                   labels=tuple(str(x) for x in model_def.get('labels', DEFAULT_LABELS)),
                   min_size=(px(layout_def.get('min_width', 0)), px(layout_def.get('min_height', 0))),
                   padding=px(layout_def.get('padding', 0)),
                   style=Style.from_dict(model_def.get('style', {})))

    @classmethod
    def from_toml_file(cls, toml_filename: str):
        return cls.from_dict(toml.load(toml_filename))

    example_dir_path = os.path.join(os.path.dirname(os.path.realpath(__file__)), 'examples')

    @classmethod
    def from_example(cls, example_name: str):
        return cls.from_toml_file(os.path.join(cls.example_dir_path, f'Model-{example_name}.toml'))

    @classmethod
    def load(cls, model_name):
        return cls.from_toml_file(model_name) if os.path.exists(model_name) else cls.from_example(model_name)

    @classmethod
    def example_names(cls):
        for fn in os.listdir(cls.example_dir_path):
            if match := re.match(r'Model-(.*)\.toml$', fn):
                yield match.group(1)

    def make_view(self, on_invalidate: Callable[[], None] = None) -> DeviationView:
        view = DeviationView(self.orientation, self.style, self.labels,
                             min_size=self.min_size, padding=self.padding, on_invalidate=on_invalidate)
        view.on_size_changed(*self.size)
        view.pointer_position = self.position
        return view


# ----------------------8. Commands------------------------------------------


def image_for_rendering(model: Model, out_format: OutFormat, w=None, h=None):
    w, h = int(w or model.size[0]), int(h or model.size[1])
    if out_format == OutFormat.PNG:
        return Image.new('RGB', (w, h), Color.WHITE.value)
    elif out_format == OutFormat.SVG:
        drawing = svg.Drawing(w, h, id_prefix='def_')
        drawing.set_render_size(f'{w / Geometry.PixelsPerIN}in', f'{h / Geometry.PixelsPerIN}in')
        return drawing


def render_model(model: Model, out_format: OutFormat, img=None):
    if img is None:
        img = image_for_rendering(model, out_format)
    view = model.make_view()
    view.draw(Renderer.to_image(img))
    return img


def save_image(img_to_save, basename: str, output_suffix=None):
    output_filename = f"{basename}{'.' + output_suffix if output_suffix else ''}"
    output_full_path = os.path.abspath(output_filename)
    if isinstance(img_to_save, Image.Image):
        output_full_path += '.png'
        img_to_save.save(output_full_path, 'PNG')
    elif isinstance(img_to_save, svg.Drawing):
        output_full_path += '.svg'
        img_to_save.save_svg(output_full_path)
    print(f'Result saved to: file://{output_full_path}')


def main():
    """CLI processor for rendering a deviation scale model."""
    import argparse
    args_parser = argparse.ArgumentParser()
    args_parser.add_argument('--model',
                             default='Vertical',
                             help=f'Model TOML file or example name ({", ".join(sorted(Model.example_names()))})')
    args_parser.add_argument('--format',
                             default=OutFormat.PNG.value,
                             choices=[f.value for f in OutFormat],
                             help='Output format')
    args_parser.add_argument('--position',
                             type=int,
                             help=f'Pointer position, clamped to {POSITION_MIN}..{POSITION_MAX}')
    args_parser.add_argument('--width', type=int, help='Widget width in pixels')
    args_parser.add_argument('--height', type=int, help='Widget height in pixels')
    args_parser.add_argument('--suffix',
                             help='Output filename suffix for variations')
    args_parser.add_argument('--test',
                             action='store_true',
                             help='Output filename for test comparisons')
    args_parser.add_argument('--debug',
                             action='store_true',
                             help='Log layout details')
    cli_args = args_parser.parse_args()
    logging.basicConfig(level=logging.DEBUG if cli_args.debug else logging.INFO,
                        format='%(levelname)s %(name)s: %(message)s')
    out_format: OutFormat = next(f for f in OutFormat if f.value == cli_args.format)
    model_name = cli_args.model
    model = Model.load(model_name)
    if cli_args.position is not None:
        model = replace(model, position=cli_args.position)
    if cli_args.width or cli_args.height:
        model = replace(model, size=(cli_args.width or model.size[0], cli_args.height or model.size[1]))
    output_suffix = cli_args.suffix or ('test' if cli_args.test else None)

    start_time = time.process_time()
    img = render_model(model, out_format)
    print(f'Deviation Scale render finished at: {round(time.process_time() - start_time, 3)} seconds')
    basename = os.path.splitext(os.path.basename(model_name))[0]
    save_image(img, f'{basename}.DeviationScale', output_suffix)


if __name__ == '__main__':
    main()
