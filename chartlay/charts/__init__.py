# Dedicated to the public domain under CC0: https://creativecommons.org/publicdomain/zero/1.0/.

'''
Chart layout drivers.

Every driver follows the same plan:
outer padding, then the legend region, then axis label regions sized from measured tick labels;
the remaining rectangle is the plot box, onto which the scales map exactly.
Drivers return a `ChartLayout`, whose `paint` method replays the shapes in a fixed order:
background, legend, axes, data marks, data labels, watermark, debug wireframe.
'''

from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, Mapping, Sequence

from ..config import ChartOpts, LegendConfig, RenderConfig
from ..dimension import dim, DimSpec, unit_env, with_units
from ..io import errBox
from ..legend import Legend, LegendEntry, LegendPos, layout_legend
from ..paint import LineShape, Painter, RecordingPainter, RectShape, Shape, TextShape
from ..position import Box, box, Pos
from ..text import Font, MeasureCache


@dataclass
class RenderCtx:
  'Per-render state: canvas size, unit environment, memoized measurer and configuration.'
  width:float
  height:float
  env:dict[str,float]
  measure:MeasureCache
  config:RenderConfig
  debug_boxes:bool = False


  @classmethod
  def create(cls, width:float, height:float, config:RenderConfig, debug_boxes=False) -> 'RenderCtx':
    return cls(width=width, height=height, env=unit_env(width, height), measure=MeasureCache(config.measure),
      config=config, debug_boxes=debug_boxes or config.debug_boxes)


  def canvas_box(self) -> Box:
    return box(0, 0, self.width, self.height).resolve(self.env)


  def trace(self, label:str, obj:Any) -> None:
    if self.config.dbg: errBox(label, obj)



@dataclass(frozen=True, slots=True)
class Tick:
  value:Any
  px:float
  label:str



@dataclass
class ChartLayout:
  '''
  The resolved layout of one chart.
  `boxes` names the regions (e.g. 'chart', 'plot', 'legend', 'x_labels', 'y_labels');
  `ticks` maps axis names to their ticks.
  '''
  style:str
  width:float
  height:float
  boxes:dict[str,Box] = field(default_factory=dict)
  ticks:dict[str,list[Tick]] = field(default_factory=dict)
  legend:Legend|None = None
  label_rotation:float = 0 # Radians.
  background:list[Shape] = field(default_factory=list)
  axes:list[Shape] = field(default_factory=list)
  marks:list[Shape] = field(default_factory=list)
  labels:list[Shape] = field(default_factory=list)
  watermark:list[Shape] = field(default_factory=list)
  debug:list[Shape] = field(default_factory=list)
  extras:dict[str,Any] = field(default_factory=dict)


  @property
  def plot_box(self) -> Box: return self.boxes['plot']


  def paint(self, painter:Painter) -> None:
    for s in self.background: painter.paint(s)
    if self.legend is not None and (legend_box := self.boxes.get('legend')) is not None:
      self.legend.paint(painter, legend_box.left(), legend_box.top())
    for group in (self.axes, self.marks, self.labels, self.watermark, self.debug):
      for s in group: painter.paint(s)


  def add_debug_boxes(self, color='#f0f', names:Iterable[str]|None=None) -> None:
    'Outline the named layout boxes, and the legend entries.'
    for name in (self.boxes if names is None else names):
      if b := self.boxes.get(name):
        self.debug.append(debug_rect(b, color))
    if self.legend is not None and (legend_box := self.boxes.get('legend')) is not None:
      outline = RecordingPainter()
      self.legend.paint_outline(outline, legend_box.left(), legend_box.top(), color)
      self.debug.extend(outline.shapes)



def paint_layout(layout:ChartLayout, painter:Painter) -> None:
  'Replay the shapes of `layout` through `painter` in draw order.'
  layout.paint(painter)


def debug_rect(b:Box, color='#f0f') -> RectShape:
  return RectShape(*b.xywh(), stroke=color, role='debug')


def begin_layout(style:str, ctx:RenderCtx, chart:ChartOpts) -> ChartLayout:
  'Create the layout, with the canvas background when the chart specifies one.'
  layout = ChartLayout(style=style, width=ctx.width, height=ctx.height)
  canvas = ctx.canvas_box()
  layout.boxes['canvas'] = canvas
  if background := chart.get('background'):
    layout.background.append(RectShape(0, 0, ctx.width, ctx.height, fill=background, role='background'))
  return layout


def padded_chart_box(ctx:RenderCtx, chart:ChartOpts, pad_x:DimSpec, env:Mapping[str,float]) -> Box:
  'The canvas inset by `padX` and `padY`, resolved against `env`; `padY` defaults to `padX`.'
  px = dim(chart.get('padX', pad_x))
  py = dim(chart.get('padY', px))
  return ctx.canvas_box().inside_box(px, py).resolve(env)


def label_env(env:Mapping[str,float], font:Font) -> dict[str,float]:
  'The environment with `em` bound to the label font size.'
  return with_units(env, em=font.size)


# Legend.

def make_legend(ctx:RenderCtx, chart:ChartOpts, cfg:LegendConfig, entries:Sequence[LegendEntry], avail_width:float, font:Font,
 text_color:str) -> Legend|None:
  'Lay out the legend, or return None when it is hidden or has no entries.'
  if not cfg.show or not entries: return None
  fixed = None if cfg.fixed_size is None else dim(cfg.fixed_size).value(ctx.env)
  return layout_legend(entries, avail_width, font, ctx.measure, text_color=text_color, align=cfg.align, position=cfg.position,
    item_per_row=cfg.item_per_row, fixed_size=fixed or None, anchor_bottom=chart.flag('legendAnchorBottom'))


def split_legend(area:Box, legend:Legend|None, position:LegendPos, gap:float=0) -> tuple[Box|None, Box]:
  '''
  Carve the legend region out of `area` at `position`.
  Returns (legend box, remaining box); `gap` separates the two.
  '''
  if legend is None or (legend.height == 0 and not position.is_vertical): return (None, area)
  h = legend.height
  w = legend.width
  match position:
    case LegendPos.top:
      lb = box(area.top_left(), area.top_right().below_by(h))
      rest = box(area.top_left().below_by(h + gap), area.bottom_right())
    case LegendPos.bottom:
      lb = box(area.bottom_left().above_by(h), area.bottom_right())
      rest = box(area.top_left(), area.bottom_right().above_by(h + gap))
    case LegendPos.left:
      lb = box(area.top_left(), area.top_left().right_by(w).below_by(h))
      rest = box(area.top_left().right_by(w + gap), area.bottom_right())
    case LegendPos.right:
      lb = box(area.top_right().left_by(w), area.top_right().below_by(h))
      rest = box(area.top_left(), area.bottom_right().left_by(w + gap))
  return (lb, rest)


# Edges and titles.

def split_edge(area:Box, side:str, size:float, gap:float=0) -> tuple[Box, Box]:
  'Split a band of `size` off the `side` of `area`. Returns (band, remaining box).'
  match side:
    case 'top':
      return (box(area.top_left(), area.top_right().below_by(size)), box(area.top_left().below_by(size + gap), area.bottom_right()))
    case 'bottom':
      return (box(area.bottom_left().above_by(size), area.bottom_right()),
        box(area.top_left(), area.bottom_right().above_by(size + gap)))
    case 'left':
      return (box(area.top_left(), area.bottom_left().right_by(size)), box(area.top_left().right_by(size + gap), area.bottom_right()))
    case 'right':
      return (box(area.top_right().left_by(size), area.bottom_right()),
        box(area.top_left(), area.bottom_right().left_by(size + gap)))
  raise ValueError(f'invalid side: {side!r}')


def split_title(ctx:RenderCtx, area:Box, title:str|None, font:Font, side='top', gap:float=0) -> tuple[Box|None, Box]:
  '''
  Reserve a band for a title on `side` of `area`, as tall as the title text.
  Titles on the left or right read vertically. Returns (title box, remaining box).
  '''
  if not title: return (None, area)
  return split_edge(area, side, ctx.measure(font, title).height, gap)


def title_shape(text:str, b:Box, font:Font, color:str, angle:float=0) -> TextShape:
  c = b.center()
  return TextShape((text,), c.x(), c.y(), font, fill=color, anchor='middle', baseline='middle', angle=angle, role='axis')


# Axes.

@dataclass(frozen=True)
class AxisRegions:
  plot:Box
  x_labels:Box
  y_labels:Box
  corner:Pos


def axis_regions(area:Box, y_axis_width:float, x_axis_height:float, x_pos='bottom', y_pos='left') -> AxisRegions:
  '''
  Split `area` into the plot box and the label regions of an x axis (at `x_pos`, top or bottom)
  and a y axis (at `y_pos`, left or right).
  The corner is where the two label regions meet the plot box.
  '''
  top = x_pos == 'top'
  right = y_pos == 'right'
  base = (area.top_right() if right else area.top_left()) if top else (area.bottom_right() if right else area.bottom_left())
  corner = base.left_by(y_axis_width) if right else base.right_by(y_axis_width)
  corner = corner.below_by(x_axis_height) if top else corner.above_by(x_axis_height)
  opposite = (area.bottom_left() if right else area.bottom_right()) if top else (area.top_left() if right else area.top_right())
  # x labels span from the corner to the far side along the x-axis edge.
  x_end = (area.top_left() if right else area.top_right()) if top else (area.bottom_left() if right else area.bottom_right())
  # y labels span from the corner to the far side along the y-axis edge.
  y_end = (area.bottom_right() if right else area.bottom_left()) if top else (area.top_right() if right else area.top_left())
  return AxisRegions(plot=box(corner, opposite), x_labels=box(corner, x_end), y_labels=box(y_end, corner), corner=corner)


@dataclass(frozen=True)
class AxisStyle:
  stroke:str = '#345'
  line_width:float = 1
  text_color:str = '#111'
  tick_length:float = 6


def axis_style(chart:ChartOpts, tick_length:float, env:Mapping[str,float]) -> AxisStyle:
  axis = chart.sub('axis')
  lw = axis.get('lineWidth')
  return AxisStyle(
    stroke=axis.get('stroke', '#345'),
    line_width=1 if lw is None else dim(lw).value(env),
    text_color=axis.get('textColor', chart.get('labelColor', '#111')),
    tick_length=tick_length)


def numeric_ticks(values:Iterable[float], scale:Callable[[float],float], fmt:Callable[[float],str]) -> list[Tick]:
  return [Tick(v, scale(v), fmt(v)) for v in values]


def max_label_width(ctx:RenderCtx, font:Font, ticks:Iterable[Tick]) -> float:
  return ctx.measure.max_width(font, (t.label for t in ticks))


def max_label_height(ctx:RenderCtx, font:Font, ticks:Iterable[Tick]) -> float:
  return max((ctx.measure(font, t.label).height for t in ticks), default=0.0)


def y_axis_shapes(ticks:Sequence[Tick], y_labels:Box, plot:Box, font:Font, style:AxisStyle, y_pos='left',
 skip:Callable[[Tick],bool]|None=None) -> tuple[list[Shape], list[Shape]]:
  '''
  Grid lines and labels of a value axis. Each line starts one tick length outside the plot box and crosses it;
  labels sit two tick lengths outside the plot box.
  Returns (lines, labels).
  '''
  lines:list[Shape] = []
  labels:list[Shape] = []
  tl = style.tick_length
  if y_pos == 'right':
    x0, x1 = y_labels.left() + tl, plot.left()
    lx, anchor = y_labels.left() + 2*tl, 'start'
  else:
    x0, x1 = y_labels.right() - tl, plot.right()
    lx, anchor = y_labels.right() - 2*tl, 'end'
  for t in ticks:
    if skip and skip(t): continue
    lines.append(LineShape(((x0, t.px), (x1, t.px)), stroke=style.stroke, line_width=style.line_width, role='axis'))
    labels.append(TextShape((t.label,), lx, t.px, font, fill=style.text_color, anchor=anchor, baseline='middle', role='axis'))
  return lines, labels


def x_axis_shapes(ticks:Sequence[Tick], plot:Box, font:Font, style:AxisStyle, x_pos='bottom') -> list[Shape]:
  'The axis line along the plot edge, outward tick marks, and labels two tick lengths from the edge.'
  shapes:list[Shape] = []
  top = x_pos == 'top'
  y = plot.top() if top else plot.bottom()
  direction = -1 if top else 1
  tl = style.tick_length
  shapes.append(LineShape(((plot.left(), y), (plot.right(), y)), stroke=style.stroke, line_width=style.line_width, role='axis'))
  for t in ticks:
    shapes.append(LineShape(((t.px, y), (t.px, y + direction*tl)), stroke=style.stroke, line_width=style.line_width, role='axis'))
  for t in ticks:
    shapes.append(TextShape((t.label,), t.px, y + direction*2*tl, font, fill=style.text_color, anchor='middle',
      baseline='bottom' if top else 'top', role='axis'))
  return shapes


def watermark_shapes(ctx:RenderCtx, chart:ChartOpts, font:Font) -> list[Shape]:
  'The watermark text in the bottom right corner of the canvas.'
  text = ctx.config.watermark
  if not text: return []
  pad = font.size / 2
  return [TextShape((text,), ctx.width - pad, ctx.height - pad, font, fill=chart.get('watermarkColor', '#8888'),
    anchor='end', baseline='bottom', role='watermark')]
