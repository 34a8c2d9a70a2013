# Dedicated to the public domain under CC0: https://creativecommons.org/publicdomain/zero/1.0/.

'''
Pie and donut charts.
'''

from dataclasses import dataclass
from math import cos, sin, tau
from typing import Any, Mapping, Sequence

from ..config import accessor, ChartOpts, legend_config
from ..dimension import box_env, dim, resolve_dim
from ..legend import LegendEntry, LegendPos, MarkerStyle
from ..paint import ArcShape, LineShape, TextShape
from ..position import box, pos
from . import begin_layout, ChartLayout, label_env, make_legend, padded_chart_box, RenderCtx, split_title, title_shape


default_colors = ['#579', '#597', '#759', '#795', '#975', '#957']

dim_defaults = {
  'labelFontSize': '5vmin',
  'legendFontSize': '4vmin',
  'titleFontSize': '5vmin',
  'padX': '1vmin',
  'innerRadius': '25vmin',
  'outerRadius': '33vmin',
  'lineWidth': 0,
}


@dataclass(frozen=True, slots=True)
class Slice:
  'One arc of a pie layout. Angles are in radians, clockwise from twelve o\'clock.'
  index:int # Position in the angular order.
  value:float
  start_angle:float
  end_angle:float
  pad_angle:float

  @property
  def mid_angle(self) -> float: return (self.start_angle + self.end_angle) / 2


def pie_slices(values:Sequence[float], start_angle:float=0, end_angle:float=tau, pad_angle:float=0) -> list[Slice]:
  '''
  Compute arcs the way d3.pie does: slices are laid out in descending value order (ties keep input order),
  but the result is indexed by input position.
  Non-positive values get empty arcs; `pad_angle` separates adjacent arcs and is capped at an equal share.
  '''
  n = len(values)
  if n == 0: return []
  total = sum(v for v in values if v > 0)
  order = sorted(range(n), key=lambda i: -values[i])
  da = min(tau, max(-tau, end_angle - start_angle))
  p = min(abs(da) / n, pad_angle)
  pa = -p if da < 0 else p
  k = (da - n*pa) / total if total else 0
  slices:list[Slice|None] = [None] * n
  a0 = start_angle
  for rank, i in enumerate(order):
    v = values[i]
    a1 = a0 + (v*k if v > 0 else 0) + pa
    slices[i] = Slice(rank, v, a0, a1, p)
    a0 = a1
  return [s for s in slices if s is not None]


def arc_centroid(s:Slice, inner_radius:float, outer_radius:float) -> tuple[float,float]:
  'The midpoint of the arc, relative to the pie center, in screen coordinates (y down).'
  r = (inner_radius + outer_radius) / 2
  a = s.mid_angle
  return (r * sin(a), -r * cos(a))


# Text alignment of radial labels by octant of the label position, in screen coordinates.
_octant_anchors = {
  0: ('start', 'middle'),
  1: ('middle', 'top'),
  2: ('middle', 'top'),
  3: ('end', 'middle'),
  4: ('end', 'middle'),
  5: ('middle', 'bottom'),
  6: ('middle', 'bottom'),
  7: ('start', 'middle'),
}


def layout_pie(body:Mapping[str,Any], ctx:RenderCtx) -> ChartLayout:
  chart = ChartOpts(body.get('chart'))
  meta = body.get('meta')
  data:list[Mapping[str,Any]] = body.get('data') or []
  colors = chart.colors('colors', default_colors)

  get_value = accessor(meta, 'value')
  get_label = accessor(meta, 'label')
  get_legend = accessor(meta, 'legend')
  get_color = accessor(meta, 'color')

  rows = [(
      get_label(row) or f'Label {i}',
      get_legend(row) or f'Legend {i}',
      float(get_value(row) or 0),
      get_color(row) or colors[i % len(colors)])
    for i, row in enumerate(data)]

  env0 = ctx.env
  dims = chart.dims(dim_defaults, env0)
  font = chart.font('label', dims.px('labelFontSize'), default_family='sans-serif')
  legend_font = chart.font('legend', dims.px('legendFontSize'), default_family='sans-serif')
  title_font = chart.font('title', dims.px('titleFontSize'), default_family='sans-serif')
  env1 = label_env(env0, font)
  label_color = chart.get('labelColor', '#000')

  layout = begin_layout('pie', ctx, chart)
  chart_box = padded_chart_box(ctx, chart, dim_defaults['padX'], env1)
  layout.boxes['chart'] = chart_box
  ctx.trace('pie chart box', chart_box)

  title_box, area = split_title(ctx, chart_box, chart.get('title'), title_font, gap=font.size/2)
  if title_box:
    layout.boxes['title'] = title_box
    layout.axes.append(title_shape(chart.get('title'), title_box, title_font, label_color))

  # The pie is square when space allows; the legend takes the rest, above or below.
  legend_cfg = legend_config(chart, LegendPos.bottom, allowed=(LegendPos.top, LegendPos.bottom))
  entries = [LegendEntry(legend, fill=color, style=MarkerStyle.box) for _, legend, _, color in rows]
  legend = make_legend(ctx, chart, legend_cfg, entries, area.width(), legend_font, label_color)
  legend_h = legend.height if legend else 0
  if legend and legend_cfg.position == LegendPos.top:
    legend_box = box(area.top_left(), area.top_right().below_by(legend_h))
    pie_box = box(legend_box.bottom_left(), area.bottom_right())
  else:
    pie_h = max(0, min(area.width(), area.height() - legend_h))
    pie_box = box(area.top_left(), area.top_right().below_by(pie_h))
    legend_box = box(pie_box.bottom_left(), area.bottom_right())
  if legend:
    layout.legend = legend
    layout.boxes['legend'] = legend_box
  layout.boxes['plot'] = pie_box
  ctx.trace('pie box', pie_box)

  env2 = box_env(env1, pie_box.width(), pie_box.height())
  pie_dims = dims.rebind(env2)
  inner_radius = pie_dims.px('innerRadius')
  outer_radius = pie_dims.px('outerRadius')
  line_width = pie_dims.px('lineWidth')
  stroke = chart.get('stroke', '#fff')
  start_angle = _radians(chart.get('startAngle', 0), env2)
  pad_angle = _radians(chart.get('padAngle', 0), env2)

  slices = pie_slices([v for _, _, v, _ in rows], start_angle, start_angle + tau, pad_angle)
  cx, cy = pie_box.center().xy()
  show_labels = chart.flag('showLabels', True)
  show_label_debug = chart.flag('showLabelDebug')
  centered = chart.get('labelAnchor', 'auto') == 'center'

  for (label, _, value, color), s in zip(rows, slices):
    layout.marks.append(ArcShape(cx, cy, inner_radius, outer_radius, s.start_angle, s.end_angle, s.pad_angle, fill=color,
      stroke=stroke if line_width > 0 else None, line_width=line_width))
    if not show_labels: continue
    centroid = pos(*arc_centroid(s, inner_radius, outer_radius)).resolve(env2)
    if show_label_debug:
      lx, ly = centroid.with_length(outer_radius*1.1).xy()
      layout.debug.append(LineShape(((cx + centroid.x(), cy + centroid.y()), (cx + lx, cy + ly)), stroke='#444', line_width=2,
        role='debug'))
    label_pos = centroid.with_length(outer_radius*1.2)
    anchor, baseline = ('middle', 'middle') if centered else _octant_anchors[label_pos.octant()]
    text = str(label) if label else f'{value:.1f}'
    layout.labels.append(TextShape((text,), cx + label_pos.x(), cy + label_pos.y(), font, fill=label_color, anchor=anchor,
      baseline=baseline))

  if chart.flag('showCenter'):
    layout.debug.append(LineShape(((cx - 20, cy), (cx + 20, cy)), stroke='#000', line_width=3, role='debug'))
    layout.debug.append(LineShape(((cx, cy - 20), (cx, cy + 20)), stroke='#000', line_width=3, role='debug'))

  layout.extras.update(slices=slices, inner_radius=inner_radius, outer_radius=outer_radius, center=(cx, cy))
  return layout


def _radians(v:Any, env:Mapping[str,float]) -> float:
  'Angles are plain numbers in radians; dimension strings are accepted and resolved like lengths.'
  return resolve_dim(dim(v), env)
