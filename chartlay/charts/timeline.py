# Dedicated to the public domain under CC0: https://creativecommons.org/publicdomain/zero/1.0/.

'''
Time series line charts.
`meta.value` names one value field or a list of them; each becomes a line series,
labeled by the matching entry of `chart.seriesLabel` and stroked with the matching entry of `chart.stroke`.
'''

from dataclasses import replace
from datetime import datetime
from typing import Any, Mapping

from ..config import accessor, as_list, ChartOpts, legend_config
from ..format import default_months, month_year_formatter
from ..legend import LegendEntry, LegendPos, MarkerStyle
from ..paint import LineShape
from ..position import box_xywh
from ..scale import extent, LinearScale, named_intervals, TimeInterval, TimeScale, to_datetime
from . import (axis_regions, axis_style, begin_layout, ChartLayout, label_env, make_legend, max_label_height,
  numeric_ticks, padded_chart_box, RenderCtx, split_legend, split_title, Tick, title_shape, x_axis_shapes, y_axis_shapes)


default_strokes = ['#579', '#975', '#597', '#957', '#759', '#795']

dim_defaults = {
  'padX': '2vmin',
  'labelFontSize': '2.5vmin',
  'titleFontSize': '4vmin',
  'tickLength': '1.5vmin',
  'lineWidth': '2px',
}


def tick_interval_named(name:str) -> TimeInterval:
  try: return named_intervals[name]
  except KeyError as e:
    raise ValueError(f'unknown tick interval: {name!r}; expected one of {sorted(named_intervals)}.') from e


def layout_timeline(body:Mapping[str,Any], ctx:RenderCtx) -> ChartLayout:
  chart = ChartOpts(body.get('chart'))
  meta = body.get('meta') or {}
  get_time = accessor(meta, 'timestamp')
  # Rows without a timestamp cannot be placed.
  data:list[Mapping[str,Any]] = [row for row in body.get('data') or [] if get_time(row) is not None]
  value_names = [str(n) for n in as_list(meta.get('value'))] or ['value']
  getters = [accessor(meta, n) for n in value_names]
  strokes = chart.colors('stroke', default_strokes)
  series_labels = [str(l) for l in as_list(chart.get('seriesLabel'))]

  axis = chart.sub('axis')
  reference = axis.get('referenceValue')
  if reference is not None: reference = float(reference)

  times:list[datetime] = []
  values:list[float] = []
  for row in data:
    times.append(to_datetime(get_time(row)))
    values.extend(float(v) for g in getters if (v := g(row)) is not None)

  env0 = ctx.env
  dims = chart.dims(dim_defaults, env0)
  font = chart.font('label', dims.px('labelFontSize'))
  env1 = label_env(env0, font)
  dims = dims.rebind(env1)
  tick_length = dims.px('tickLength')
  line_width = dims.px('lineWidth')
  style = axis_style(chart, tick_length, env1)
  measure = ctx.measure

  time_axis = chart.sub('timeAxis', 'mainAxis')
  value_axis = chart.sub('valueAxis')
  time_pos = 'top' if time_axis.get('position') == 'top' else 'bottom'
  value_pos = 'right' if value_axis.get('position') == 'right' else 'left'
  fmt = value_axis.formatter()
  date_fmt = month_year_formatter(chart.get('months', default_months))

  # Scales.
  value_scale = LinearScale(extent(values, *([] if reference is None else [reference])))
  value_count = value_axis.number('tickCount', 3)
  if value_axis.flag('nice', chart.flag('nice')): value_scale = value_scale.nice(value_count)
  value_tick_values = value_scale.ticks(value_count)

  t0 = min(times, default=to_datetime(0))
  t1 = max(times, default=to_datetime(0))
  time_scale = TimeScale((t0, t1))
  interval_name = time_axis.get('tickInterval')
  time_count:float|TimeInterval = tick_interval_named(interval_name) if interval_name else time_axis.number('tickCount', 5)
  if time_axis.flag('nice'): time_scale = time_scale.nice(time_count)
  time_tick_values = time_scale.ticks(time_count)

  layout = begin_layout('timeline', ctx, chart)
  chart_box = padded_chart_box(ctx, chart, dim_defaults['padX'], env1)
  layout.boxes['chart'] = chart_box
  ctx.trace('timeline chart box', chart_box)

  title_font = chart.font('title', dims.px('titleFontSize'))
  title_box, area = split_title(ctx, chart_box, chart.get('title'), title_font, gap=tick_length)
  if title_box:
    layout.boxes['title'] = title_box
    layout.axes.append(title_shape(chart.get('title'), title_box, title_font, style.text_color))

  # The legend sits on the side opposite the time axis.
  legend_side = LegendPos.top if time_pos == 'bottom' else LegendPos.bottom
  legend_cfg = legend_config(chart, legend_side, allowed=(legend_side,), default_show=False)
  entries = [LegendEntry(label, fill=strokes[i % len(strokes)], stroke=strokes[i % len(strokes)], style=MarkerStyle.line)
    for i, label in enumerate(series_labels)]
  legend_font = chart.font('legend', chart.px('legendFontSize', font.size, env1))
  legend = make_legend(ctx, chart, legend_cfg, entries, area.width(), legend_font, style.text_color)
  legend_box, area = split_legend(area, legend, legend_cfg.position, gap=tick_length)
  if legend_box:
    layout.legend = legend
    layout.boxes['legend'] = legend_box

  time_title_box, area = split_title(ctx, area, time_axis.get('title'), title_font, side=time_pos, gap=tick_length)
  value_title_box, area = split_title(ctx, area, value_axis.get('title'), title_font, side=value_pos, gap=tick_length)
  if time_title_box:
    layout.boxes['time_title'] = time_title_box
    layout.axes.append(title_shape(time_axis.get('title'), time_title_box, title_font, style.text_color))
  if value_title_box:
    layout.boxes['value_title'] = value_title_box
    layout.axes.append(title_shape(value_axis.get('title'), value_title_box, title_font, style.text_color,
      angle=90 if value_pos == 'left' else -90))

  # Axis regions, sized from the tick labels.
  value_labels = [fmt(v) for v in value_tick_values]
  if reference is not None: value_labels.append(fmt(reference))
  time_ticks = [Tick(d, 0, date_fmt(d)) for d in time_tick_values]
  time_axis_height = max_label_height(ctx, font, time_ticks) + 2*tick_length
  value_axis_width = measure.max_width(font, value_labels) + 2*tick_length
  regions = axis_regions(area, value_axis_width, time_axis_height, time_pos, value_pos)
  plot = regions.plot
  layout.boxes.update(plot=plot, x_labels=regions.x_labels, y_labels=regions.y_labels)
  ctx.trace('timeline plot box', plot)

  value_scale = value_scale.with_range((plot.bottom(), plot.top()))
  time_scale = time_scale.with_range((plot.left(), plot.right()))
  value_ticks = numeric_ticks(value_tick_values, value_scale, fmt)
  time_ticks = [Tick(t.value, time_scale(t.value), t.label) for t in time_ticks]
  layout.ticks.update(time=time_ticks, value=value_ticks)

  # Reference line; value ticks whose position falls inside the reference label are dropped.
  skip = None
  if reference is not None:
    ref_y = round(value_scale(reference))
    ref_label = fmt(reference)
    m = measure(font, ref_label)
    ref_box = box_xywh(regions.y_labels.left(), ref_y - m.ascent, plot.right() - regions.y_labels.left(), m.height, env1)
    if value_pos == 'right':
      ref_box = box_xywh(plot.left(), ref_y - m.ascent, regions.y_labels.right() - plot.left(), m.height, env1)
    layout.boxes['reference'] = ref_box
    ref_tick = Tick(reference, ref_y, ref_label)
    layout.ticks['reference'] = [ref_tick]
    ref_style = replace(style, stroke=axis.get('referenceStroke', '#345'))
    ref_lines, ref_labels = y_axis_shapes([ref_tick], regions.y_labels, plot, font, ref_style, value_pos)
    layout.axes.extend(ref_lines)
    layout.axes.extend(ref_labels)
    top = ref_box.top()
    bottom = ref_box.bottom()
    skip = lambda t: top < t.px < bottom

  lines, labels = y_axis_shapes(value_ticks, regions.y_labels, plot, font, style, value_pos, skip=skip)
  layout.axes.extend(lines)
  layout.axes.extend(labels)
  layout.axes.extend(x_axis_shapes(time_ticks, plot, font, style, time_pos))

  # Series lines.
  cap = chart.get('lineCap', 'round')
  join = chart.get('lineJoin', 'round')
  for i, g in enumerate(getters):
    points = tuple((time_scale(t), value_scale(float(v))) for t, row in zip(times, data) if (v := g(row)) is not None)
    if not points: continue
    layout.marks.append(LineShape(points, stroke=strokes[i % len(strokes)], line_width=line_width, cap=cap, join=join,
      role='mark'))

  layout.extras.update(time_scale=time_scale, value_scale=value_scale, series=value_names)
  return layout
