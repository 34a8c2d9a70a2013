# Dedicated to the public domain under CC0: https://creativecommons.org/publicdomain/zero/1.0/.

'''
Scatter plots: points drawn as shape markers over linear x and y axes.
Rows are grouped into series by the `series` field; without one, every row is its own series.
'''

from typing import Any, Mapping

from ..config import accessor, ChartOpts, legend_config
from ..legend import LegendEntry, LegendPos, MarkerStyle
from ..paint import PathShape
from ..scale import extent, LinearScale, pad_extent
from . import (axis_regions, axis_style, begin_layout, ChartLayout, label_env, make_legend, max_label_height,
  max_label_width, numeric_ticks, padded_chart_box, RenderCtx, split_legend, split_title, title_shape, x_axis_shapes,
  y_axis_shapes)


default_colors = ['red', 'green', 'blue']

# Marker glyphs on a 32x32 grid: triangle, diamond, star.
default_shapes = [
  'M16,0 32,26 0,26z',
  'M16,0 32,16 16,32 0,16z',
  'M0,16 14,14 16,0 18,14, 32,16 18,18 16,32 14,18z',
]

dim_defaults = {
  'padX': '2vmin',
  'labelFontSize': '2.5vmin',
  'titleFontSize': '4vmin',
  'tickLength': '1.5vmin',
  'lineWidth': '2px',
}


def layout_scatter(body:Mapping[str,Any], ctx:RenderCtx) -> ChartLayout:
  chart = ChartOpts(body.get('chart'))
  meta = body.get('meta')
  data:list[Mapping[str,Any]] = body.get('data') or []

  get_x = accessor(meta, 'xValue')
  get_y = accessor(meta, 'yValue')
  get_series = accessor(meta, 'series')
  get_label = accessor(meta, 'label')

  # Series in order of first appearance.
  series_keys:list[Any] = []
  series_labels:list[str] = []
  points:list[tuple[float,float,int]] = []
  for i, row in enumerate(data):
    key = get_series(row)
    if key is None: key = ('row', i)
    if key not in series_keys:
      series_keys.append(key)
      label = get_label(row)
      if label is None: label = key if isinstance(key, str) else f'Series {len(series_labels)}'
      series_labels.append(str(label))
    points.append((float(get_x(row) or 0), float(get_y(row) or 0), series_keys.index(key)))

  env0 = ctx.env
  dims = chart.dims(dim_defaults, env0)
  font = chart.font('label', dims.px('labelFontSize'))
  env1 = label_env(env0, font)
  dims = dims.rebind(env1)
  tick_length = dims.px('tickLength')
  line_width = dims.px('lineWidth')
  shape_size = chart.px('shapeSize', font.size, env1)
  style = axis_style(chart, tick_length, env1)
  colors = chart.colors('colors', default_colors)
  shapes = chart.colors('shapes', default_shapes)
  marker_stroke = chart.get('markerStroke', '#666')
  measure = ctx.measure

  x_axis = chart.sub('xAxis', 'mainAxis')
  y_axis = chart.sub('yAxis', 'valueAxis')
  x_pos = 'top' if x_axis.get('position') == 'top' else 'bottom'
  y_pos = 'right' if y_axis.get('position') == 'right' else 'left'
  x_fmt = x_axis.formatter()
  y_fmt = y_axis.formatter()

  extra = chart.number('extra', 0.05)
  x_scale = LinearScale(pad_extent(*extent(p[0] for p in points), extra))
  y_scale = LinearScale(pad_extent(*extent(p[1] for p in points), extra))
  x_count = x_axis.number('tickCount', 6)
  y_count = y_axis.number('tickCount', 4)
  if x_axis.flag('nice', chart.flag('nice')): x_scale = x_scale.nice(x_count)
  if y_axis.flag('nice', chart.flag('nice')): y_scale = y_scale.nice(y_count)

  layout = begin_layout('scatter', ctx, chart)
  chart_box = padded_chart_box(ctx, chart, dim_defaults['padX'], env1)
  layout.boxes['chart'] = chart_box
  ctx.trace('scatter chart box', chart_box)

  title_font = chart.font('title', dims.px('titleFontSize'))
  title_box, area = split_title(ctx, chart_box, chart.get('title'), title_font, gap=tick_length)
  if title_box:
    layout.boxes['title'] = title_box
    layout.axes.append(title_shape(chart.get('title'), title_box, title_font, style.text_color))

  # Legend.
  legend_cfg = legend_config(chart, LegendPos.bottom)
  entries = [LegendEntry(label, fill=colors[i % len(colors)], stroke=marker_stroke, style=MarkerStyle.shape,
    shape=shapes[i % len(shapes)]) for i, label in enumerate(series_labels)]
  legend_font = chart.font('legend', chart.px('legendFontSize', font.size, env1))
  legend = make_legend(ctx, chart, legend_cfg, entries, area.width(), legend_font, style.text_color)
  legend_box, area = split_legend(area, legend, legend_cfg.position, gap=dims.px('padX'))
  if legend_box:
    layout.legend = legend
    layout.boxes['legend'] = legend_box

  # Axis titles sit outside the tick labels.
  x_title_box, area = split_title(ctx, area, x_axis.get('title'), title_font, side=x_pos, gap=tick_length)
  y_title_box, area = split_title(ctx, area, y_axis.get('title'), title_font, side=y_pos, gap=tick_length)
  if x_title_box:
    layout.boxes['x_title'] = x_title_box
    layout.axes.append(title_shape(x_axis.get('title'), x_title_box, title_font, style.text_color))
  if y_title_box:
    layout.boxes['y_title'] = y_title_box
    layout.axes.append(title_shape(y_axis.get('title'), y_title_box, title_font, style.text_color,
      angle=90 if y_pos == 'left' else -90))

  # Label regions are sized from the unmapped ticks; pixel positions are filled in once the plot box is known.
  x_ticks = numeric_ticks(x_scale.ticks(x_count), x_scale, x_fmt)
  y_ticks = numeric_ticks(y_scale.ticks(y_count), y_scale, y_fmt)
  x_axis_height = max_label_height(ctx, font, x_ticks) + 2*tick_length
  y_axis_width = max_label_width(ctx, font, y_ticks) + 2*tick_length
  regions = axis_regions(area, y_axis_width, x_axis_height, x_pos, y_pos)
  plot = regions.plot
  layout.boxes.update(plot=plot, x_labels=regions.x_labels, y_labels=regions.y_labels)
  ctx.trace('scatter plot box', plot)

  x_scale = x_scale.with_range((plot.left(), plot.right()))
  y_scale = y_scale.with_range((plot.bottom(), plot.top()))
  x_ticks = numeric_ticks((t.value for t in x_ticks), x_scale, x_fmt)
  y_ticks = numeric_ticks((t.value for t in y_ticks), y_scale, y_fmt)
  layout.ticks.update(x=x_ticks, y=y_ticks)

  lines, y_labels = y_axis_shapes(y_ticks, regions.y_labels, plot, font, style, y_pos)
  layout.axes.extend(lines)
  layout.axes.extend(y_labels)
  layout.axes.extend(x_axis_shapes(x_ticks, plot, font, style, x_pos))

  half = shape_size / 2
  for x, y, si in points:
    layout.marks.append(PathShape(shapes[si % len(shapes)], x_scale(x) - half, y_scale(y) - half, scale=shape_size/32,
      fill=colors[si % len(colors)], stroke=marker_stroke, line_width=line_width))

  layout.extras.update(x_scale=x_scale, y_scale=y_scale, series=series_labels)
  return layout
