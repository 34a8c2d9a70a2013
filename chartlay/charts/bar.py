# Dedicated to the public domain under CC0: https://creativecommons.org/publicdomain/zero/1.0/.

'''
Grouped vertical bar charts.
Rows are grouped by `label` along the x axis; within each group there is one bar per `category`.
The legend lists the categories.
'''

from math import degrees
from typing import Any, Mapping

from ..config import accessor, ChartOpts, legend_config
from ..labels import choose_rotation, fit_font, LabelBlock, place_rotated, rotated_height, wrap_label
from ..legend import LegendEntry, LegendPos, MarkerStyle
from ..paint import RectShape, TextShape
from ..position import box
from ..scale import BandScale, LinearScale
from . import (axis_style, begin_layout, ChartLayout, label_env, make_legend, numeric_ticks,
  padded_chart_box, RenderCtx, split_legend, split_title, Tick, title_shape, y_axis_shapes)


default_colors = ['#579', '#597', '#759', '#795', '#975', '#957']

dim_defaults = {
  'padX': '2vmin',
  'labelFontSize': '2.5vmin',
  'titleFontSize': '4vmin',
  'tickLength': '1.5vmin',
}


def last_group_padding_correction(width:float, n:int, padding:float, extra:float) -> float:
  '''
  The shift applied to the last group so that it sits `extra` inner paddings further right than its neighbors.
  `width` is the full band range.
  '''
  if n == 0: return 0.0
  return width / (n + padding * (n - 1 + extra)) * padding * extra


def layout_bar(body:Mapping[str,Any], ctx:RenderCtx) -> ChartLayout:
  chart = ChartOpts(body.get('chart'))
  meta = body.get('meta')
  data:list[Mapping[str,Any]] = body.get('data') or []

  get_value = accessor(meta, 'value')
  get_category = accessor(meta, 'category')
  get_label = accessor(meta, 'label')

  categories:list[Any] = []
  labels:list[Any] = []
  max_val = 0.0
  for row in data:
    v = get_value(row) or 0
    max_val = max(max_val, v)
    c = get_category(row)
    l = get_label(row)
    if c not in categories: categories.append(c)
    if l not in labels: labels.append(l)

  env0 = ctx.env
  dims = chart.dims(dim_defaults, env0)
  font = chart.font('label', dims.px('labelFontSize'))
  env1 = label_env(env0, font)
  dims = dims.rebind(env1)
  tick_length = dims.px('tickLength')
  style = axis_style(chart, tick_length, env1)
  colors = chart.colors('colors', chart.colors('stroke', default_colors))
  measure = ctx.measure

  label_padding = chart.number('labelPadding', 0.4)
  label_outer_padding = chart.number('labelOuterPadding', 0.0)
  last_extra = chart.number('lastLabelExtraPaddingFactor', 0)
  category_padding = chart.number('categoryPadding', 0.1)

  # Value axis.
  value_axis = chart.sub('valueAxis')
  fmt = value_axis.formatter()
  tick_count = value_axis.number('tickCount', 3)
  value_scale = LinearScale((0, max_val))
  if value_axis.flag('nice', chart.flag('nice', True)): value_scale = value_scale.nice(tick_count)
  tick_values = value_scale.ticks(tick_count)
  value_axis_width = measure.max_width(font, (fmt(v) for v in tick_values)) + 2*tick_length

  layout = begin_layout('bar', ctx, chart)
  chart_box = padded_chart_box(ctx, chart, dim_defaults['padX'], env1)
  layout.boxes['chart'] = chart_box
  ctx.trace('bar chart box', chart_box)

  title_font = chart.font('title', dims.px('titleFontSize'))
  title_box, area = split_title(ctx, chart_box, chart.get('title'), title_font, gap=tick_length)
  if title_box:
    layout.boxes['title'] = title_box
    layout.axes.append(title_shape(chart.get('title'), title_box, title_font, style.text_color))

  # Legend.
  legend_cfg = legend_config(chart, LegendPos.bottom)
  entries = [LegendEntry(str(c), fill=colors[i % len(colors)], style=MarkerStyle.box) for i, c in enumerate(categories)]
  legend_font = chart.font('legend', chart.px('legendFontSize', font.size, env1))
  legend = make_legend(ctx, chart, legend_cfg, entries, area.width(), legend_font, style.text_color)
  legend_box, area = split_legend(area, legend, legend_cfg.position)
  if legend_box:
    layout.legend = legend
    layout.boxes['legend'] = legend_box

  value_title_box, area = split_title(ctx, area, value_axis.get('title'), title_font, side='left', gap=tick_length)
  main_axis = chart.sub('mainAxis', 'labelAxis')
  main_title_box, area = split_title(ctx, area, main_axis.get('title'), title_font, side='bottom', gap=tick_length)

  label_text_height = measure(font, 'X').height

  # Group and category bands.
  band_left = area.left() + value_axis_width
  band_right = area.right()
  correction = last_group_padding_correction(band_right - band_left, len(labels), label_padding, last_extra)
  label_scale = BandScale(labels, (band_left, band_right - correction), label_padding, label_outer_padding)
  category_scale = BandScale(categories, (0, label_scale.bandwidth), category_padding)

  # Group label rotation.
  wrap = chart.flag('labelWrap', True)
  blocks:list[LabelBlock] = []
  for l in labels:
    text = '' if l is None else str(l)
    if wrap: blocks.append(wrap_label(text, font, label_scale.step, measure))
    else:
      m = measure(font, text)
      blocks.append(LabelBlock(m.width, m.height, (text,), m.height))
  angled_width = value_axis_width + label_scale.step*label_outer_padding + label_scale.bandwidth/2
  rotation = choose_rotation(blocks, label_scale.step, label_scale.step, angled_width)
  layout.label_rotation = rotation
  group_label_height = rotated_height(blocks, rotation)

  corner = area.bottom_left().right_by(value_axis_width).above_by(group_label_height + 2*label_text_height)
  y_labels = box(area.top_left(), corner)
  plot = box(corner, area.top_right().below_by(label_text_height))
  x_labels = box(corner, area.bottom_right())
  layout.boxes.update(plot=plot, x_labels=x_labels, y_labels=y_labels)
  ctx.trace('bar plot box', plot)

  if value_title_box:
    layout.boxes['value_title'] = value_title_box
    layout.axes.append(title_shape(value_axis.get('title'), value_title_box, title_font, style.text_color, angle=90))
  if main_title_box:
    layout.boxes['main_title'] = main_title_box
    layout.axes.append(title_shape(main_axis.get('title'), main_title_box, title_font, style.text_color))

  # Value axis ticks.
  value_scale = value_scale.with_range((plot.bottom(), plot.top()))
  ticks = numeric_ticks(tick_values, value_scale, fmt)
  layout.ticks['value'] = ticks
  lines, tick_labels = y_axis_shapes(ticks, y_labels, plot, font, style)
  layout.axes.extend(lines)
  layout.axes.extend(tick_labels)

  # Bars and value labels.
  last_label = labels[-1] if labels else None
  value_font = fit_font((fmt(get_value(row) or 0) for row in data), font,
    category_scale.bandwidth * (1 + category_scale.padding_inner), measure)
  show_values = chart.flag('showValues', True)
  base_y = plot.bottom()
  for row in data:
    v = get_value(row) or 0
    c = get_category(row)
    l = get_label(row)
    x = label_scale(l) + category_scale(c) + (correction if l == last_label else 0)
    top = value_scale(v)
    w = category_scale.bandwidth
    layout.marks.append(RectShape(x, min(top, base_y), w, abs(base_y - top), fill=colors[categories.index(c) % len(colors)]))
    if show_values:
      layout.labels.append(TextShape((fmt(v),), x + w/2, top, value_font, fill=style.text_color, anchor='middle',
        baseline='bottom'))

  # Group labels.
  label_ticks = []
  label_top = base_y + label_text_height
  for l, block in zip(labels, blocks):
    cx = label_scale.center(l) + (correction if l == last_label else 0)
    ax, ay = place_rotated(block, cx, label_top, rotation)
    label_ticks.append(Tick(l, cx, '\n'.join(block.lines)))
    layout.labels.append(TextShape(block.lines, ax, ay, font, fill=style.text_color, anchor='end' if rotation else 'middle',
      baseline='middle', angle=degrees(rotation), line_height=block.line_height))
  layout.ticks['labels'] = label_ticks

  layout.extras.update(label_scale=label_scale, category_scale=category_scale, value_font=value_font, blocks=blocks)
  return layout
