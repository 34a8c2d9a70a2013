# Dedicated to the public domain under CC0: https://creativecommons.org/publicdomain/zero/1.0/.

from datetime import datetime

from chartlay.charts import ChartLayout
from chartlay.charts.timeline import tick_interval_named
from chartlay.config import RenderConfig
from chartlay.paint import LineShape, TextShape
from chartlay.render import layout_chart
from chartlay.scale import quarter
from chartlay.text import Font, TextMetrics
from utest import utest, utest_call, utest_close, utest_exc, utest_val


def mono(font:Font, text:str) -> TextMetrics:
  return TextMetrics(0.5 * font.size * len(text), 0.8 * font.size, 0.2 * font.size)


config = RenderConfig(measure=mono, watermark=None, dbg=False)

chart = {'width': 800, 'height': 400}
data = [
  {'timestamp': '2021-01-01', 'value': 0},
  {'timestamp': '2021-06-01', 'value': 100},
  {'timestamp': '2021-12-31', 'value': 60},
]


def value_axis_labels(layout:ChartLayout) -> list[str]:
  return [s.text for s in layout.axes if isinstance(s, TextShape) and s.anchor == 'end']


utest(quarter, tick_interval_named, 'quarter')
utest_exc(ValueError, tick_interval_named, 'fortnight')


@utest_call
def test_timeline_series():
  layout = layout_chart('timeline', {'chart': chart, 'data': data}, config)
  plot = layout.boxes['plot']
  utest_val(None, layout.legend, 'legend hidden by default')
  utest_val([0, 50, 100], [t.value for t in layout.ticks['value']], 'value ticks')
  utest_val(['0,00', '50,00', '100,00'], value_axis_labels(layout), 'value labels')
  utest_val([datetime(2021, 1, 1), datetime(2021, 4, 1), datetime(2021, 7, 1), datetime(2021, 10, 1)],
    [t.value for t in layout.ticks['time']], 'quarterly time ticks')
  utest_val(['Jan 21', 'Apr 21', 'Jul 21', 'Oct 21'], [t.label for t in layout.ticks['time']], 'time labels')

  lines = layout.marks
  utest_val(1, len(lines), 'one line per series')
  line = lines[0]
  utest_val(True, isinstance(line, LineShape), 'series are polylines')
  utest_val(('round', 'round'), (line.cap, line.join), 'round caps and joins')
  utest_close(plot.left(), line.points[0][0], 'series starts at the plot left')
  utest_close(plot.right(), line.points[-1][0], 'series ends at the plot right')
  utest_close(plot.bottom(), line.points[0][1], 'minimum at the plot bottom')
  utest_close(plot.top(), line.points[1][1], 'maximum at the plot top')


@utest_call
def test_timeline_reference():
  layout = layout_chart('timeline', {'chart': {**chart, 'axis': {'referenceValue': 49}}, 'data': data}, config)
  ref_box = layout.boxes['reference']
  fifty = layout.ticks['value'][1]
  utest_val(50, fifty.value, 'tick at 50')
  utest_val(True, ref_box.top() < fifty.px < ref_box.bottom(), 'tick at 50 falls within the reference label')
  utest_val(['49,00', '0,00', '100,00'], value_axis_labels(layout), 'ticks under the reference label are skipped')
  utest_val(round(layout.ticks['reference'][0].px), layout.ticks['reference'][0].px, 'reference line is pixel aligned')

  far = layout_chart('timeline', {'chart': {**chart, 'axis': {'referenceValue': 20}}, 'data': data}, config)
  utest_val(['20,00', '0,00', '50,00', '100,00'], value_axis_labels(far), 'distant ticks are kept')

  # The reference value extends the value domain.
  low = layout_chart('timeline', {'chart': {**chart, 'axis': {'referenceValue': -100}}, 'data': data}, config)
  utest_close(low.boxes['plot'].bottom(), low.ticks['reference'][0].px, 'reference at the domain minimum', tol=0.5)


@utest_call
def test_timeline_legend():
  options = {**chart, 'showLegend': True, 'seriesLabel': ['Revenue', 'Cost'], 'legendPosition': 'bottom'}
  body = {'chart': options, 'meta': {'value': ['revenue', 'cost']},
    'data': [{'timestamp': '2021-01-01', 'revenue': 1, 'cost': 2}, {'timestamp': '2021-02-01', 'revenue': 3}]}
  layout = layout_chart('timeline', body, config)
  utest_val(layout.boxes['chart'].top(), layout.boxes['legend'].top(), 'legend opposite a bottom time axis')
  utest_val(['Revenue', 'Cost'], [pe.entry.label for pe in layout.legend.entries], 'legend entries')
  utest_val([2, 1], [len(m.points) for m in layout.marks], 'missing values are skipped')
  utest_val(['#579', '#975'], [m.stroke for m in layout.marks], 'series strokes')

  top_axis = {**options, 'timeAxis': {'position': 'top'}, 'legendPosition': 'top'}
  layout = layout_chart('timeline', {**body, 'chart': top_axis}, config)
  utest_val(layout.boxes['chart'].bottom(), layout.boxes['legend'].bottom(), 'legend opposite a top time axis')
  utest_val(layout.boxes['plot'].top(), layout.boxes['x_labels'].bottom(), 'time labels above the plot')


@utest_call
def test_timeline_options():
  layout = layout_chart('timeline', {'chart': {**chart, 'timeAxis': {'tickInterval': 'month', 'nice': True},
    'months': ['Jan', 'Feb', 'Mär', 'Apr', 'Mai', 'Jun', 'Jul', 'Aug', 'Sep', 'Okt', 'Nov', 'Dez']}, 'data': data}, config)
  utest_val(13, len(layout.ticks['time']), 'monthly ticks over a niced year')
  utest_val('Mär 21', layout.ticks['time'][2].label, 'localized month names')
  utest_exc(ValueError, layout_chart, 'timeline', {'chart': {**chart, 'timeAxis': {'tickInterval': 'fortnight'}}, 'data': data},
    config)


@utest_call
def test_timeline_tick_counts():
  for count in [0, -3]:
    layout = layout_chart('timeline', {'chart': {**chart, 'timeAxis': {'tickCount': count, 'nice': True}}, 'data': data}, config)
    utest_val([], layout.ticks['time'], f'no time ticks for tickCount {count}')
    utest_val(1, len(layout.marks), f'series still drawn for tickCount {count}')
  layout = layout_chart('timeline', {'chart': {**chart, 'valueAxis': {'tickCount': '5'}}, 'data': data}, config)
  utest_val([0, 20, 40, 60, 80, 100], [t.value for t in layout.ticks['value']], 'numeric string tick count')
  utest_exc(ValueError, layout_chart, 'timeline', {'chart': {**chart, 'valueAxis': {'tickCount': 'many'}}, 'data': data}, config)
