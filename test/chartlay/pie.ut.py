# Dedicated to the public domain under CC0: https://creativecommons.org/publicdomain/zero/1.0/.

from math import pi, tau

from chartlay.charts.pie import arc_centroid, pie_slices, Slice
from chartlay.config import RenderConfig
from chartlay.paint import ArcShape, TextShape
from chartlay.render import layout_chart
from chartlay.text import Font, TextMetrics
from utest import utest, utest_call, utest_close, utest_seq_close, utest_val


def mono(font:Font, text:str) -> TextMetrics:
  return TextMetrics(0.5 * font.size * len(text), 0.8 * font.size, 0.2 * font.size)


config = RenderConfig(measure=mono, watermark=None, dbg=False)


utest([], pie_slices, [])
utest([Slice(0, 1, 0, tau, 0)], pie_slices, [1])

# Arcs are laid out largest first; the result keeps input order.
slices = pie_slices([1, 3, 2])
utest_val([2, 0, 1], [s.index for s in slices], 'angular order')
utest_seq_close([5*tau/6, 0, tau/2], [s.start_angle for s in slices], 'start angles')
utest_seq_close([tau, tau/2, 5*tau/6], [s.end_angle for s in slices], 'end angles')

ties = pie_slices([1, 1, 1])
utest_seq_close([0, tau/3, 2*tau/3], [s.start_angle for s in ties], 'ties keep input order')

empty = pie_slices([0, 1])
utest_val(empty[0].start_angle, empty[0].end_angle, 'zero values have empty arcs')

padded = pie_slices([1, 1], pad_angle=0.1)
utest_seq_close([0, tau/2], [s.start_angle for s in padded], 'padded start angles')
utest_seq_close([0.1, 0.1], [s.pad_angle for s in padded], 'pad angles')
capped = pie_slices([1, 1], pad_angle=10)
utest_seq_close([pi, pi], [s.pad_angle for s in capped], 'pad angle is capped at an equal share')

rotated = pie_slices([1, 1], start_angle=pi/2, end_angle=pi/2 + tau)
utest_seq_close([pi/2, 3*pi/2], [s.start_angle for s in rotated], 'start angle offset')

utest_seq_close((20, 0), arc_centroid(Slice(0, 1, 0, pi, 0), 10, 30), 'centroid at three o\'clock')
utest_seq_close((0, -20), arc_centroid(Slice(0, 1, -pi/4, pi/4, 0), 10, 30), 'centroid at twelve o\'clock')


data = [{'value': 1, 'label': 'a', 'legend': 'A'}, {'value': 1, 'label': 'b', 'legend': 'B'}, {'value': 1, 'label': 'c', 'legend': 'C'}]


@utest_call
def test_pie_layout():
  layout = layout_chart('pie', {'chart': {'width': 400, 'height': 400}, 'data': data}, config)
  slices = layout.extras['slices']
  utest_seq_close([0, tau/3, 2*tau/3], [s.start_angle for s in slices], 'equal slices')
  utest_seq_close([tau/3, 2*tau/3, tau], [s.end_angle for s in slices], 'equal slice ends')

  # The chart box is inset by 4px; the legend is one 32px row below a 392x360 pie box.
  utest_val((4, 4, 392, 360), layout.boxes['plot'].xywh(), 'pie box')
  utest_val((4, 364, 392, 32), layout.boxes['legend'].xywh(), 'legend box')
  utest_seq_close((200, 184), layout.extras['center'], 'pie center')
  utest_close(25 * 3.6, layout.extras['inner_radius'], 'inner radius is relative to the pie box')
  utest_close(33 * 3.6, layout.extras['outer_radius'], 'outer radius is relative to the pie box')

  arcs = layout.marks
  utest_val(3, len(arcs), 'one arc per row')
  utest_val(True, all(isinstance(a, ArcShape) and a.stroke is None for a in arcs), 'unstroked arcs')
  labels = [s for s in layout.labels if isinstance(s, TextShape)]
  utest_val(['a', 'b', 'c'], [s.text for s in labels], 'slice labels')
  utest_val([('start', 'middle'), ('middle', 'top'), ('end', 'middle')], [(s.anchor, s.baseline) for s in labels],
    'labels are aligned away from the center')
  utest_close(layout.extras['outer_radius'] * 1.2, ((labels[1].x - 200)**2 + (labels[1].y - 184)**2)**0.5, 'label radius')
  utest_val(['A', 'B', 'C'], [pe.entry.label for pe in layout.legend.entries], 'legend entries')


@utest_call
def test_pie_options():
  chart = {'width': 400, 'height': 400, 'legendPosition': 'top', 'labelAnchor': 'center', 'lineWidth': '2px',
    'showLabelDebug': True, 'showCenter': True, 'innerRadius': 0}
  layout = layout_chart('pie', {'chart': chart, 'data': data}, config)
  utest_val((4, 4, 392, 32), layout.boxes['legend'].xywh(), 'legend above the pie')
  utest_val(36, layout.boxes['plot'].top(), 'pie below the legend')
  utest_val([('middle', 'middle')] * 3, [(s.anchor, s.baseline) for s in layout.labels], 'centered labels')
  utest_val(True, all(a.stroke == '#fff' and a.line_width == 2 for a in layout.marks), 'stroked arcs')
  utest_val(0, layout.extras['inner_radius'], 'pie rather than donut')
  utest_val(5, len(layout.debug), 'label leaders and center cross')

  # Left and right legends are not supported by pies; the default is used instead.
  side = layout_chart('pie', {'chart': {'width': 400, 'height': 400, 'legendPosition': 'left'}, 'data': data}, config)
  utest_val(364, side.boxes['legend'].top(), 'disallowed legend position')


@utest_call
def test_pie_defaults():
  layout = layout_chart('pie', {'chart': {'width': 400, 'height': 400, 'showLegend': False}, 'data': [{'value': 2}, {}]},
    config)
  utest_val(None, layout.legend, 'hidden legend')
  utest_val((4, 4, 392, 392), layout.boxes['plot'].xywh(), 'pie box without a legend')
  utest_val(['Label 0', 'Label 1'], [s.text for s in layout.labels], 'default labels')
  utest_val([tau, tau], [s.end_angle for s in layout.extras['slices']], 'missing values are zero')
