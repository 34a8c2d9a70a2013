# Dedicated to the public domain under CC0: https://creativecommons.org/publicdomain/zero/1.0/.

from chartlay.legend import layout_legend, LegendAlign, LegendEntry, LegendPos, MarkerStyle
from chartlay.paint import RecordingPainter
from chartlay.text import Font, TextMetrics
from utest import utest_close, utest_val


def mono(font:Font, text:str) -> TextMetrics:
  return TextMetrics(0.5 * font.size * len(text), 0.8 * font.size, 0.2 * font.size)


font = Font(size=10)
entries = [LegendEntry(label, fill='red') for label in ['abcd', 'efgh', 'ijkl']]

# Each entry is 29px wide (6px marker, 3px spacing, 20px text), separated by 13px gaps.
legend = layout_legend(entries, 100, font, mono)
utest_val([2, 1], [len(row) for row in legend.rows], 'rows packed greedily')
utest_val([71, 29], legend.row_widths, 'row widths')
utest_val(100, legend.width, 'horizontal legend takes the whole available width')
utest_val(20, legend.row_height, 'row height')
utest_val(40, legend.height, 'legend height')
utest_val([14.5, 56.5, 35.5], [pe.x for pe in legend.entries], 'centered entry positions')
utest_val([0, 0, 20], [pe.y for pe in legend.entries], 'entry rows')
utest_val((6, 6, 1, 9), (legend.entries[0].marker_w, legend.entries[0].marker_h, legend.entries[0].marker_y,
  legend.entries[0].text_x), 'box marker geometry')
utest_close(0.4, legend.line_width, 'line width')

left = layout_legend(entries, 100, font, mono, align=LegendAlign.left)
utest_val([14.5, 56.5, 14.5], [pe.x for pe in left.entries], 'left aligned entry positions')
right = layout_legend(entries, 100, font, mono, align=LegendAlign.right)
utest_val([14.5, 56.5, 56.5], [pe.x for pe in right.entries], 'right aligned entry positions')

per_row = layout_legend(entries, 100, font, mono, item_per_row=True)
utest_val([1, 1, 1], [len(row) for row in per_row.rows], 'one entry per row')
utest_val(60, per_row.height, 'one entry per row height')

wide = layout_legend(entries, 1000, font, mono)
utest_val([3], [len(row) for row in wide.rows], 'single row')

vertical = layout_legend(entries, 1000, font, mono, position=LegendPos.left)
utest_val(3, len(vertical.rows), 'vertical legends place one entry per row')
utest_val(29, vertical.width, 'vertical legend width fits the content')
utest_val(50, layout_legend(entries, 1000, font, mono, position=LegendPos.right, fixed_size=50).width, 'fixed size')
anchored = layout_legend(entries, 1000, font, mono, position=LegendPos.left, anchor_bottom=True)
utest_val([20, 40, 60], [pe.y for pe in anchored.entries], 'anchored to the bottom')
utest_val(80, anchored.height, 'anchored height')

line = layout_legend([LegendEntry('abcd', fill='red', style=MarkerStyle.line)], 100, font, mono).entries[0]
utest_val((6, 8, 0, 30), (line.marker_w, line.marker_h, line.marker_y, line.width), 'line marker geometry')

empty = layout_legend([], 100, font, mono)
utest_val((100, 0, []), (empty.width, empty.height, empty.rows), 'empty horizontal legend')
utest_val(50, layout_legend([], 100, font, mono, position=LegendPos.left, fixed_size=50).width, 'empty vertical legend')

painter = RecordingPainter()
legend.paint(painter, 10, 20)
utest_val(['legend'], painter.roles(), 'legend shapes')
utest_val(6, len(painter.shapes), 'one marker and one text per entry')
utest_val((24.5, 21), (painter.shapes[0].x, painter.shapes[0].y), 'marker offset by the legend origin')
