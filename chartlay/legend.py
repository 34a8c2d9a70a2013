# Dedicated to the public domain under CC0: https://creativecommons.org/publicdomain/zero/1.0/.

'''
Legend layout: labeled marker samples packed greedily into rows within the available width.
'''

from dataclasses import dataclass, field
from enum import Enum
from math import ceil, floor
from typing import Iterable

from .paint import LineShape, PathShape, Painter, RectShape, TextShape
from .text import Font, Measurer, TextMetrics


class MarkerStyle(Enum):
  box = 'box'
  line = 'line'
  shape = 'shape'


class LegendAlign(Enum):
  left = 'left'
  center = 'center'
  right = 'right'


class LegendPos(Enum):
  top = 'top'
  bottom = 'bottom'
  left = 'left'
  right = 'right'

  @property
  def is_vertical(self) -> bool: return self in (LegendPos.left, LegendPos.right)


@dataclass(frozen=True, slots=True)
class LegendEntry:
  label:str
  fill:str
  stroke:str|None = None
  style:MarkerStyle = MarkerStyle.box
  shape:str|None = None # SVG path on a 32x32 grid, for the shape style.


@dataclass(frozen=True, slots=True)
class LegendRatios:
  'Tunable proportions of legend samples, relative to the ascent of the legend font.'
  marker:float = 0.65
  marker_offset:float = 0.35 * 5 / 8
  spacing:float = 0.45 # Of the marker height.
  entry_gap:float = 1.25 # Of the entry height.
  line_width:float = 0.05


@dataclass(frozen=True, slots=True)
class PlacedEntry:
  'An entry positioned relative to the legend origin.'
  entry:LegendEntry
  x:float
  y:float
  width:float
  height:float
  marker_w:float
  marker_h:float
  marker_y:float
  text_x:float
  metrics:TextMetrics


@dataclass
class Legend:
  width:float
  height:float
  row_height:float
  rows:list[list[PlacedEntry]] = field(default_factory=list)
  row_widths:list[float] = field(default_factory=list)
  font:Font = field(default_factory=Font)
  text_color:str = 'black'
  line_width:float = 1


  @property
  def entries(self) -> list[PlacedEntry]:
    return [pe for row in self.rows for pe in row]


  def paint(self, painter:Painter, x:float, y:float) -> None:
    'Replay the legend through `painter` with its top-left corner at (x, y).'
    for pe in self.entries:
      ex = x + pe.x
      ey = y + pe.y
      e = pe.entry
      my = ey + pe.marker_y
      match e.style:
        case MarkerStyle.box:
          painter.paint(RectShape(ex, my, pe.marker_w, pe.marker_h, fill=e.fill, stroke=e.stroke, role='legend'))
        case MarkerStyle.line:
          mid = my + pe.marker_h / 2
          painter.paint(LineShape(((ex, mid), (ex + pe.marker_w, mid)), stroke=e.stroke or e.fill, line_width=self.line_width,
            role='legend'))
        case MarkerStyle.shape:
          painter.paint(PathShape(e.shape or square_path, ex, my, scale=pe.marker_w/32, fill=e.fill, stroke=e.stroke, role='legend'))
      painter.paint(TextShape((e.label,), ex + pe.text_x, ey + pe.metrics.ascent, self.font, fill=self.text_color, role='legend'))


  def paint_outline(self, painter:Painter, x:float, y:float, color='magenta') -> None:
    'Paint the debug wireframe: the legend bounds and each entry box.'
    painter.paint(RectShape(x, y, self.width, self.height, stroke=color, role='debug'))
    for pe in self.entries:
      painter.paint(RectShape(x + pe.x, y + pe.y, pe.width, pe.height, stroke=color, role='debug'))


square_path = 'M0,0 32,0 32,32 0,32z'


def layout_legend(entries:Iterable[LegendEntry], avail_width:float, font:Font, measure:Measurer, *,
 text_color='black', align=LegendAlign.center, position=LegendPos.bottom, item_per_row=False,
 fixed_size:float|None=None, anchor_bottom=False, ratios=LegendRatios()) -> Legend:
  '''
  Pack legend entries into rows.
  Top and bottom legends claim the whole `avail_width`; left and right legends are sized to their content,
  or to `fixed_size` if that is larger, and always place one entry per row.
  `anchor_bottom` offsets the first row of a left or right legend by one row height.
  '''
  vertical = position.is_vertical
  one_per_row = item_per_row or vertical

  # Measure.
  measured:list[tuple[LegendEntry,TextMetrics,float,float,float,float,float]] = []
  for e in entries:
    m = measure(font, e.label)
    marker_size = ceil(ratios.marker * m.ascent)
    if e.style == MarkerStyle.line:
      marker_w, marker_h = marker_size, m.ascent
      marker_y = 0.0
    else:
      marker_w = marker_h = marker_size
      marker_y = floor(ratios.marker_offset * m.ascent)
    spacing = round(ratios.spacing * marker_h)
    w = marker_w + spacing + m.width
    h = max(marker_h, m.height)
    measured.append((e, m, marker_w, marker_h, marker_y, w, h))

  if not measured:
    return Legend(width=(fixed_size or 0) if vertical else avail_width, height=0, row_height=0, font=font, text_color=text_color)

  # Pack.
  packed:list[list[tuple[tuple,float]]] = [[]]
  row_widths = [0.0]
  for item in measured:
    w, h = item[5], item[6]
    row = packed[-1]
    gap = ceil(h * ratios.entry_gap) if row else 0
    if row and (one_per_row or row_widths[-1] + gap + w > avail_width):
      packed.append([])
      row_widths.append(0.0)
      gap = 0
    packed[-1].append((item, row_widths[-1] + gap))
    row_widths[-1] += gap + w

  max_row_width = max(row_widths)
  if vertical:
    width = max(max_row_width, fixed_size or 0)
  else:
    width = avail_width

  max_h = max(item[6] for item in measured)
  row_height = ceil(max_h * 2)
  justify = (width - max_row_width) / 2 if not vertical else 0

  rows:list[list[PlacedEntry]] = []
  top = row_height if (vertical and anchor_bottom) else 0
  for row_items, row_w in zip(packed, row_widths):
    match align:
      case LegendAlign.left: start_x = justify
      case LegendAlign.right: start_x = width - row_w - justify
      case _: start_x = (width - row_w) / 2
    placed = []
    for (e, m, marker_w, marker_h, marker_y, w, h), x in row_items:
      text_x = marker_w + round(ratios.spacing * marker_h)
      placed.append(PlacedEntry(e, start_x + x, top, w, h, marker_w, marker_h, marker_y, text_x, m))
    rows.append(placed)
    top += row_height

  line_width = ratios.line_width * max(item[1].ascent for item in measured)
  return Legend(width=width, height=top, row_height=row_height, rows=rows, row_widths=row_widths, font=font,
    text_color=text_color, line_width=line_width)
