# Dedicated to the public domain under CC0: https://creativecommons.org/publicdomain/zero/1.0/.

'''
Paint shapes: immutable records with resolved pixel coordinates.
Layout produces shapes; a painter consumes them one at a time via `paint(shape)`.

Every shape has a `role` naming its purpose within the chart
('background', 'legend', 'axis', 'mark', 'label', 'watermark', 'debug'),
which lets consumers and tests select shapes without inspecting geometry.
'''

from dataclasses import dataclass
from typing import Protocol, Union

from .text import Font


Point = tuple[float,float]


@dataclass(frozen=True, slots=True)
class RectShape:
  x:float
  y:float
  w:float
  h:float
  fill:str|None = None
  stroke:str|None = None
  line_width:float = 1
  role:str = 'mark'


@dataclass(frozen=True, slots=True)
class LineShape:
  'An open polyline.'
  points:tuple[Point,...]
  stroke:str = 'black'
  line_width:float = 1
  dash:tuple[float,...] = ()
  cap:str = 'butt'
  join:str = 'miter'
  role:str = 'axis'


@dataclass(frozen=True, slots=True)
class PathShape:
  '''
  An SVG path `d` in local units, placed with its local origin at (x, y) and scaled by `scale`.
  Used for marker glyphs drawn on a 32x32 grid.
  '''
  d:str
  x:float
  y:float
  scale:float = 1
  fill:str|None = None
  stroke:str|None = None
  line_width:float = 1
  role:str = 'mark'


@dataclass(frozen=True, slots=True)
class ArcShape:
  '''
  An annular sector centered at (cx, cy).
  Angles are in radians, clockwise from twelve o'clock, as in d3 pie layouts.
  '''
  cx:float
  cy:float
  inner_radius:float
  outer_radius:float
  start_angle:float
  end_angle:float
  pad_angle:float = 0
  fill:str|None = None
  stroke:str|None = None
  line_width:float = 1
  role:str = 'mark'


@dataclass(frozen=True, slots=True)
class TextShape:
  '''
  One or more lines of text anchored at (x, y).
  `anchor` is the horizontal alignment: 'start', 'middle' or 'end'.
  `baseline` is the vertical alignment of the block: 'alphabetic', 'top', 'middle' or 'bottom'.
  `angle` rotates the text counterclockwise about the anchor, in degrees.
  Lines are stacked `line_height` apart; for 'middle' the block is centered on y.
  '''
  lines:tuple[str,...]
  x:float
  y:float
  font:Font
  fill:str = 'black'
  anchor:str = 'start'
  baseline:str = 'alphabetic'
  angle:float = 0
  line_height:float = 0
  role:str = 'label'

  @property
  def text(self) -> str: return '\n'.join(self.lines)


Shape = Union[RectShape, LineShape, PathShape, ArcShape, TextShape]



class Painter(Protocol):
  def paint(self, shape:Shape) -> None: ...



class RecordingPainter:
  'A painter that records shapes in paint order.'

  def __init__(self) -> None:
    self.shapes:list[Shape] = []

  def paint(self, shape:Shape) -> None:
    self.shapes.append(shape)

  def with_role(self, role:str) -> list[Shape]:
    return [s for s in self.shapes if s.role == role]

  def roles(self) -> list[str]:
    'The distinct roles in first-painted order.'
    seen:dict[str,None] = {}
    for s in self.shapes: seen.setdefault(s.role, None)
    return list(seen)
