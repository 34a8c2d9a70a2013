# Dedicated to the public domain under CC0: https://creativecommons.org/publicdomain/zero/1.0/.

'''
SVG output: a painter that converts shapes into an lxml element tree.
'''

from math import asin, cos, pi, sin, sqrt, tau
from typing import Any, Iterable, Union

from lxml import etree

from .paint import ArcShape, LineShape, PathShape, Point, RectShape, Shape, TextShape


svg_ns = 'http://www.w3.org/2000/svg'

_epsilon = 1e-9


def prefer_int(v:float) -> Union[int,float]:
  'Convert integral floats to int.'
  i = int(v)
  return i if i == v else v


def fmt_num(v:float) -> str:
  return str(prefer_int(round(v, 3)))


# Transforms.

def scale(x:float, y:float|None=None) -> str:
  if y is None:
    return f'scale({fmt_num(x)})'
  return f'scale({fmt_num(x)},{fmt_num(y)})'


def rotate(degrees:float, x:float=0, y:float=0) -> str:
  if x == 0 and y == 0:
    return f'rotate({fmt_num(degrees)})'
  return f'rotate({fmt_num(degrees)},{fmt_num(x)},{fmt_num(y)})'


def translate(x:float=0, y:float=0) -> str:
  return f'translate({fmt_num(x)},{fmt_num(y)})'


def fmt_points(points:Iterable[Point]) -> str:
  return ' '.join(f'{fmt_num(x)},{fmt_num(y)}' for x, y in points)


# Arcs.

def _polar(cx:float, cy:float, r:float, a:float) -> tuple[str,str]:
  'The point at radius `r` and angle `a` (clockwise from twelve o\'clock).'
  return fmt_num(cx + r*sin(a)), fmt_num(cy - r*cos(a))


def arc_path(arc:ArcShape) -> str:
  '''
  The path data of an annular sector.
  Padding follows d3.arc: the pad angle is converted to a constant linear gap
  using a pad radius of sqrt(inner² + outer²).
  '''
  cx, cy = arc.cx, arc.cy
  r0, r1 = sorted((arc.inner_radius, arc.outer_radius))
  a0, a1 = sorted((arc.start_angle, arc.end_angle))
  da = a1 - a0
  if r1 <= _epsilon: return f'M{fmt_num(cx)},{fmt_num(cy)}Z'

  if da >= tau - _epsilon:
    # Full ring: two half circles per radius, the inner one cut out with the even-odd rule.
    parts = [_circle(cx, cy, r1)]
    if r0 > _epsilon: parts.append(_circle(cx, cy, r0))
    return ''.join(parts)

  a01, a11 = a0, a1
  a00, a10 = a0, a1
  ap = arc.pad_angle / 2
  if ap > _epsilon:
    rp = sqrt(r0*r0 + r1*r1)
    p1 = asin(min(1, rp / r1 * sin(ap)))
    if da - 2*p1 > _epsilon: a01, a11 = a0 + p1, a1 - p1
    else: a01 = a11 = (a0 + a1) / 2
    if r0 > _epsilon:
      p0 = asin(min(1, rp / r0 * sin(ap)))
      if da - 2*p0 > _epsilon: a00, a10 = a0 + p0, a1 - p0
      else: a00 = a10 = (a0 + a1) / 2

  ox0, oy0 = _polar(cx, cy, r1, a01)
  ox1, oy1 = _polar(cx, cy, r1, a11)
  large = int(a11 - a01 > pi)
  d = f'M{ox0},{oy0}A{fmt_num(r1)},{fmt_num(r1)},0,{large},1,{ox1},{oy1}'
  if r0 > _epsilon:
    ix1, iy1 = _polar(cx, cy, r0, a10)
    ix0, iy0 = _polar(cx, cy, r0, a00)
    large = int(a10 - a00 > pi)
    d += f'L{ix1},{iy1}A{fmt_num(r0)},{fmt_num(r0)},0,{large},0,{ix0},{iy0}'
  else:
    d += f'L{fmt_num(cx)},{fmt_num(cy)}'
  return d + 'Z'


def _circle(cx:float, cy:float, r:float) -> str:
  rs = fmt_num(r)
  return (f'M{fmt_num(cx)},{fmt_num(cy - r)}A{rs},{rs},0,1,1,{fmt_num(cx)},{fmt_num(cy + r)}'
    f'A{rs},{rs},0,1,1,{fmt_num(cx)},{fmt_num(cy - r)}Z')


# Text.

_dominant_baselines = {
  'alphabetic': None,
  'top': 'text-before-edge',
  'middle': 'central',
  'bottom': 'text-after-edge',
}


def _first_line_y(t:TextShape) -> float:
  'The y coordinate of the first line, so that the block as a whole honors the vertical alignment.'
  extra = (len(t.lines) - 1) * t.line_height
  match t.baseline:
    case 'middle': return t.y - extra/2
    case 'bottom': return t.y - extra
  return t.y



class SvgPainter:
  '''
  Paints shapes as SVG elements, in order.
  Each element carries its shape role as its class attribute.
  '''

  def __init__(self, width:float, height:float) -> None:
    self.width = width
    self.height = height
    self.root = etree.Element(f'{{{svg_ns}}}svg', nsmap={None: svg_ns}, version='1.1',
      width=fmt_num(width), height=fmt_num(height), viewBox=f'0 0 {fmt_num(width)} {fmt_num(height)}')


  def _add(self, tag:str, role:str, **attrs:Any) -> Any:
    el = etree.SubElement(self.root, f'{{{svg_ns}}}{tag}')
    el.set('class', role)
    for k, v in attrs.items():
      if v is None: continue
      el.set(k.replace('_', '-'), v if isinstance(v, str) else fmt_num(v))
    return el


  def paint(self, shape:Shape) -> None:
    match shape:
      case RectShape():
        self._add('rect', shape.role, x=shape.x, y=shape.y, width=shape.w, height=shape.h, fill=shape.fill or 'none',
          stroke=shape.stroke, stroke_width=shape.line_width if shape.stroke else None)
      case LineShape():
        self._add('polyline', shape.role, points=fmt_points(shape.points), fill='none', stroke=shape.stroke,
          stroke_width=shape.line_width,
          stroke_dasharray=' '.join(fmt_num(d) for d in shape.dash) if shape.dash else None,
          stroke_linecap=None if shape.cap == 'butt' else shape.cap,
          stroke_linejoin=None if shape.join == 'miter' else shape.join)
      case PathShape():
        transform = translate(shape.x, shape.y)
        if shape.scale != 1: transform += ' ' + scale(shape.scale)
        self._add('path', shape.role, d=shape.d, transform=transform, fill=shape.fill or 'none', stroke=shape.stroke,
          stroke_width=shape.line_width if shape.stroke else None,
          vector_effect='non-scaling-stroke' if shape.stroke else None)
      case ArcShape():
        self._add('path', shape.role, d=arc_path(shape), fill=shape.fill or 'none', fill_rule='evenodd', stroke=shape.stroke,
          stroke_width=shape.line_width if shape.stroke else None)
      case TextShape():
        self._paint_text(shape)
      case _:
        raise TypeError(f'not a shape: {shape!r}')


  def _paint_text(self, t:TextShape) -> None:
    f = t.font
    el = self._add('text', t.role, x=t.x, y=_first_line_y(t), fill=t.fill, font_family=f.family, font_size=f.size,
      font_weight=None if f.weight == 'normal' else f.weight,
      text_anchor=None if t.anchor == 'start' else t.anchor,
      dominant_baseline=_dominant_baselines.get(t.baseline),
      transform=rotate(-t.angle, t.x, t.y) if t.angle else None)
    if len(t.lines) == 1:
      el.text = t.lines[0]
      return
    for i, line in enumerate(t.lines):
      span = etree.SubElement(el, f'{{{svg_ns}}}tspan')
      span.set('x', fmt_num(t.x))
      if i: span.set('dy', fmt_num(t.line_height))
      span.text = line


  def to_bytes(self) -> bytes:
    return etree.tostring(self.root, xml_declaration=True, encoding='utf-8', pretty_print=True)
