# Dedicated to the public domain under CC0: https://creativecommons.org/publicdomain/zero/1.0/.

'''
Positions and boxes built from dimension expressions.

Both types are immutable. A position or box may carry an environment snapshot taken by `resolve(env)`;
every value derived from a resolved object carries the same snapshot,
so resolving before or after a derivation yields the same coordinates.
'''

from dataclasses import dataclass, field
from math import hypot
from typing import overload

from .dimension import Dim, dim, DimSpec, Lerp, resolve_dim, UnitEnv, zero


class UnresolvedError(Exception):
  'Raised when coordinates are requested from a position or box that was never resolved.'



@dataclass(frozen=True, slots=True)
class Pos:
  '''
  A point whose coordinates are dimension expressions.
  Screen orientation: x grows rightwards and y grows downwards.
  '''
  dim_x:Dim
  dim_y:Dim
  env:UnitEnv|None = field(default=None, compare=False, repr=False)


  def resolve(self, env:UnitEnv) -> 'Pos':
    'Return a copy holding a snapshot of `env`.'
    return Pos(self.dim_x, self.dim_y, dict(env))


  def _env(self) -> UnitEnv:
    if self.env is None: raise UnresolvedError(self)
    return self.env


  def x(self) -> float: return resolve_dim(self.dim_x, self._env())

  def y(self) -> float: return resolve_dim(self.dim_y, self._env())

  def xy(self) -> tuple[float,float]: return (self.x(), self.y())


  def _derive(self, dim_x:Dim, dim_y:Dim) -> 'Pos':
    return Pos(dim_x, dim_y, self.env)


  def relative(self, dx:DimSpec, dy:DimSpec|None=None) -> 'Pos':
    return self._derive(self.dim_x.plus(dx), self.dim_y.plus(dx if dy is None else dy))

  def left_by(self, d:DimSpec) -> 'Pos': return self._derive(self.dim_x.minus(d), self.dim_y)

  def right_by(self, d:DimSpec) -> 'Pos': return self._derive(self.dim_x.plus(d), self.dim_y)

  def above_by(self, d:DimSpec) -> 'Pos': return self._derive(self.dim_x, self.dim_y.minus(d))

  def below_by(self, d:DimSpec) -> 'Pos': return self._derive(self.dim_x, self.dim_y.plus(d))

  def plus(self, other:'Pos') -> 'Pos': return self._derive(self.dim_x.plus(other.dim_x), self.dim_y.plus(other.dim_y))

  def minus(self, other:'Pos') -> 'Pos': return self._derive(self.dim_x.minus(other.dim_x), self.dim_y.minus(other.dim_y))


  def towards(self, other:'Pos', tx:float, ty:float|None=None) -> 'Pos':
    'Interpolate each axis independently towards `other`.'
    return self._derive(Lerp(self.dim_x, other.dim_x, tx), Lerp(self.dim_y, other.dim_y, tx if ty is None else ty))


  def length(self) -> float:
    'Euclidean distance from the origin.'
    return hypot(self.x(), self.y())


  def with_length(self, length:float) -> 'Pos':
    '''
    Rescale the vector from the origin to the given length.
    Requires a resolved position; the zero vector stays at the origin.
    '''
    x, y = self.xy()
    l = hypot(x, y)
    if l == 0: return self._derive(zero, zero)
    s = length / l
    return self._derive(dim(x * s), dim(y * s))


  def quadrant(self) -> int:
    '''
    Quadrant of the raw coordinates, counted counterclockwise in the mathematical (y up) sense:
    0: x>=0, y>=0; 1: x<0, y>=0; 2: x<0, y<0; 3: x>=0, y<0.
    '''
    x, y = self.xy()
    return (0 if y >= 0 else 2) + (0 if (x >= 0) == (y >= 0) else 1)


  def octant(self) -> int:
    '''
    Octant of the raw coordinates: each quadrant split at the diagonal, counted counterclockwise from the positive x axis.
    Exact diagonals belong to the lower octant of the pair.
    '''
    x, y = self.xy()
    q = (0 if y >= 0 else 2) + (0 if (x >= 0) == (y >= 0) else 1)
    steep = abs(x) < abs(y)
    diagonal = abs(x) == abs(y)
    even_q = q % 2 == 0
    return 2*q + int(steep == even_q and not diagonal)


  def __str__(self) -> str:
    if self.env is None: return f'Pos({self.dim_x}, {self.dim_y})'
    return f'Pos({self.x():.2f}, {self.y():.2f})'



def pos(x:DimSpec, y:DimSpec) -> Pos:
  return Pos(dim(x), dim(y))


origin = Pos(zero, zero)



@dataclass(frozen=True, slots=True)
class Box:
  '''
  An axis-aligned rectangle.
  The edges are min/max combinations of the defining corners, so top<=bottom and left<=right hold for any corner order.
  '''
  dim_left:Dim
  dim_top:Dim
  dim_right:Dim
  dim_bottom:Dim
  env:UnitEnv|None = field(default=None, compare=False, repr=False)


  def resolve(self, env:UnitEnv) -> 'Box':
    return Box(self.dim_left, self.dim_top, self.dim_right, self.dim_bottom, dict(env))


  def _env(self) -> UnitEnv:
    if self.env is None: raise UnresolvedError(self)
    return self.env


  def left(self) -> float: return resolve_dim(self.dim_left, self._env())

  def top(self) -> float: return resolve_dim(self.dim_top, self._env())

  def right(self) -> float: return resolve_dim(self.dim_right, self._env())

  def bottom(self) -> float: return resolve_dim(self.dim_bottom, self._env())

  def width(self) -> float: return self.right() - self.left()

  def height(self) -> float: return self.bottom() - self.top()

  def xywh(self) -> tuple[float,float,float,float]: return (self.left(), self.top(), self.width(), self.height())

  def tlbr(self) -> tuple[float,float,float,float]: return (self.top(), self.left(), self.bottom(), self.right())


  def top_left(self) -> Pos: return Pos(self.dim_left, self.dim_top, self.env)

  def top_right(self) -> Pos: return Pos(self.dim_right, self.dim_top, self.env)

  def bottom_left(self) -> Pos: return Pos(self.dim_left, self.dim_bottom, self.env)

  def bottom_right(self) -> Pos: return Pos(self.dim_right, self.dim_bottom, self.env)

  def center(self) -> Pos: return self.top_left().towards(self.bottom_right(), 0.5)


  def inside_box(self, dx:DimSpec, dy:DimSpec|None=None) -> 'Box':
    'Inset each edge; `dy` defaults to `dx`.'
    dx = dim(dx)
    dy = dx if dy is None else dim(dy)
    return self._normalized(self.dim_left.plus(dx), self.dim_top.plus(dy), self.dim_right.minus(dx), self.dim_bottom.minus(dy))


  def outside_box(self, dx:DimSpec, dy:DimSpec|None=None) -> 'Box':
    'Outset each edge; `dy` defaults to `dx`.'
    dx = dim(dx)
    dy = dx if dy is None else dim(dy)
    return self._normalized(self.dim_left.minus(dx), self.dim_top.minus(dy), self.dim_right.plus(dx), self.dim_bottom.plus(dy))


  def _normalized(self, l:Dim, t:Dim, r:Dim, b:Dim) -> 'Box':
    'Edges that cross over are swapped, so that left <= right and top <= bottom.'
    return Box(l.min(r), t.min(b), l.max(r), t.max(b), self.env)


  def contains(self, p:Pos) -> bool:
    x, y = p.xy()
    return self.left() <= x <= self.right() and self.top() <= y <= self.bottom()


  def intersects(self, other:'Box') -> bool:
    return (self.left() < other.right() and other.left() < self.right()
     and self.top() < other.bottom() and other.top() < self.bottom())


  def __str__(self) -> str:
    if self.env is None: return f'Box({self.dim_left}, {self.dim_top}, {self.dim_right}, {self.dim_bottom})'
    l, t, w, h = self.xywh()
    return f'Box(x={l:.2f}, y={t:.2f}, w={w:.2f}, h={h:.2f})'


@overload
def box(a:Pos, b:Pos) -> Box: ...
@overload
def box(a:DimSpec, b:DimSpec, c:DimSpec, d:DimSpec) -> Box: ...

def box(*args) -> Box: # type: ignore[no-untyped-def]
  '''
  Create a box from two opposite corners, `box(p1, p2)`, or from edges, `box(left, top, right, bottom)`.
  The result carries the environment of the first resolved corner, if any.
  '''
  if len(args) == 2:
    a, b = args
    if not (isinstance(a, Pos) and isinstance(b, Pos)): raise TypeError(f'box expects two positions: {args!r}')
    env = a.env if a.env is not None else b.env
    return Box(a.dim_x.min(b.dim_x), a.dim_y.min(b.dim_y), a.dim_x.max(b.dim_x), a.dim_y.max(b.dim_y), env)
  if len(args) == 4:
    return box_ltrb(*args)
  raise TypeError(f'box expects 2 positions or 4 dimensions; received {len(args)} arguments.')


def box_ltrb(left:DimSpec, top:DimSpec, right:DimSpec, bottom:DimSpec) -> Box:
  l, t, r, b = dim(left), dim(top), dim(right), dim(bottom)
  return Box(l.min(r), t.min(b), l.max(r), t.max(b))


def box_xywh(x:float, y:float, w:float, h:float, env:UnitEnv|None=None) -> Box:
  'Create a box from pixel coordinates.'
  return Box(dim(min(x, x+w)), dim(min(y, y+h)), dim(max(x, x+w)), dim(max(y, y+h)), env)
