# Dedicated to the public domain under CC0: https://creativecommons.org/publicdomain/zero/1.0/.

'''
Category label wrapping and rotation.

Rotated labels are anchored at the end of their text (the right-middle point of the unrotated block),
which is placed on the slot center; a positive angle tilts the text counterclockwise so that it reads upwards.
'''

from dataclasses import dataclass
from math import asin, atan, cos, degrees, floor, pi, radians, sin, sqrt
from typing import Iterable, Sequence

from .text import Font, Measurer


h_pi = pi * 0.5

Point = tuple[float,float]


@dataclass(frozen=True, slots=True)
class LabelBlock:
  width:float
  height:float
  lines:tuple[str,...]
  line_height:float


def wrap_label(text:str, font:Font, max_width:float, measure:Measurer) -> LabelBlock:
  '''
  Break `text` into lines no wider than `max_width`, splitting greedily at spaces.
  A single word wider than `max_width` occupies its own line.
  '''
  m = measure(font, text)
  if m.width <= max_width or ' ' not in text.strip():
    return LabelBlock(m.width, m.height, (text,), m.height)
  lines:list[str] = []
  line = ''
  for word in text.split():
    candidate = f'{line} {word}' if line else word
    if line and measure(font, candidate).width > max_width:
      lines.append(line)
      line = word
    else:
      line = candidate
  if line: lines.append(line)
  metrics = [measure(font, l) for l in lines]
  line_height = max(lm.height for lm in metrics)
  width = max(lm.width for lm in metrics)
  return LabelBlock(width, line_height*len(lines), tuple(lines), line_height)


def rotated_size(w:float, h:float, angle:float) -> tuple[float,float]:
  'Axis-aligned bounding size of a w*h rectangle rotated by `angle` radians (0 <= angle <= pi/2).'
  s = sin(angle)
  c = cos(angle)
  return (h*s + w*c, w*s + h*c)


def min_rotation(block:LabelBlock, straight_width:float, angled_width:float) -> float:
  '''
  The smallest angle in radians at which `block` fits its slot.
  `straight_width` is the slot pitch; `angled_width` is the horizontal room available to a tilted label,
  which extends into the neighboring slot.
  '''
  w = block.width
  h = block.height
  if w <= straight_width: return 0.0
  if 3*h > 2*straight_width: return h_pi
  min_angle = asin(3*h / (2*straight_width)) # Keeps the rotated line height within two thirds of the pitch.
  W = max(0.0, angled_width)
  if w <= W: return min_angle
  angle = 2 * atan((h + sqrt(h*h + w*w - W*W)) / (w + W))
  return min(max(angle, min_angle), h_pi)


def rotated_corners(block:LabelBlock, anchor:Point, angle:float) -> list[Point]:
  'Corners of the block rotated about its right-middle point, which sits at `anchor`.'
  ax, ay = anchor
  s = sin(angle)
  c = cos(angle)
  hh = block.height / 2
  local = [(0.0, -hh), (0.0, hh), (-block.width, hh), (-block.width, -hh)]
  return [(ax + x*c + y*s, ay - x*s + y*c) for x, y in local]


def place_rotated(block:LabelBlock, x:float, top:float, angle:float) -> Point:
  '''
  The text anchor for a label in the slot centered at `x`, whose rotated bounds start at `top`.
  An unrotated label is anchored at its center; a rotated one at its right-middle point.
  '''
  if angle == 0: return (x, top + block.height/2)
  return (x, top + block.height/2 * cos(angle))


def polygons_intersect(a:Sequence[Point], b:Sequence[Point], eps=1e-9) -> bool:
  'Separating axis test for two convex polygons. Touching edges do not count as intersection.'
  for poly in (a, b):
    n = len(poly)
    for i in range(n):
      x0, y0 = poly[i]
      x1, y1 = poly[(i+1) % n]
      nx = y0 - y1
      ny = x1 - x0
      pa = [nx*x + ny*y for x, y in a]
      pb = [nx*x + ny*y for x, y in b]
      if max(pa) <= min(pb) + eps or max(pb) <= min(pa) + eps: return False
  return True


def labels_overlap(blocks:Sequence[LabelBlock], pitch:float, angle:float) -> bool:
  'Test each pair of adjacent labels, spaced by `pitch`, for intersection at `angle`.'
  polys = [rotated_corners(b, place_rotated(b, i*pitch, 0, angle), angle) for i, b in enumerate(blocks)]
  return any(polygons_intersect(polys[i], polys[i+1]) for i in range(len(polys) - 1))


def choose_rotation(blocks:Sequence[LabelBlock], pitch:float, straight_width:float, angled_width:float) -> float:
  '''
  Choose one rotation angle in radians for all labels of an axis.
  Starting from the largest per-label minimum, try that angle and then each whole degree above it,
  accepting the first angle at which no adjacent labels intersect. Falls back to vertical.
  '''
  if not blocks: return 0.0
  start = max(min_rotation(b, straight_width, angled_width) for b in blocks)
  if start == 0: return 0.0
  candidates = [start, *(radians(d) for d in range(floor(degrees(start)) + 1, 91))]
  for angle in candidates:
    if angle > h_pi: break
    if not labels_overlap(blocks, pitch, angle): return angle
  return h_pi


def rotated_height(blocks:Iterable[LabelBlock], angle:float) -> float:
  'The tallest rotated bounding height among `blocks`.'
  return max((rotated_size(b.width, b.height, angle)[1] for b in blocks), default=0.0)


def fit_font(texts:Iterable[str], font:Font, available_width:float, measure:Measurer, min_size:float=10) -> Font:
  '''
  Shrink `font` one pixel at a time until the widest of `texts` fits `available_width`,
  stopping at `min_size`.
  '''
  texts = list(texts)
  f = font
  while f.size > min_size and max((measure(f, t).width for t in texts), default=0) > available_width:
    f = f.sized(max(min_size, f.size - 1))
  return f
