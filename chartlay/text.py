# Dedicated to the public domain under CC0: https://creativecommons.org/publicdomain/zero/1.0/.

'''
Fonts, text metrics, and measurers.

A measurer is any callable `(font, text) -> TextMetrics`.
Layout code receives its measurer wrapped in a `MeasureCache`, which lives for a single render.
'''

from dataclasses import dataclass
from functools import cache
from typing import Callable, Iterable

from .io import errL


@dataclass(frozen=True, slots=True)
class Font:
  family:str = 'sans-serif'
  size:float = 12
  weight:str = 'normal'

  @property
  def css(self) -> str:
    'The CSS shorthand, e.g. "bold 12px sans-serif".'
    return f'{self.weight} {self.size:g}px {self.family}'

  def sized(self, size:float) -> 'Font':
    return Font(self.family, size, self.weight)


@dataclass(frozen=True, slots=True)
class TextMetrics:
  width:float
  ascent:float
  descent:float

  @property
  def height(self) -> float: return self.ascent + self.descent


Measurer = Callable[[Font, str], TextMetrics]



class MeasureCache:
  '''
  Memoizes a measurer by (font, text).
  Create one per render; measurements are never shared across renders.
  '''

  def __init__(self, measure:Measurer) -> None:
    self.measure = measure
    self.cache:dict[tuple[Font,str],TextMetrics] = {}
    self.miss_count = 0


  def __call__(self, font:Font, text:str) -> TextMetrics:
    key = (font, text)
    try: return self.cache[key]
    except KeyError: pass
    self.miss_count += 1
    m = self.measure(font, text)
    self.cache[key] = m
    return m


  def max_width(self, font:Font, texts:Iterable[str]) -> float:
    return max((self(font, t).width for t in texts), default=0.0)



# Per-character width in ems for the approximate measurer.
_narrow_chars = frozenset('iljtfrI.,:;!|\'`')
_wide_chars = frozenset('mwMW@%')
_space_chars = frozenset(' \t')


def approx_measure(font:Font, text:str) -> TextMetrics:
  '''
  Estimate metrics from character classes alone.
  Deterministic and independent of installed fonts; suitable for tests and headless servers without font files.
  '''
  if not text: return TextMetrics(0.0, 0.0, 0.0)
  ems = 0.0
  for c in text:
    if c in _space_chars: ems += 0.28
    elif c in _narrow_chars: ems += 0.3
    elif c in _wide_chars: ems += 0.85
    elif c.isupper() or c.isdigit(): ems += 0.62
    else: ems += 0.52
  if font.weight == 'bold': ems *= 1.06
  return TextMetrics(width=ems*font.size, ascent=0.72*font.size, descent=0.21*font.size)



class PillowMeasurer:
  '''
  Measure text with FreeType fonts loaded by Pillow.
  `font_paths` maps a family name to a font file; other families are searched by file name,
  and finally fall back to Pillow's default font.
  '''

  def __init__(self, font_paths:dict[str,str]|None=None, dbg=False) -> None:
    self.font_paths = dict(font_paths or {})
    self.dbg = dbg


  def __call__(self, font:Font, text:str) -> TextMetrics:
    if not text: return TextMetrics(0.0, 0.0, 0.0)
    size = max(1, round(font.size))
    pil_font = self._load(font.family, font.weight, size)
    scale = font.size / size
    left, top, right, bottom = pil_font.getbbox(text, anchor='ls')
    width = pil_font.getlength(text)
    return TextMetrics(width=width*scale, ascent=max(0, -top)*scale, descent=max(0, bottom)*scale)


  def _load(self, family:str, weight:str, size:int): # type: ignore[no-untyped-def]
    return _load_pil_font(self.font_paths.get(family, ''), family, weight, size, self.dbg)


@cache
def _load_pil_font(path:str, family:str, weight:str, size:int, dbg:bool): # type: ignore[no-untyped-def]
  from PIL import ImageFont
  stem = family.replace(' ', '')
  suffix = '-Bold' if weight == 'bold' else ''
  candidates = [path] if path else []
  candidates.extend([f'{family}{suffix}.ttf', f'{stem}{suffix}.ttf', f'DejaVuSans{suffix}.ttf', 'DejaVuSans.ttf', 'Arial.ttf'])
  for name in candidates:
    try: return ImageFont.truetype(name, size=size)
    except OSError: continue
  if dbg: errL(f'chartlay: font not found: {family!r}; using the Pillow default font.')
  return ImageFont.load_default(size=size)


measurers:dict[str,Measurer] = {
  'approx': approx_measure,
  'pillow': PillowMeasurer(),
}
