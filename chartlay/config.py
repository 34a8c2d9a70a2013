# Dedicated to the public domain under CC0: https://creativecommons.org/publicdomain/zero/1.0/.

'''
Render configuration and chart option access.

`RenderConfig` holds the request-scoped switches of a render (canvas ceiling, debug boxes, watermark, measurer).
Process-wide defaults come from environment variables, read by the accessor functions below.
`ChartOpts` wraps the `chart` object of a request body.
'''

from dataclasses import dataclass, field
from math import isfinite
from os import environ
from typing import Any, Callable, Mapping

from .dimension import ChartDims, DimSpec, resolve_dim, dim, UnitEnv
from .format import Formatter, number_formatter
from .legend import LegendAlign, LegendPos
from .text import Font, Measurer, measurers


class CanvasSizeError(ValueError):
  'Raised when the requested canvas is negative, non-finite, or larger than the configured ceiling.'



_bool_cap_items:list[tuple[str,bool]] = [
  ('True', True),
  ('False', False),
  ('Yes', True),
  ('No', False),
  ('On', True),
  ('Off', False),
  ('1', True),
  ('0', False),
  ('T', True),
  ('F', False),
  ('Y', True),
  ('N', False),
]

bool_str_vals:dict[str,bool] = dict([
  ('', False),
  *_bool_cap_items,
  *[(s.lower(), b) for (s, b) in _bool_cap_items],
  *[(s.upper(), b) for (s, b) in _bool_cap_items],
])


def parse_bool(v:Any) -> bool:
  '''
  Interpret a loosely typed request flag.
  None, False, 0 and false-like strings are False; unrecognized strings and other values are True.
  '''
  if v is None: return False
  if isinstance(v, str): return bool_str_vals.get(v.strip(), True)
  return bool(v)


# Environment.

def env_max_pixels() -> int:
  'The canvas area ceiling, from CHARTLAY_MAX_PIXELS. Defaults to 4096*4096.'
  return int(environ.get('CHARTLAY_MAX_PIXELS', str(4096*4096)))


def env_measure() -> str:
  'The default text measurer name, from CHARTLAY_MEASURE: "pillow" (the default) or "approx".'
  return environ.get('CHARTLAY_MEASURE', 'pillow')


def env_watermark() -> str|None:
  'Watermark text stamped on every chart, from CHARTLAY_WATERMARK. Unset or empty means none.'
  return environ.get('CHARTLAY_WATERMARK') or None


def is_dbg() -> bool:
  'Return True if the environment has WEB_DBG set to a common true-like string value.'
  return bool_str_vals.get(environ.get('WEB_DBG', '0'), False)


def web_host() -> str:
  'Get the web server host name specified by the environment variable WEB_HOST. Defaults to `localhost`.'
  return environ.get('WEB_HOST', 'localhost')


def web_port() -> int:
  'Get the server port specified by the environment variable WEB_PORT. Defaults to 8000.'
  return int(environ.get('WEB_PORT', '8000'))


def measurer_named(name:str) -> Measurer:
  try: return measurers[name]
  except KeyError as e: raise ValueError(f'unknown measurer: {name!r}; expected one of {sorted(measurers)}.') from e


@dataclass(frozen=True)
class RenderConfig:
  max_pixels:int = field(default_factory=env_max_pixels)
  debug_boxes:bool = False
  dbg:bool = field(default_factory=is_dbg) # Trace layout boxes to stderr.
  watermark:str|None = field(default_factory=env_watermark)
  measure:Measurer = field(default_factory=lambda: measurer_named(env_measure()))


def check_canvas(width:float, height:float, max_pixels:int) -> None:
  'Reject canvases that are negative, non-finite, or whose area exceeds `max_pixels`.'
  if not (isfinite(width) and isfinite(height)):
    raise CanvasSizeError(f'canvas size must be finite: {width!r} x {height!r}.')
  if width < 0 or height < 0:
    raise CanvasSizeError(f'canvas size must not be negative: {width!r} x {height!r}.')
  if width * height > max_pixels:
    raise CanvasSizeError(f'canvas area {width*height:.0f} exceeds the maximum of {max_pixels} pixels.')


# Request fields.

def accessor(meta:Mapping[str,Any]|None, name:str) -> Callable[[Mapping[str,Any]],Any]:
  '''
  Build a field getter for `name`, honoring the alias table `meta`:
  if meta maps `name` to another field name, rows are read at that field instead.
  Missing fields read as None.
  '''
  key = meta.get(name, name) if meta else name
  if not isinstance(key, str): key = name
  return lambda row: row.get(key)


def as_list(v:Any) -> list[Any]:
  'Normalize a scalar-or-list request value to a list; None becomes empty.'
  if v is None: return []
  if isinstance(v, (list, tuple)): return list(v)
  return [v]



class ChartOpts:
  '''
  Read access to a chart options object with per-field defaults.
  Nested objects (e.g. `valueAxis`) are wrapped by `sub` and fall back to the parent for shared label options.
  '''

  def __init__(self, options:Mapping[str,Any]|None, parent:'ChartOpts|None'=None) -> None:
    self.options:Mapping[str,Any] = options or {}
    self.parent = parent


  def __repr__(self) -> str: return f'ChartOpts({dict(self.options)!r})'


  def get(self, name:str, default:Any=None) -> Any:
    v = self.options.get(name)
    return default if v is None else v


  def inherited(self, name:str, default:Any=None) -> Any:
    'Look up `name` here, then in the parent options.'
    v = self.options.get(name)
    if v is not None: return v
    if self.parent is not None: return self.parent.inherited(name, default)
    return default


  def flag(self, name:str, default=False) -> bool:
    v = self.options.get(name)
    return default if v is None else parse_bool(v)


  def number(self, name:str, default:float) -> float:
    'A numeric option; numeric strings are accepted, anything else is a ValueError.'
    v = self.get(name, default)
    if isinstance(v, bool): raise ValueError(f'option {name!r} is not a number: {v!r}')
    try: return float(v)
    except (TypeError, ValueError) as e: raise ValueError(f'option {name!r} is not a number: {v!r}') from e


  def sub(self, *names:str) -> 'ChartOpts':
    '''
    Wrap the nested objects present among `names`, merged so that earlier names take precedence,
    e.g. `chart.sub('timeAxis', 'mainAxis')`.
    '''
    merged:dict[str,Any] = {}
    for name in reversed(names):
      v = self.options.get(name)
      if isinstance(v, Mapping): merged.update(v)
    return ChartOpts(merged, parent=self)


  def dims(self, defaults:Mapping[str,DimSpec], env:UnitEnv) -> ChartDims:
    return ChartDims(self.options, defaults, env)


  def px(self, name:str, default:DimSpec, env:UnitEnv) -> float:
    return resolve_dim(dim(self.get(name, default)), env)


  def colors(self, name:str, default:list[str]) -> list[str]:
    return as_list(self.get(name)) or list(default)


  def font(self, role:str, size:float, default_family='Helvetica, sans-serif') -> Font:
    '''
    The font for `role` (e.g. 'label', 'title', 'legend').
    Family and weight fall back to the label font options.
    '''
    family = self.get(f'{role}FontFamily') or self.inherited('labelFontFamily', default_family)
    weight = self.get(f'{role}FontWeight') or self.inherited('labelFontWeight', 'normal')
    return Font(family, size, weight)


  def formatter(self) -> Formatter:
    'The number formatter from the label options, consulting parent options for unset fields.'
    return number_formatter(
      locale=self.inherited('locale', 'de-DE'),
      style=self.inherited('labelStyle', 'decimal'),
      precision=int(self.inherited('labelPrecision', 2)),
      currency=self.inherited('labelCurrency', 'EUR'))



@dataclass(frozen=True)
class LegendConfig:
  show:bool
  position:LegendPos
  align:LegendAlign
  item_per_row:bool
  fixed_size:DimSpec|None


def legend_config(chart:ChartOpts, default_position=LegendPos.bottom, allowed:tuple[LegendPos,...]=tuple(LegendPos),
 default_show=True) -> LegendConfig:
  'Read the legend options of a chart; unknown or disallowed values fall back to the defaults.'
  position = _enum_val(LegendPos, chart.get('legendPosition'), default_position)
  if position not in allowed: position = default_position
  return LegendConfig(
    show=chart.flag('showLegend', default_show),
    position=position,
    align=_enum_val(LegendAlign, chart.get('legendAlign'), LegendAlign.center),
    item_per_row=chart.flag('legendItemPerRow', False),
    fixed_size=chart.get('legendSize'))


def _enum_val(enum_type:Any, v:Any, default:Any) -> Any:
  try: return enum_type(v)
  except ValueError: return default
