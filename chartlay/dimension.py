# Dedicated to the public domain under CC0: https://creativecommons.org/publicdomain/zero/1.0/.

'''
Symbolic lengths.

A dimension is a number with a unit, or an expression combining other dimensions.
Expressions are lazy: nothing is computed until `value(env)` is called with a unit environment,
a mapping from unit name to the number of pixels per unit.
Units missing from the environment resolve with a factor of 1.0.
'''

import re
from dataclasses import dataclass
from typing import Any, Literal, Mapping, Union


UnitEnv = Mapping[str,float]

units = ('px', '%', 'vw', 'vh', 'vmin', 'vmax', 'em')


class DimensionParseError(ValueError):
  'Raised when a dimension string does not match `<number><unit>`.'



class _DimOps:
  'Combinators shared by all dimension nodes. Each returns a new node and defers evaluation.'

  def value(self, env:UnitEnv) -> float:
    return resolve_dim(self, env) # type: ignore[arg-type]

  def neg(self) -> 'Dim': return Neg(self) # type: ignore[arg-type]

  def plus(self, other:'DimSpec') -> 'Dim': return Combine('add', self, dim(other)) # type: ignore[arg-type]

  def minus(self, other:'DimSpec') -> 'Dim': return Combine('add', self, Neg(dim(other))) # type: ignore[arg-type]

  def min(self, other:'DimSpec') -> 'Dim': return Combine('min', self, dim(other)) # type: ignore[arg-type]

  def max(self, other:'DimSpec') -> 'Dim': return Combine('max', self, dim(other)) # type: ignore[arg-type]

  def lerp(self, other:'DimSpec', t:float) -> 'Dim':
    'Interpolate linearly towards `other`; t=0 is self, t=1 is `other`.'
    return Lerp(self, dim(other), t) # type: ignore[arg-type]

  def __neg__(self) -> 'Dim': return self.neg()

  def __add__(self, other:'DimSpec') -> 'Dim': return self.plus(other)

  def __sub__(self, other:'DimSpec') -> 'Dim': return self.minus(other)



@dataclass(frozen=True, slots=True)
class Leaf(_DimOps):
  number:float
  unit:str = 'px'

  def __str__(self) -> str: return f'{_fmt_num(self.number)}{self.unit}'


@dataclass(frozen=True, slots=True)
class Neg(_DimOps):
  a:'Dim'


@dataclass(frozen=True, slots=True)
class Combine(_DimOps):
  op:Literal['add', 'min', 'max']
  a:'Dim'
  b:'Dim'


@dataclass(frozen=True, slots=True)
class Lerp(_DimOps):
  a:'Dim'
  b:'Dim'
  t:float


Dim = Union[Leaf, Neg, Combine, Lerp]
DimSpec = Union[int, float, str, Dim]

zero = Leaf(0, 'px')


def resolve_dim(d:Dim, env:UnitEnv) -> float:
  'Evaluate a dimension expression against `env`.'
  match d:
    case Leaf(number, unit): return number * env.get(unit, 1.0)
    case Neg(a): return -resolve_dim(a, env)
    case Combine('add', a, b): return resolve_dim(a, env) + resolve_dim(b, env)
    case Combine('min', a, b): return min(resolve_dim(a, env), resolve_dim(b, env))
    case Combine('max', a, b): return max(resolve_dim(a, env), resolve_dim(b, env))
    case Lerp(a, b, t):
      va = resolve_dim(a, env)
      return va + (resolve_dim(b, env) - va) * t
  raise TypeError(f'not a dimension: {d!r}')


_dim_re = re.compile(r'\s*(?P<number>[-+]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][-+]?\d+)?)\s*(?P<unit>[A-Za-z]+|%)\s*')

def parse_dim(text:str) -> Leaf:
  'Parse a string of the form `<number><unit>`, e.g. "2.5vmin" or "20px".'
  m = _dim_re.fullmatch(text)
  if not m: raise DimensionParseError(f'invalid dimension: {text!r}')
  return Leaf(float(m['number']), m['unit'])


def dim(spec:DimSpec) -> Dim:
  'Coerce a number (pixels), a dimension string, or an existing dimension to a dimension.'
  if isinstance(spec, (Leaf, Neg, Combine, Lerp)): return spec
  if isinstance(spec, bool): raise DimensionParseError(f'invalid dimension: {spec!r}')
  if isinstance(spec, (int, float)): return Leaf(spec, 'px')
  if isinstance(spec, str): return parse_dim(spec)
  raise DimensionParseError(f'invalid dimension: {spec!r}')


def unit_env(width:float, height:float, em:float|None=None, percent:float|None=None) -> dict[str,float]:
  '''
  Create the unit environment for a canvas of the given size.
  `em` is the pixel size of the reference font, if known.
  `percent` is the reference length for `%`; it defaults to the smaller side.
  '''
  vmin = min(width, height)
  env = {
    'px': 1.0,
    'vw': width / 100,
    'vh': height / 100,
    'vmin': vmin / 100,
    'vmax': max(width, height) / 100,
    '%': (vmin if percent is None else percent) / 100,
  }
  if em is not None: env['em'] = em
  return env


def with_units(env:UnitEnv, **factors:float) -> dict[str,float]:
  'Return a copy of `env` with the given unit factors replaced.'
  return {**env, **factors}


def box_env(env:UnitEnv, width:float, height:float) -> dict[str,float]:
  'Return a copy of `env` with the viewport units rescoped to a box of the given size.'
  vmin = min(width, height)
  return with_units(env, vw=width/100, vh=height/100, vmin=vmin/100, vmax=max(width, height)/100, **{'%': vmin/100})



class ChartDims:
  '''
  Named dimension options of a chart, resolved against a bound environment.
  Options missing from the chart fall back to `defaults`.
  '''

  def __init__(self, options:Mapping[str,Any], defaults:Mapping[str,DimSpec], env:UnitEnv) -> None:
    self.options = options
    self.defaults = defaults
    self.env = env


  def dim(self, name:str) -> Dim:
    spec = self.options.get(name)
    if spec is None: spec = self.defaults[name]
    return dim(spec)


  def px(self, name:str) -> float:
    return resolve_dim(self.dim(name), self.env)


  def rebind(self, env:UnitEnv) -> 'ChartDims':
    return ChartDims(self.options, self.defaults, env)


def _fmt_num(n:float) -> str:
  i = int(n)
  return str(i) if i == n else str(n)
