# Dedicated to the public domain under CC0: https://creativecommons.org/publicdomain/zero/1.0/.

'''
Scales and tick generation.
Tick and nice computations follow the d3-array and d3-scale algorithms,
so that charts produce the same ticks as their browser counterparts.
'''

from bisect import bisect_right
from datetime import datetime, timedelta, timezone
from math import ceil, floor, inf, isfinite, log10, sqrt
from typing import Any, Callable, Hashable, Iterable


_e10 = sqrt(50)
_e5 = sqrt(10)
_e2 = sqrt(2)


def _js_round(v:float) -> int:
  'Round half up, as in JavaScript.'
  return floor(v + 0.5)


def _tick_spec(start:float, stop:float, count:float) -> tuple[int,int,float]:
  step = (stop - start) / max(0, count)
  power = floor(log10(step))
  error = step / 10**power
  factor = 10 if error >= _e10 else 5 if error >= _e5 else 2 if error >= _e2 else 1
  if power < 0:
    inc = 10**-power / factor
    i1 = _js_round(start * inc)
    i2 = _js_round(stop * inc)
    if i1 / inc < start: i1 += 1
    if i2 / inc > stop: i2 -= 1
    inc = -inc
  else:
    inc = 10**power * factor
    i1 = _js_round(start / inc)
    i2 = _js_round(stop / inc)
    if i1 * inc < start: i1 += 1
    if i2 * inc > stop: i2 -= 1
  if i2 < i1 and 0.5 <= count < 2: return _tick_spec(start, stop, count * 2)
  return (i1, i2, inc)


def tick_increment(start:float, stop:float, count:float) -> float:
  '''
  The tick increment for the given domain and count.
  Negative results denote the reciprocal of a fractional step, e.g. -10 for a step of 0.1.
  '''
  if not (0 < count < inf) or start == stop or not (isfinite(start) and isfinite(stop)): return 0
  return _tick_spec(start, stop, count)[2]


def tick_step(start:float, stop:float, count:float) -> float:
  reverse = stop < start
  inc = tick_increment(stop, start, count) if reverse else tick_increment(start, stop, count)
  if inc == 0: return 0
  return (-1 if reverse else 1) * (1 / -inc if inc < 0 else inc)


def ticks(start:float, stop:float, count:float=10) -> list[float]:
  'Approximately `count` round values spaced evenly within [start, stop], inclusive.'
  if not (0 < count < inf): return []
  if start == stop: return [start]
  if not (isfinite(start) and isfinite(stop)): return []
  reverse = stop < start
  i1, i2, inc = _tick_spec(stop, start, count) if reverse else _tick_spec(start, stop, count)
  if not (i2 >= i1): return []
  n = i2 - i1 + 1
  if inc < 0: vals = [(i1 + i) / -inc for i in range(n)]
  else: vals = [(i1 + i) * inc for i in range(n)]
  if reverse: vals.reverse()
  return vals


def nice(start:float, stop:float, count:float=10) -> tuple[float,float]:
  'Extend [start, stop] outwards to round values.'
  reverse = stop < start
  if reverse: start, stop = stop, start
  prestep = None
  for _ in range(10):
    step = tick_increment(start, stop, count)
    if step == prestep: break
    if step > 0:
      start = floor(start / step) * step
      stop = ceil(stop / step) * step
    elif step < 0:
      start = ceil(start * step) / step
      stop = floor(stop * step) / step
    else: break
    prestep = step
  return (stop, start) if reverse else (start, stop)



class LinearScale:
  'Maps a numeric domain onto a pixel range.'

  def __init__(self, domain:tuple[float,float]=(0, 1), range:tuple[float,float]=(0, 1)) -> None:
    self.domain = (float(domain[0]), float(domain[1]))
    self.range = (float(range[0]), float(range[1]))


  def __repr__(self) -> str: return f'LinearScale(domain={self.domain}, range={self.range})'


  def __call__(self, v:float) -> float:
    d0, d1 = self.domain
    r0, r1 = self.range
    t = (v - d0) / (d1 - d0) if d1 != d0 else 0.5
    return r0 + (r1 - r0) * t


  def invert(self, px:float) -> float:
    d0, d1 = self.domain
    r0, r1 = self.range
    t = (px - r0) / (r1 - r0) if r1 != r0 else 0.5
    return d0 + (d1 - d0) * t


  def ticks(self, count:float=10) -> list[float]: return ticks(self.domain[0], self.domain[1], count)

  def nice(self, count:float=10) -> 'LinearScale': return LinearScale(nice(*self.domain, count), self.range)

  def with_range(self, range:tuple[float,float]) -> 'LinearScale': return LinearScale(self.domain, range)



class BandScale:
  '''
  Maps distinct keys to evenly spaced bands within a range.
  `padding_inner` is the fraction of each step left empty between bands;
  `padding_outer` is the number of steps left empty before the first and after the last band.
  '''

  def __init__(self, domain:Iterable[Hashable], range:tuple[float,float], padding_inner:float=0, padding_outer:float=0,
   align:float=0.5) -> None:

    self.domain = list(domain)
    self.range = range
    self.padding_inner = min(1, padding_inner)
    self.padding_outer = padding_outer
    self.align = align
    self.index = {k: i for i, k in enumerate(self.domain)}

    n = len(self.domain)
    r0, r1 = range
    reverse = r1 < r0
    start, stop = (r1, r0) if reverse else (r0, r1)
    self.step = (stop - start) / max(1, n - self.padding_inner + self.padding_outer*2)
    start += (stop - start - self.step * (n - self.padding_inner)) * align
    self.bandwidth = self.step * (1 - self.padding_inner)
    values = [start + self.step*i for i, _ in enumerate(self.domain)]
    if reverse: values.reverse()
    self.values = values


  def __repr__(self) -> str: return f'BandScale(n={len(self.domain)}, step={self.step}, bandwidth={self.bandwidth})'


  def __call__(self, key:Hashable) -> float:
    'The start of the band for `key`.'
    return self.values[self.index[key]]


  def center(self, key:Hashable) -> float: return self(key) + self.bandwidth/2



# Time intervals.

def _floor_second(d:datetime) -> datetime: return d.replace(microsecond=0)
def _floor_minute(d:datetime) -> datetime: return d.replace(second=0, microsecond=0)
def _floor_hour(d:datetime) -> datetime: return d.replace(minute=0, second=0, microsecond=0)
def _floor_day(d:datetime) -> datetime: return d.replace(hour=0, minute=0, second=0, microsecond=0)
def _floor_week(d:datetime) -> datetime: return _floor_day(d) - timedelta(days=(d.weekday() + 1) % 7) # Sunday.
def _floor_month(d:datetime) -> datetime: return _floor_day(d).replace(day=1)
def _floor_quarter(d:datetime) -> datetime: return _floor_month(d).replace(month=(d.month - 1) // 3 * 3 + 1)
def _floor_half_year(d:datetime) -> datetime: return _floor_month(d).replace(month=7 if d.month > 6 else 1)
def _floor_year(d:datetime) -> datetime: return _floor_month(d).replace(month=1)


def _add_months(d:datetime, n:int) -> datetime:
  y, m = divmod(d.month - 1 + n, 12)
  return d.replace(year=d.year + y, month=m + 1)


def _fixed_offset(unit:timedelta) -> Callable[[datetime,int],datetime]:
  return lambda d, n: d + unit * n


_epsilon = timedelta(microseconds=1)


class TimeInterval:
  '''
  A calendar interval: a floor function, an offset function,
  and an optional field used to keep only every `step`th boundary.
  '''

  def __init__(self, name:str, floor:Callable[[datetime],datetime], offset:Callable[[datetime,int],datetime],
   field:Callable[[datetime],int]|None=None, step:int=1) -> None:
    self.name = name
    self._floor = floor
    self._offset = offset
    self.field = field
    self.step = step


  def __repr__(self) -> str: return f'TimeInterval({self.name!r}, step={self.step})'


  def _test(self, d:datetime) -> bool:
    return self.step == 1 or self.field is None or self.field(d) % self.step == 0


  def every(self, step:int) -> 'TimeInterval':
    step = floor(step)
    if step <= 1: return self
    return TimeInterval(self.name, self._floor, self._offset, self.field, step)


  def floor(self, d:datetime) -> datetime:
    d = self._floor(d)
    while not self._test(d):
      d = self._floor(d - _epsilon)
    return d


  def offset(self, d:datetime, n:int=1) -> datetime:
    if self.field is None or self.step == 1: return self._offset(d, n * self.step)
    for _ in range(n):
      d = self._offset(d, 1)
      while not self._test(d): d = self._offset(d, 1)
    return d


  def ceil(self, d:datetime) -> datetime:
    return self.floor(self.offset(self.floor(d - _epsilon), 1))


  def range(self, start:datetime, stop:datetime) -> list[datetime]:
    'Interval boundaries in [start, stop).'
    res:list[datetime] = []
    d = self.ceil(start)
    while d < stop:
      res.append(d)
      d = self.floor(self.offset(d, 1))
    return res


second = TimeInterval('second', _floor_second, _fixed_offset(timedelta(seconds=1)), lambda d: d.second)
minute = TimeInterval('minute', _floor_minute, _fixed_offset(timedelta(minutes=1)), lambda d: d.minute)
hour = TimeInterval('hour', _floor_hour, _fixed_offset(timedelta(hours=1)), lambda d: d.hour)
day = TimeInterval('day', _floor_day, _fixed_offset(timedelta(days=1)), lambda d: d.day - 1)
week = TimeInterval('week', _floor_week, _fixed_offset(timedelta(weeks=1)))
month = TimeInterval('month', _floor_month, _add_months, lambda d: d.month - 1)
quarter = TimeInterval('quarter', _floor_quarter, lambda d, n: _add_months(d, 3*n))
half_year = TimeInterval('half-year', _floor_half_year, lambda d, n: _add_months(d, 6*n))
year = TimeInterval('year', _floor_year, lambda d, n: d.replace(year=d.year + n), lambda d: d.year)


named_intervals:dict[str,TimeInterval] = {
  'day': day,
  'week': week,
  'month': month,
  'quarter': quarter,
  'half-year': half_year,
  'year': year,
}


_s = 1.0
_m = 60 * _s
_h = 60 * _m
_d = 24 * _h
_w = 7 * _d
_mo = 30 * _d
_y = 365 * _d

_tick_intervals:list[tuple[TimeInterval,int,float]] = [
  (second, 1, _s), (second, 5, 5*_s), (second, 15, 15*_s), (second, 30, 30*_s),
  (minute, 1, _m), (minute, 5, 5*_m), (minute, 15, 15*_m), (minute, 30, 30*_m),
  (hour, 1, _h), (hour, 3, 3*_h), (hour, 6, 6*_h), (hour, 12, 12*_h),
  (day, 1, _d), (day, 2, 2*_d),
  (week, 1, _w),
  (month, 1, _mo), (month, 3, 3*_mo),
  (year, 1, _y),
]
_tick_durations = [t[2] for t in _tick_intervals]

_epoch = datetime(1970, 1, 1)


def _seconds(d:datetime) -> float: return (d - _epoch).total_seconds()


def time_tick_interval(start:datetime, stop:datetime, count:float) -> TimeInterval:
  'Choose the calendar interval whose tick count best approximates `count`.'
  target = abs(_seconds(stop) - _seconds(start)) / count
  i = bisect_right(_tick_durations, target)
  if i == len(_tick_intervals):
    return year.every(int(tick_step(_seconds(start) / _y, _seconds(stop) / _y, count)))
  if i == 0: return second # Sub-second ticks are not supported.
  t, step, _ = _tick_intervals[i - 1 if target / _tick_durations[i - 1] < _tick_durations[i] / target else i]
  return t.every(step)


def time_ticks(start:datetime, stop:datetime, count:float|TimeInterval=10) -> list[datetime]:
  'Ticks for a time domain, inclusive of both ends; `count` may be a desired count or a fixed interval.'
  reverse = stop < start
  if reverse: start, stop = stop, start
  if not isinstance(count, TimeInterval) and not (0 < count < inf): return []
  interval = count if isinstance(count, TimeInterval) else time_tick_interval(start, stop, count)
  res = interval.range(start, stop + _epsilon)
  if reverse: res.reverse()
  return res


def to_datetime(v:Any) -> datetime:
  '''
  Convert a timestamp to a naive UTC datetime.
  Numbers are milliseconds since the Unix epoch; strings are ISO 8601.
  '''
  if isinstance(v, datetime):
    if v.tzinfo is not None: v = v.astimezone(timezone.utc).replace(tzinfo=None)
    return v
  if isinstance(v, (int, float)): return _epoch + timedelta(milliseconds=v)
  if isinstance(v, str): return to_datetime(datetime.fromisoformat(v))
  raise ValueError(f'not a timestamp: {v!r}')



class TimeScale:
  'Maps a datetime domain onto a pixel range.'

  def __init__(self, domain:tuple[datetime,datetime], range:tuple[float,float]=(0, 1)) -> None:
    self.domain = domain
    self.range = range


  def __repr__(self) -> str: return f'TimeScale(domain={self.domain}, range={self.range})'


  def __call__(self, d:datetime) -> float:
    d0, d1 = self.domain
    r0, r1 = self.range
    span = (d1 - d0).total_seconds()
    t = (d - d0).total_seconds() / span if span else 0.5
    return r0 + (r1 - r0) * t


  def ticks(self, count:float|TimeInterval=10) -> list[datetime]: return time_ticks(self.domain[0], self.domain[1], count)


  def nice(self, count:float|TimeInterval=10) -> 'TimeScale':
    if not isinstance(count, TimeInterval) and not (0 < count < inf): return self
    d0, d1 = self.domain
    interval = count if isinstance(count, TimeInterval) else time_tick_interval(d0, d1, count)
    return TimeScale((interval.floor(d0), interval.ceil(d1)), self.range)


  def with_range(self, range:tuple[float,float]) -> 'TimeScale': return TimeScale(self.domain, range)


def extent(values:Iterable[float], *extra:float) -> tuple[float,float]:
  'The (min, max) of `values` and `extra`; (0, 0) when empty.'
  vals = [*values, *extra]
  if not vals: return (0.0, 0.0)
  return (min(vals), max(vals))


def pad_extent(lo:float, hi:float, extra:float) -> tuple[float,float]:
  'Widen an extent by `extra` times its span on each side.'
  span = hi - lo
  return (lo - span*extra, hi + span*extra)
