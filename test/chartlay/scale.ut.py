# Dedicated to the public domain under CC0: https://creativecommons.org/publicdomain/zero/1.0/.

from datetime import datetime

from chartlay.scale import (BandScale, day, extent, LinearScale, month, nice, pad_extent, quarter, tick_increment, tick_step,
  ticks, time_tick_interval, time_ticks, TimeScale, to_datetime, week, year)
from utest import utest, utest_close, utest_exc, utest_seq, utest_val


utest([0, 50, 100], ticks, 0, 100, 3)
utest([0.0, 0.2, 0.4, 0.6, 0.8, 1.0], ticks, 0, 1, 5)
utest([100, 50, 0], ticks, 100, 0, 3)
utest([0, 10, 20, 30, 40, 50, 60, 70, 80, 90, 100], ticks, 0, 100)
utest([-10, -5, 0, 5, 10], ticks, -10, 10, 4)
utest([1], ticks, 1, 1, 5)
utest([], ticks, 0, 1, 0)
utest([], ticks, 0, 1, -2)
utest([], ticks, 0, 1, float('inf'))
utest((0, 1), nice, 0, 1, float('inf'))

utest(50, tick_increment, 0, 100, 3)
utest(-5, tick_increment, 0, 1, 5)
utest(0, tick_increment, 1, 1, 5)
utest(50, tick_step, 0, 100, 3)
utest(-50, tick_step, 100, 0, 3)
utest(0.2, tick_step, 0, 1, 5)

utest((0, 100), nice, 0.5, 97, 3)
utest((100, 0), nice, 97, 0.5, 3)
utest((0.0, 1.0), nice, 0.04, 0.96, 5)


s = LinearScale((0, 100), (200, 0))
utest(150.0, s, 25)
utest(25.0, s.invert, 150)
utest(5.0, LinearScale((5, 5), (0, 10)), 5)
utest((0.0, 100.0), lambda: s.nice(3).domain)
utest((0.0, 1.0), lambda: s.with_range((0, 1)).range)


b = BandScale(['a', 'b', 'c', 'd'], (0, 100))
utest_val((25, 25), (b.step, b.bandwidth), 'band step and width')
utest_seq([0, 25, 50, 75], map, b, 'abcd')
utest(37.5, b.center, 'b')

b = BandScale(['a', 'b'], (0, 100), padding_inner=0.5)
utest_close(100/1.5, b.step, 'padded step')
utest_close(100/3, b.bandwidth, 'padded bandwidth')
utest_close(100/1.5, b('b'), 'padded band start')

b = BandScale(['a', 'b'], (0, 100), padding_inner=0.5, padding_outer=0.25)
utest_close(100/2, b.step, 'outer padded step')
utest_close(12.5, b('a'), 'outer padding shifts the first band')

utest(50.0, BandScale(['a', 'b'], (100, 0)), 'a')
utest_exc(KeyError, BandScale(['a'], (0, 1)), 'z')


# Time intervals.
utest(datetime(2021, 1, 3), week.floor, datetime(2021, 1, 6, 15)) # Weeks start on Sunday.
utest(datetime(2021, 4, 1), quarter.floor, datetime(2021, 5, 17))
utest(datetime(2021, 6, 1), month.ceil, datetime(2021, 5, 17))
utest(datetime(2021, 5, 1), month.ceil, datetime(2021, 5, 1))
utest(datetime(2021, 1, 1), year.offset, datetime(2020, 1, 1))
utest([datetime(2021, 1, 2), datetime(2021, 1, 3)], day.range, datetime(2021, 1, 1, 12), datetime(2021, 1, 4))
utest([datetime(2021, 1, 1), datetime(2021, 3, 1), datetime(2021, 5, 1)], month.every(2).range,
  datetime(2021, 1, 1), datetime(2021, 6, 1))

jan = datetime(2021, 1, 1)
dec = datetime(2021, 12, 31)
utest('month', lambda: time_tick_interval(jan, dec, 10).name)
jan_dec_ticks = time_ticks(jan, dec, 10)
utest_val(12, len(jan_dec_ticks), 'monthly ticks over a year')
utest_val((jan, datetime(2021, 12, 1)), (jan_dec_ticks[0], jan_dec_ticks[-1]), 'monthly tick ends')
niced = TimeScale((jan, dec)).nice(10)
utest_val((jan, datetime(2022, 1, 1)), niced.domain, 'niced time domain')
utest_val(13, len(niced.ticks(10)), 'niced monthly ticks')
utest_val(list(reversed(jan_dec_ticks)), time_ticks(dec, jan, 10), 'reversed time ticks')
utest([datetime(2021, 1, 1), datetime(2021, 4, 1), datetime(2021, 7, 1), datetime(2021, 10, 1)], time_ticks, jan, dec, quarter)
for count in [0, -1, float('nan'), float('inf')]:
  utest([], time_ticks, jan, dec, count)
  utest_val((jan, dec), TimeScale((jan, dec)).nice(count).domain, f'nice with tick count {count}')

ts = TimeScale((jan, datetime(2021, 1, 11)), (0, 100))
utest(50.0, ts, datetime(2021, 1, 6))

utest(datetime(1970, 1, 1), to_datetime, 0)
utest(datetime(1970, 1, 2), to_datetime, 86400000)
utest(datetime(2021, 1, 1), to_datetime, '2021-01-01')
utest(datetime(2020, 12, 31, 23), to_datetime, '2021-01-01T00:00:00+01:00')
utest_exc(ValueError, to_datetime, None)
utest_exc(ValueError, to_datetime, [2021])
utest_exc(ValueError, to_datetime, 'yesterday')


utest((1, 3), extent, [3, 1, 2])
utest((1, 5), extent, [3, 1, 2], 5)
utest((5, 5), extent, [], 5)
utest((0.0, 0.0), extent, [])
utest((-5.0, 105.0), pad_extent, 0, 100, 0.05)
