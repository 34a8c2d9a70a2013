# Dedicated to the public domain under CC0: https://creativecommons.org/publicdomain/zero/1.0/.

from chartlay.text import approx_measure, Font, MeasureCache, TextMetrics
from utest import utest, utest_val


calls:list[tuple[Font,str]] = []

def counting(font:Font, text:str) -> TextMetrics:
  calls.append((font, text))
  return TextMetrics(0.5 * font.size * len(text), 0.8 * font.size, 0.2 * font.size)


measure = MeasureCache(counting)
font = Font(size=10)
utest(TextMetrics(20, 8, 2), measure, font, 'abcd')
utest(TextMetrics(20, 8, 2), measure, font, 'abcd')
utest(TextMetrics(40, 16, 4), measure, font.sized(20), 'abcd')
utest_val(2, measure.miss_count, 'each distinct (font, text) is measured once')
utest_val([(font, 'abcd'), (Font(size=20), 'abcd')], calls, 'measurer calls')
utest(25.0, measure.max_width, font, ['ab', 'abcde', ''])
utest(0.0, measure.max_width, font, [])

# Caches are per render.
utest_val(0, MeasureCache(counting).miss_count, 'fresh cache')

utest(10, lambda: TextMetrics(20, 8, 2).height)
utest('bold 12px Inter', lambda: Font('Inter', 12, 'bold').css)
utest('normal 12.5px sans-serif', lambda: Font(size=12.5).css)

utest(TextMetrics(0.0, 0.0, 0.0), approx_measure, font, '')
wide = approx_measure(font, 'WWW')
narrow = approx_measure(font, 'iii')
utest_val(True, wide.width > narrow.width, 'wide glyphs measure wider')
utest_val(True, approx_measure(Font(size=10, weight='bold'), 'abc').width > approx_measure(font, 'abc').width, 'bold is wider')
utest_val(approx_measure(font, 'abc'), approx_measure(font, 'abc'), 'deterministic')
