# Dedicated to the public domain under CC0: https://creativecommons.org/publicdomain/zero/1.0/.

from datetime import datetime

from chartlay.format import group_digits, month_year_formatter, number_formatter
from utest import utest, utest_exc


utest('1,234,567', group_digits, '1234567', ',')
utest('123', group_digits, '123', ',')
utest('12.345', group_digits, '12345', '.')

de = number_formatter()
utest('1.234,50', de, 1234.5)
utest('0,00', de, 0)
utest('-1.234,50', de, -1234.5)
utest('0,00', de, -0.001) # No negative zero.
utest('1.000.000,00', de, 1e6)

utest('1,234.50', number_formatter('en-US'), 1234.5)
utest('1,235', number_formatter('en-US', precision=0), 1234.6)
utest('1,234.500', number_formatter('xx-XX', precision=3), 1234.5) # Unknown locales use en-US conventions.
utest('1\u00a0234,50', number_formatter('de-AT'), 1234.5)

utest('50,00\u00a0%', number_formatter(style='percent'), 0.5)
utest('50%', number_formatter('en-US', style='percent', precision=0), 0.5)
utest('1.234,50\u00a0€', number_formatter(style='currency'), 1234.5)
utest('$1,234.50', number_formatter('en-US', style='currency', currency='USD'), 1234.5)
utest('-$5.00', number_formatter('en-US', style='currency', currency='USD'), -5)
utest('5,00\u00a0SEK', number_formatter(style='currency', currency='SEK'), 5)

utest('Mar 21', month_year_formatter(), datetime(2021, 3, 5))
utest('Jan 5', month_year_formatter(), datetime(2005, 1, 1))
utest('Mär 21', month_year_formatter(['Jan', 'Feb', 'Mär', 'Apr', 'Mai', 'Jun', 'Jul', 'Aug', 'Sep', 'Okt', 'Nov', 'Dez']),
  datetime(2021, 3, 5))
utest_exc(ValueError, month_year_formatter, ['Jan'])
