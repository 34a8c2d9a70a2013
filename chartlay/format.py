# Dedicated to the public domain under CC0: https://creativecommons.org/publicdomain/zero/1.0/.

'''
Number and date label formatting.
Layout code only sees a `Formatter`; `number_formatter` is the default implementation,
covering the separators and currency placement of a handful of locales.
'''

from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Sequence


Formatter = Callable[[float], str]

nbsp = '\u00a0'


@dataclass(frozen=True, slots=True)
class LocaleFmt:
  group:str
  decimal:str
  currency_before:bool
  percent_space:bool


locales:dict[str,LocaleFmt] = {
  'de-DE': LocaleFmt('.', ',', currency_before=False, percent_space=True),
  'de-AT': LocaleFmt(nbsp, ',', currency_before=True, percent_space=True),
  'de-CH': LocaleFmt('’', '.', currency_before=True, percent_space=False),
  'en-US': LocaleFmt(',', '.', currency_before=True, percent_space=False),
  'en-GB': LocaleFmt(',', '.', currency_before=True, percent_space=False),
  'fr-FR': LocaleFmt('\u202f', ',', currency_before=False, percent_space=True),
  'it-IT': LocaleFmt('.', ',', currency_before=False, percent_space=False),
  'nl-NL': LocaleFmt('.', ',', currency_before=True, percent_space=False),
}

currency_symbols = {
  'EUR': '€',
  'USD': '$',
  'GBP': '£',
  'JPY': '¥',
  'CHF': 'CHF',
}


def group_digits(digits:str, sep:str) -> str:
  'Insert `sep` between groups of three integer digits.'
  head = len(digits) % 3 or 3
  parts = [digits[:head]]
  parts.extend(digits[i:i+3] for i in range(head, len(digits), 3))
  return sep.join(parts)


def number_formatter(locale='de-DE', style='decimal', precision=2, currency='EUR') -> Formatter:
  '''
  Create a formatter with exactly `precision` fraction digits.
  `style` is one of 'decimal', 'percent' (the value is a fraction, so 0.5 formats as 50%), or 'currency'.
  Unknown locales fall back to en-US conventions.
  '''
  loc = locales.get(locale, locales['en-US'])
  symbol = currency_symbols.get(currency, currency)

  def fmt(v:float) -> str:
    if style == 'percent': v = v * 100
    neg = v < 0 and round(abs(v), precision) != 0
    whole, _, frac = f'{abs(v):.{precision}f}'.partition('.')
    n = group_digits(whole, loc.group)
    if frac: n = f'{n}{loc.decimal}{frac}'
    if style == 'percent':
      n = f'{n}{nbsp}%' if loc.percent_space else f'{n}%'
    elif style == 'currency':
      n = f'{symbol}{n}' if loc.currency_before else f'{n}{nbsp}{symbol}'
    return f'-{n}' if neg else n

  return fmt


default_months = ('Jan', 'Feb', 'Mar', 'Apr', 'May', 'Jun', 'Jul', 'Aug', 'Sep', 'Oct', 'Nov', 'Dec')


def month_year_formatter(months:Sequence[str]=default_months) -> Callable[[datetime],str]:
  'Format dates as "<month> <year modulo 100>", e.g. "Jan 21" or "Jan 5".'
  if len(months) != 12: raise ValueError(f'expected 12 month names; received {len(months)}.')
  return lambda d: f'{months[d.month - 1]} {d.year % 100}'
