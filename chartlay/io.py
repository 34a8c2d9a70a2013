# Dedicated to the public domain under CC0: https://creativecommons.org/publicdomain/zero/1.0/.

'Diagnostic printing to stderr.'

from sys import stderr
from typing import Any


def errL(*items:Any, sep='', flush=False) -> None:
  "Write items to std err; sep='', end='\\n'."
  print(*items, sep=sep, end='\n', file=stderr, flush=flush)


def errBox(label:str, box:Any) -> None:
  'Trace a named layout box.'
  errL(f'chartlay: {label}: {box}')
