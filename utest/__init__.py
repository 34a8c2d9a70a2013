# Dedicated to the public domain under CC0: https://creativecommons.org/publicdomain/zero/1.0/.

'''
utest is a tiny unit testing library.
Each test is a plain function call at module level; failures are reported to stderr as they occur,
and a process with any failures exits with status 1.
'''

import atexit as _atexit
import inspect as _inspect
from os.path import relpath as _rel_path
from sys import stderr as _stderr
from traceback import format_exception as _format_exception
from typing import Any, Callable, Iterable, TypeVar


__all__ = [
  'utest',
  'utest_call',
  'utest_close',
  'utest_exc',
  'utest_seq',
  'utest_seq_close',
  'utest_val',
]


_test_count = 0
_failure_count = 0


_C = TypeVar('_C', bound=Callable)
def utest_call(callable:_C) -> _C:
  'A function decorator to call the defined function immediately. Useful for wrapping test state in a local function scope.'
  callable()
  return callable


def utest(exp:Any, fn:Callable, *args:Any, **kwargs:Any) -> None:
  '''
  Invoke `fn` with `args` and `kwargs`.
  Log a test failure if an exception is raised or the returned value does not equal `exp`.
  '''
  _count()
  try: ret = fn(*args, **kwargs)
  except Exception as exc:
    _failure(subj=fn, args=args, kwargs=kwargs, exp_label='value', exp=exp, exc=exc)
    return
  if exp != ret:
    _failure(subj=fn, args=args, kwargs=kwargs, exp_label='value', exp=exp, ret=ret)


def utest_exc(exp_exc:Any, fn:Callable, *args:Any, **kwargs:Any) -> None:
  '''
  Invoke `fn` with `args` and `kwargs`.
  Log a test failure unless an exception matching `exp_exc` is raised.
  `exp_exc` may be an exception type, an exception instance (type and args are compared), or the expected repr.
  '''
  _count()
  try: ret = fn(*args, **kwargs)
  except Exception as exc:
    if not _exc_matches(exp_exc, exc):
      _failure(subj=fn, args=args, kwargs=kwargs, exp_label='exception', exp=exp_exc, exc=exc)
    return
  _failure(subj=fn, args=args, kwargs=kwargs, exp_label='exception', exp=exp_exc, ret=ret)


def utest_seq(exp_seq:Iterable[Any], fn:Callable, *args:Any, **kwargs:Any) -> None:
  '''
  Invoke `fn` with `args` and `kwargs`, and convert the resulting iterable into a list.
  Log a test failure if an exception is raised, or if the items differ from `exp_seq`.
  '''
  _count()
  exp = list(exp_seq)
  try: ret = list(fn(*args, **kwargs))
  except Exception as exc:
    _failure(subj=fn, args=args, kwargs=kwargs, exp_label='sequence', exp=exp, exc=exc)
    return
  if exp != ret:
    _failure(subj=fn, args=args, kwargs=kwargs, exp_label='sequence', exp=exp, ret=ret)


def utest_val(exp_val:Any, act_val:Any, desc='<value>') -> None:
  'Log a test failure if `exp_val` does not equal `act_val`.'
  _count()
  if exp_val != act_val:
    _failure(subj=desc, exp_label='value', exp=exp_val, ret=act_val)


def utest_close(exp_val:float, act_val:float, desc='<value>', tol=1e-6) -> None:
  'Log a test failure if `act_val` differs from `exp_val` by more than `tol`.'
  _count()
  try: ok = abs(exp_val - act_val) <= tol
  except TypeError: ok = False
  if not ok:
    _failure(subj=desc, exp_label=f'value (±{tol})', exp=exp_val, ret=act_val)


def utest_seq_close(exp_seq:Iterable[float], act_seq:Iterable[float], desc='<sequence>', tol=1e-6) -> None:
  'Log a test failure if the sequences differ in length or any pair of items differs by more than `tol`.'
  _count()
  exp = list(exp_seq)
  act = list(act_seq)
  if len(exp) != len(act) or any(abs(e - a) > tol for e, a in zip(exp, act)):
    _failure(subj=desc, exp_label=f'sequence (±{tol})', exp=exp, ret=act)


def _count() -> None:
  global _test_count
  _test_count += 1


_no_ret = object()

def _failure(subj:Any, exp_label:str, exp:Any, args:tuple[Any,...]=(), kwargs:dict[str,Any]={}, ret:Any=_no_ret,
 exc:BaseException|None=None) -> None:
  global _failure_count
  _failure_count += 1

  info = _inspect.getframeinfo(_inspect.stack()[2][0]) # The caller of the utest function.
  path = _rel_path(info.filename)
  if '/' not in path: path = f'./{path}'
  name = getattr(subj, '__qualname__', None) or repr(subj)
  _errL(f'\n{path}:{info.lineno}: utest failure: {name}')
  for i, arg in enumerate(args): _errL(f'  arg {i} = {arg!r}')
  for k, arg in kwargs.items(): _errL(f'  arg {k} = {arg!r}')

  exp_label_colon = f'expected {exp_label}:'
  if exc is None:
    res_label_colon = 'returned:'
    res = ret
  else:
    res_label_colon = 'raised exception:'
    res = exc
  width = max(len(exp_label_colon), len(res_label_colon))
  _errL(f'  {exp_label_colon:{width}} {exp!r}')
  _errL(f'  {res_label_colon:{width}} {res!r}')
  if exc is not None:
    _errL()
    _stderr.write(''.join(_format_exception(type(exc), exc, exc.__traceback__)))
  _errL()


def _exc_matches(exp:Any, act:BaseException) -> bool:
  if isinstance(exp, str): return exp == repr(act)
  if isinstance(exp, type): return isinstance(act, exp)
  return type(exp) == type(act) and exp.args == act.args


def _errL(*items:Any) -> None: print(*items, sep='', file=_stderr)


@_atexit.register
def _report() -> None:
  'At process exit, if any test failed, print a summary and force the process to exit with status 1.'
  from os import _exit
  if _failure_count > 0:
    _errL(f'\nutest ran: {_test_count}; failed: {_failure_count}')
    _stderr.flush()
    _exit(1) # Raising SystemExit has no effect in an atexit handler.
