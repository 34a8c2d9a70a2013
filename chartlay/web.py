# Dedicated to the public domain under CC0: https://creativecommons.org/publicdomain/zero/1.0/.

'''
The chart rendering HTTP service.

`POST /{style}/{format}/` renders the JSON request body and responds with the image.
Every request body is kept in a small in-memory ring log, retrievable by the id sent back in `X-Request-Id`.
'''

from dataclasses import dataclass
from http import HTTPStatus
from itertools import count
from random import random
from typing import Any

from starlette.applications import Starlette
from starlette.concurrency import run_in_threadpool
from starlette.exceptions import HTTPException
from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from starlette.routing import Route

from .config import is_dbg, RenderConfig
from .io import errL
from .render import render, renderers, styles, UnknownStyleError


media_types = {
  'svg': 'image/svg+xml',
}


class ClientError(Exception):
  'A malformed request body; reported to the client as 400 Bad Request.'


@dataclass(frozen=True)
class RequestLogEntry:
  id:str
  data:Any



class RequestLog:
  'A fixed-size ring buffer of request bodies.'

  def __init__(self, length:int=64) -> None:
    if length < 1: raise ValueError(f'request log length must be positive: {length}')
    self.entries:list[RequestLogEntry|None] = [None] * length
    self.current = 0
    self.counter = count()


  def __len__(self) -> int: return sum(1 for e in self.entries if e is not None)


  def add(self, data:Any) -> str:
    'Record `data`, evicting the oldest entry when full. Returns the new entry id.'
    entry = RequestLogEntry(self.new_id(), data)
    self.entries[self.current] = entry
    self.current = (self.current + 1) % len(self.entries)
    return entry.id


  def get(self, id:str) -> RequestLogEntry|None:
    for e in self.entries:
      if e is not None and e.id == id: return e
    return None


  def new_id(self, prefix='r') -> str:
    return f'{prefix}{next(self.counter)}{to_base36(int(random() * 1e8))}'


def to_base36(n:int) -> str:
  digits = '0123456789abcdefghijklmnopqrstuvwxyz'
  if n == 0: return '0'
  s = []
  while n:
    n, r = divmod(n, 36)
    s.append(digits[r])
  return ''.join(reversed(s))



def app(config:RenderConfig|None=None, log_length:int=64) -> Starlette:
  'Create the service application. `uvicorn` calls this as a factory.'
  request_log = RequestLog(log_length)
  render_config = config or RenderConfig()


  async def render_chart(request:Request) -> Response:
    style = request.path_params['style']
    fmt = request.path_params['format']
    if style not in styles or fmt not in renderers:
      raise HTTPException(HTTPStatus.NOT_FOUND, f'unknown chart style or format: {style}/{fmt}')
    try: body = await request.json()
    except ValueError as e: raise HTTPException(HTTPStatus.BAD_REQUEST, f'invalid JSON body: {e}') from e
    req_id = request_log.add(body)
    try:
      if not isinstance(body, dict): raise ClientError('request body must be a JSON object.')
      content = await run_in_threadpool(render, style, fmt, body, render_config)
    except UnknownStyleError as e:
      raise HTTPException(HTTPStatus.NOT_FOUND, f'unknown chart style or format: {e}') from e
    except (ClientError, ValueError) as e:
      if render_config.dbg: errL(f'chartlay: {req_id}: {e}')
      return JSONResponse({'error': str(e), 'id': req_id}, status_code=HTTPStatus.BAD_REQUEST,
        headers={'X-Request-Id': req_id})
    return Response(content, media_type=media_types[fmt], headers={'X-Request-Id': req_id})


  async def get_log_entry(request:Request) -> Response:
    entry = request_log.get(request.path_params['id'])
    if entry is None: raise HTTPException(HTTPStatus.NOT_FOUND, 'no such request id.')
    return JSONResponse({'id': entry.id, 'data': entry.data})


  routes = [
    Route('/{style}/{format}/', render_chart, methods=['POST']),
    Route('/log/{id}', get_log_entry, methods=['GET']),
  ]
  web_app = Starlette(routes=routes, debug=is_dbg())
  web_app.state.request_log = request_log
  return web_app
