# Dedicated to the public domain under CC0: https://creativecommons.org/publicdomain/zero/1.0/.

from starlette.testclient import TestClient

from chartlay.config import RenderConfig
from chartlay.text import approx_measure
from chartlay.web import app, RequestLog, to_base36
from utest import utest, utest_call, utest_exc, utest_val


utest('0', to_base36, 0)
utest('z', to_base36, 35)
utest('10', to_base36, 36)


@utest_call
def test_request_log():
  log = RequestLog(2)
  first = log.add({'n': 1})
  second = log.add({'n': 2})
  utest_val(True, first != second, 'ids are distinct')
  utest_val({'n': 1}, log.get(first).data, 'entry data')
  third = log.add({'n': 3})
  utest_val(2, len(log), 'log length is bounded')
  utest_val(None, log.get(first), 'oldest entry evicted')
  utest_val([{'n': 2}, {'n': 3}], [log.get(id).data for id in (second, third)], 'newer entries kept')
  utest_exc(ValueError, RequestLog, 0)


body = {
  'chart': {'width': 800, 'height': 400},
  'data': [{'label': 'A', 'category': 'x', 'value': 3}, {'label': 'B', 'category': 'y', 'value': 5}],
}


@utest_call
def test_render_route():
  client = TestClient(app(RenderConfig(measure=approx_measure, watermark=None, dbg=False), log_length=4))

  r = client.post('/bar/svg/', json=body)
  utest_val(200, r.status_code, 'render status')
  utest_val(True, r.headers['content-type'].startswith('image/svg+xml'), 'SVG media type')
  utest_val(True, r.content.startswith(b'<?xml'), 'SVG document')
  req_id = r.headers['x-request-id']

  r = client.get(f'/log/{req_id}')
  utest_val(200, r.status_code, 'log status')
  utest_val({'id': req_id, 'data': body}, r.json(), 'logged request body')
  utest_val(404, client.get('/log/missing').status_code, 'unknown log id')

  for style in ['pie', 'scatter', 'timeline']:
    utest_val(200, client.post(f'/{style}/svg/', json=body).status_code, f'{style} status')

  utest_val(404, client.post('/area/svg/', json=body).status_code, 'unknown style')
  utest_val(404, client.post('/bar/png/', json=body).status_code, 'unknown format')

  r = client.post('/bar/svg/', json={**body, 'chart': {**body['chart'], 'padX': '20'}})
  utest_val(400, r.status_code, 'bad dimension')
  utest_val(r.headers['x-request-id'], r.json()['id'], 'error response carries the request id')
  utest_val(True, 'invalid dimension' in r.json()['error'], 'error message')

  utest_val(400, client.post('/bar/svg/', json={'chart': {'width': 100000, 'height': 100000}}).status_code, 'oversize canvas')
  utest_val(400, client.post('/bar/svg/', json=[1, 2]).status_code, 'non-object body')
  utest_val(400, client.post('/bar/svg/', json={'chart': {'width': True, 'height': 400}}).status_code, 'boolean canvas width')
  utest_val(400, client.post('/timeline/svg/', json={**body, 'chart': {'valueAxis': {'tickCount': 'many'}}}).status_code,
    'non-numeric tick count')
  utest_val(400, client.post('/bar/svg/', content=b'{', headers={'content-type': 'application/json'}).status_code, 'bad JSON')
  utest_val(400, client.post('/timeline/svg/', json={**body, 'chart': {'timeAxis': {'tickInterval': 'fortnight'}}}).status_code,
    'unknown tick interval')
