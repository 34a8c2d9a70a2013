# Dedicated to the public domain under CC0: https://creativecommons.org/publicdomain/zero/1.0/.

'''
The render entry points: choose the driver for a chart style, lay out the request body, and paint it.
'''

from typing import Any, Callable, Mapping

from .charts import ChartLayout, paint_layout, RenderCtx, watermark_shapes
from .charts.bar import layout_bar
from .charts.pie import layout_pie
from .charts.scatter import layout_scatter
from .charts.timeline import layout_timeline
from .config import ChartOpts, check_canvas, parse_bool, RenderConfig
from .dimension import dim
from .svg import SvgPainter


Driver = Callable[[Mapping[str,Any],RenderCtx],ChartLayout]

styles:dict[str,Driver] = {
  'bar': layout_bar,
  'pie': layout_pie,
  'scatter': layout_scatter,
  'timeline': layout_timeline,
}

default_width = 1920
default_height = 1080


class UnknownStyleError(KeyError):
  'Raised for a chart style or output format that has no renderer.'


def layout_chart(style:str, body:Mapping[str,Any], config:RenderConfig|None=None) -> ChartLayout:
  '''
  Lay out one chart.
  The canvas size comes from `chart.width` and `chart.height` (pixels; default 1920x1080)
  and is checked against the configured area ceiling before any layout work.
  '''
  try: driver = styles[style]
  except KeyError as e: raise UnknownStyleError(style) from e
  if config is None: config = RenderConfig()
  chart = ChartOpts(body.get('chart'))
  width = _canvas_px(chart.get('width', default_width))
  height = _canvas_px(chart.get('height', default_height))
  check_canvas(width, height, config.max_pixels)

  debug = body.get('debug')
  debug_boxes = (isinstance(debug, Mapping) and parse_bool(debug.get('boxes'))) or chart.flag('showDebug')
  ctx = RenderCtx.create(width, height, config, debug_boxes=debug_boxes)
  layout = driver(body, ctx)

  if config.watermark:
    font = chart.font('watermark', max(10, min(width, height) / 40))
    layout.watermark.extend(watermark_shapes(ctx, chart, font))
  if ctx.debug_boxes:
    layout.add_debug_boxes()
  if config.dbg:
    ctx.trace(f'{style} measurements', f'{ctx.measure.miss_count} distinct texts')
  return layout


def render_svg(style:str, body:Mapping[str,Any], config:RenderConfig|None=None) -> bytes:
  'Lay out and paint a chart as SVG document bytes.'
  layout = layout_chart(style, body, config)
  painter = SvgPainter(layout.width, layout.height)
  paint_layout(layout, painter)
  return painter.to_bytes()


renderers:dict[str,Callable[[str,Mapping[str,Any],RenderConfig|None],bytes]] = {
  'svg': render_svg,
}


def render(style:str, fmt:str, body:Mapping[str,Any], config:RenderConfig|None=None) -> bytes:
  try: renderer = renderers[fmt]
  except KeyError as e: raise UnknownStyleError(fmt) from e
  if style not in styles: raise UnknownStyleError(style)
  return renderer(style, body, config)


def _canvas_px(v:Any) -> float:
  'Canvas sizes are pixel numbers or pixel dimension strings.'
  if isinstance(v, (int, float)) and not isinstance(v, bool): return float(v)
  return dim(v).value({'px': 1.0})
