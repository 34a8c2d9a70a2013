#!/usr/bin/env python3
# Dedicated to the public domain under CC0: https://creativecommons.org/publicdomain/zero/1.0/.

import json
from argparse import ArgumentParser
from sys import stdin, stdout

from chartlay.config import measurer_named, RenderConfig
from chartlay.io import errL
from chartlay.render import render_svg, styles


def main() -> None:
  arg_parser = ArgumentParser(description='Render a chart specification (JSON request body) to SVG.')
  arg_parser.add_argument('style', choices=sorted(styles), help='chart style.')
  arg_parser.add_argument('spec', help='path to the JSON chart specification; "-" reads stdin.')
  arg_parser.add_argument('-o', '-out', dest='out', help='output path. Defaults to stdout.')
  arg_parser.add_argument('-debug', action='store_true', help='outline the layout boxes and trace them to stderr.')
  arg_parser.add_argument('-measure', choices=['pillow', 'approx'], default=None, help='text measurer.')
  args = arg_parser.parse_args()

  try:
    if args.spec == '-':
      body = json.load(stdin)
    else:
      with open(args.spec) as f: body = json.load(f)
  except (OSError, ValueError) as e: exit(f'render-chart: could not read spec: {e}')

  config_args = {}
  if args.measure: config_args['measure'] = measurer_named(args.measure)
  if args.debug: config_args.update(debug_boxes=True, dbg=True)
  config = RenderConfig(**config_args)

  try: svg = render_svg(args.style, body, config)
  except ValueError as e: exit(f'render-chart: {e}')

  if args.out:
    with open(args.out, 'wb') as f: f.write(svg)
    if args.debug: errL(f'render-chart: wrote {args.out}')
  else:
    stdout.buffer.write(svg)


if __name__ == '__main__': main()
