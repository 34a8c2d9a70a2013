# Dedicated to the public domain under CC0: https://creativecommons.org/publicdomain/zero/1.0/.

from sys import stderr

import uvicorn

from .config import is_dbg, web_host, web_port


def main() -> None:
  host = web_host()
  port = web_port()
  print(f'Serving chartlay at http://{host}:{port}/', file=stderr)
  uvicorn.run('chartlay.web:app', host=host, port=port, log_level='debug' if is_dbg() else 'info', factory=True)


if __name__ == '__main__': main()
