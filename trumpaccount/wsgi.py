#setup: python -m venv .venv
#setup: source .venv/bin/activate   # (windows: .venv\Scripts\activate)
#setup: pip install -U pip -e ".[test]"
#setup: flask --app trumpaccount.wsgi run --port 5000 --debug

from __future__ import annotations

import logging

from trumpaccount.app import create_app

app = create_app()


if __name__ == "__main__":
    logging.basicConfig(level=logging.DEBUG, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    app.run(port=5000, debug=True)
