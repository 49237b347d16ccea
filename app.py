#!/usr/bin/env python3
import logging
import os
import sys
from launcherz import create_app, ensure_state_dir, BIND, PORT, LOG_LEVEL

def _resolve_state_dir() -> str:
    if len(sys.argv) >= 2:
        return os.path.abspath(sys.argv[1])
    return os.path.abspath(os.environ.get("LAUNCHERZ_HOME", os.getcwd()))

if __name__ == "__main__":
    logging.basicConfig(
        level=LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    state_dir = _resolve_state_dir()
    ensure_state_dir(state_dir)
    app = create_app(state_dir)
    # one request at a time: the controller expects a single writer
    app.run(host=BIND, port=PORT, debug=False, threaded=False)
