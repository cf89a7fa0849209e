import logging

import uvicorn

from mealhub.api.api_run import app
from mealhub.utilities.config import APP_HOST, APP_PORT, LOG_LEVEL
from mealhub.utilities.network import get_local_ip


if __name__ == "__main__":
    logging.basicConfig(
        level=LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    local_ip = get_local_ip()
    print(f"Uvicorn running on http://localhost:{APP_PORT} (Press CTRL+C to quit)")
    if local_ip not in ("127.0.0.1", "localhost"):
        print(f"Accessible from other devices at: http://{local_ip}:{APP_PORT}")
    uvicorn.run(app, host=APP_HOST, port=APP_PORT)
