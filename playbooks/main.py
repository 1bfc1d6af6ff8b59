import logging
import os

from playbooks.api.main import app
from playbooks.core import settings

if __name__ == "__main__":
    import uvicorn

    logging.basicConfig(level=settings.log_level("INFO"), format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    host = os.getenv("PLAYBOOKS_HOST", "127.0.0.1")
    port = int(os.getenv("PLAYBOOKS_PORT", "8001"))
    uvicorn.run(app, host=host, port=port)
