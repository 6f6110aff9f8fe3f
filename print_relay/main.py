from dotenv import load_dotenv
load_dotenv()

import uvicorn

from print_relay import env
from print_relay.api import app


def run():
    # uvicorn handles SIGINT/SIGTERM and closes the server gracefully
    uvicorn.run(app, host=env.HOST, port=env.PORT, log_level=env.LOG_LEVEL.lower())


if __name__ == "__main__":
    run()
