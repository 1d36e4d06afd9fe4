import uvicorn

from srteen.core.app_factory import create_app
from srteen.core.config import settings

app = create_app()


def run() -> None:
    """Serve the app with uvicorn on the configured host/port."""
    uvicorn.run(app, host=settings.app.host, port=settings.app.port, log_config=None)


if __name__ == "__main__":
    run()
